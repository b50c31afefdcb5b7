import os

# Base de datos en memoria; debe configurarse antes de importar la app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENV"] = "test"

import pytest
from fastapi.testclient import TestClient

from ganaderos.core.config import settings
from ganaderos.core.database import SessionLocal, engine
from ganaderos.main import app
from ganaderos.models import Base
from ganaderos.services.seed import seed_admin


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def admin_headers(client, db):
    seed_admin(db)
    r = client.post('/auth/login', json={
        'email': settings.admin_email,
        'password': settings.admin_password,
    })
    assert r.status_code == 200
    return {'Authorization': f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def operator_headers(client):
    r = client.post('/auth/register', json={'email': 'operador@ganaderos.com', 'password': 'secret123'})
    assert r.status_code == 200
    return {'Authorization': f"Bearer {r.json()['access_token']}"}
