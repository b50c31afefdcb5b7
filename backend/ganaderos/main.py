import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ganaderos.core.config import settings
from ganaderos.core.database import SessionLocal, init_db
from ganaderos.routes.auth import router as auth_router
from ganaderos.routes.health import router as health_router
from ganaderos.routes.movement_records import router as movement_records_router
from ganaderos.routes.reports import router as reports_router
from ganaderos.services.seed import seed_admin


logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    app = FastAPI(title="Ganaderos API", version="0.1.0")

    origins = settings.cors_origins
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router, prefix="/auth", tags=["auth"])
    app.include_router(movement_records_router, prefix="/movement-records", tags=["movement-records"])
    app.include_router(reports_router, prefix="/reports", tags=["reports"])

    return app


app = create_app()

# Only seed the admin user in development
if settings.env == "dev":
    try:
        init_db()
        with SessionLocal() as db:
            seed_admin(db)
    except Exception:
        logger.exception("dev bootstrap failed; continuing without seeded admin")
