import logging

from sqlalchemy.orm import Session

from ganaderos.core.config import settings
from ganaderos.core.roles import Role
from ganaderos.core.security import hash_password
from ganaderos.models.user import User


logger = logging.getLogger(__name__)


def seed_admin(db: Session) -> User:
    """Crea el administrador configurado si todavía no existe."""
    user = db.query(User).filter(User.email == settings.admin_email).first()
    if user:
        return user
    user = User(
        email=settings.admin_email,
        hashed_password=hash_password(settings.admin_password),
        role=Role.admin.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("admin user created email=%s", user.email)
    return user
