#!/usr/bin/env python3
"""
Crea (o actualiza) un usuario administrador.
Uso: python create_admin.py <email> <password>
Sin argumentos usa ADMIN_EMAIL / ADMIN_PASSWORD de la configuración.
"""
import sys

from ganaderos.core.config import settings
from ganaderos.core.database import SessionLocal
from ganaderos.core.roles import Role
from ganaderos.core.security import hash_password
from ganaderos.models.user import User


def create_admin(email: str, password: str) -> None:
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == email).first()
        if user:
            user.role = Role.admin.value
            user.hashed_password = hash_password(password)
            user.is_active = True
            print(f"✓ Usuario '{email}' actualizado a administrador")
        else:
            user = User(email=email, hashed_password=hash_password(password), role=Role.admin.value)
            db.add(user)
            print(f"✓ Administrador '{email}' creado")
        db.commit()
    except Exception as e:
        db.rollback()
        print(f"✗ Error creando administrador: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) == 3:
        create_admin(sys.argv[1], sys.argv[2])
    else:
        create_admin(settings.admin_email, settings.admin_password)
