from typing import List
import os

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    env: str = "dev"
    secret_key: str = "change_me_super_secret"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 30
    refresh_token_expire_minutes: int = 60 * 24 * 30
    database_url: str = "postgresql+psycopg2://ganadero:ganadero@db:5432/ganaderos"
    backend_cors_origins: str = "http://localhost:5173"
    log_level: str = "INFO"

    # Usuario administrador que se crea al arrancar en desarrollo
    admin_email: str = "admin@ganaderos.com"
    admin_password: str = "admin123456"

    port: int = int(os.getenv("PORT", "8000"))

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        origins = self.backend_cors_origins
        return [origin.strip() for origin in origins.split(",") if origin.strip()]


settings = Settings()
