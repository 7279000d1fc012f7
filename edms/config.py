"""
Configuration de l'application / Application configuration.
Utilise pydantic-settings pour charger depuis .env ou variables d'environnement.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "EDMS"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True

    # Database - SQLite par défaut pour le développement
    # Database - SQLite by default for development
    DATABASE_URL: str = "sqlite+aiosqlite:///./edms.db"

    # CORS - origines autorisées / allowed origins
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000", "http://localhost:8080"]

    # JWT Authentication
    SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # Rate Limiting
    RATE_LIMIT_LOGIN: str = "5/minute"
    RATE_LIMIT_REGISTER: str = "3/minute"

    # Seed - compte admin par défaut / default admin account
    ADMIN_PASSWORD: str = ""
    SEED_DEMO_DATA: bool = True

    # Plans de site / Site maps
    STATIC_DIR: str = "static"
    SITE_MAPS_DIR: str = "static/site_maps"
    SITE_MAP_URL_PREFIX: str = "/static/site_maps/"
    MAX_SITE_MAP_SIZE: int = 10 * 1024 * 1024  # 10 MB

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
