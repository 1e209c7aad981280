"""
Configuration de l'application / Application configuration.
Utilise pydantic-settings pour charger depuis .env ou variables d'environnement.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "FuelLog"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True

    # Database - SQLite par defaut pour le developpement
    # Database - SQLite by default for development
    DATABASE_URL: str = "sqlite+aiosqlite:///./fuellog.db"

    # CORS - origines autorisees / allowed origins
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # JWT Authentication
    SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 30

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_LOGIN: str = "5/minute"
    RATE_LIMIT_REGISTER: str = "3/minute"

    # Valeurs par defaut metier / Business defaults
    DEFAULT_CURRENCY: str = "USD"
    HEALTH_SCORE_CAP: float = 120.0
    DASHBOARD_CACHE_SECONDS: int = 300
    ENTRY_PAGE_LIMIT_MAX: int = 500

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
