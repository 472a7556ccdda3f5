from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    # App
    APP_ENV: str = "development"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["*"]

    # MongoDB
    MONGO_URL: str = "mongodb://localhost:27017"
    DB_NAME: str = "AidFlow"

    # Admin acting on requests when no X-Admin-Id header is sent
    DEFAULT_ADMIN_ID: str = "admin"

    # Template costs are expressed in shekels
    CURRENCY: str = "ILS"

    # Approximate distance (degrees → km), see core/geo.py
    KM_PER_DEGREE:         float = 111.0
    NEARBY_TASK_RADIUS_KM: float = 5.0

    # Rate limiting (slowapi)
    CREATE_REQUEST_RATE_LIMIT: str = "30/minute"

    model_config = SettingsConfigDict(
        env_file=[".env", "../.env"],  # backend/ first, then the repo root
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
