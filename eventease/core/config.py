from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "EventEase Booking API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite:///./eventease.db"
    DATABASE_POOL_SIZE: int = 5
    DATABASE_MAX_OVERFLOW: int = 10

    # Inserts demo venues, events and bookings when the database is empty
    SEED_DATABASE: bool = False

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # --- Object storage (S3 or an S3-compatible endpoint such as MinIO) ---
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_S3_REGION: str = "us-east-1"
    AWS_S3_BUCKET_NAME: str = "eventease-images"
    AWS_S3_ENDPOINT_URL: Optional[str] = None
    AWS_S3_PUBLIC_URL: Optional[str] = None

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


settings = Settings()
