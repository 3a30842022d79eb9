from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List

class Settings(BaseSettings):
    APP_ENV: str = "local"
    PROJECT_NAME: str = "ClaimDesk"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./claimdesk.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 0
    DB_POOL_RECYCLE: int = 1800  # seconds
    DB_ECHO: bool = False

    # Security
    SECRET_KEY: str
    TOKEN_ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_SECONDS: int = 3600

    # CORS (frontend)
    CORS_ORIGINS: List[str] = ["http://localhost:9002"]

    # Object storage (S3 compatible)
    STORAGE_BUCKET: str = "claimdesk-uploads"
    STORAGE_REGION: str = "ap-south-1"
    STORAGE_PUBLIC_BASE_URL: str = ""  # defaults to https://<bucket>.s3.<region>.amazonaws.com
    STORAGE_URL_EXPIRES: int = 900

    # Reports
    EXPORT_ALL_LIMIT: int = 1_000_000

    model_config = SettingsConfigDict(env_file=".env", extra="allow", case_sensitive=True)

@lru_cache()
def get_settings():
    return Settings()
