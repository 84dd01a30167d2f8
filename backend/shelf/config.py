from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path
import os
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    PROJECT_NAME: str = "Shelf API"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api"

    # CORS
    BACKEND_CORS_ORIGINS: list = [
        "http://localhost:4000",
        "http://localhost:5173",
    ]

    # Storage roots
    DATA_DIR: Path = Path("data")
    UPLOADS_DIR: Path = Path("uploads")

    # Upload limits (bytes)
    MAX_PDF_SIZE: int = 50 * 1024 * 1024
    MAX_IMAGE_SIZE: int = 10 * 1024 * 1024

    # JWT
    SECRET_KEY: str = os.getenv("SECRET_KEY", "your-secret-key-for-development")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    LOG_LEVEL: str = "INFO"

    class Config:
        case_sensitive = True

@lru_cache()
def get_settings():
    return Settings()
