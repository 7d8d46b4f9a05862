# core/config.py
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    cors_origins: List[str] = field(default_factory=lambda: _env_list("CORS_ORIGINS", "*"))

    # Storage
    storage_backend: str = os.getenv("STORAGE_BACKEND", "sql")  # 'sql' or 'memory'
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///reading_log.db")
    note_delete_policy: str = os.getenv("NOTE_DELETE_POLICY", "orphan")  # orphan, cascade, forbid

    # Mock user (no auth)
    default_username: str = os.getenv("DEFAULT_USERNAME", "user")
    default_password: str = os.getenv("DEFAULT_PASSWORD", "password")

    # Google Books search
    google_books_url: str = os.getenv("GOOGLE_BOOKS_URL", "https://www.googleapis.com/books/v1/volumes")
    google_books_api_key: Optional[str] = os.getenv("GOOGLE_BOOKS_API_KEY")
    search_max_results: int = int(os.getenv("SEARCH_MAX_RESULTS", "20"))
    search_timeout: float = float(os.getenv("SEARCH_TIMEOUT", "10"))

    # Google Cloud Vision text extraction
    vision_api_url: str = os.getenv("VISION_API_URL", "https://vision.googleapis.com/v1/images:annotate")
    vision_api_key: Optional[str] = os.getenv("GOOGLE_CLOUD_VISION_API_KEY")
    extraction_timeout: float = float(os.getenv("EXTRACTION_TIMEOUT", "10"))
    max_upload_size: int = int(os.getenv("MAX_UPLOAD_SIZE", str(5 * 1024 * 1024)))  # 5MB

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
