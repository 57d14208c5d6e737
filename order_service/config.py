"""
Application settings loaded from environment variables
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

MEMORY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Runtime configuration; every field falls back to an environment variable"""

    app_env: str = field(default_factory=lambda: os.getenv("APP_ENV", "development"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))
    database_url: str = field(
        default_factory=lambda: os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./database.sqlite")
    )
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: os.getenv("LOG_FORMAT", "text"))
    cors_origins: str = field(default_factory=lambda: os.getenv("CORS_ORIGINS", "*"))
    default_page_limit: int = field(default_factory=lambda: int(os.getenv("DEFAULT_PAGE_LIMIT", "10")))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG"))

    @property
    def is_test(self) -> bool:
        return self.app_env.lower() == "test"

    @property
    def effective_database_url(self) -> str:
        """In-memory store for test runs, the configured on-disk store otherwise"""
        if self.is_test:
            return MEMORY_DATABASE_URL
        return self.database_url

    @property
    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def get_settings() -> Settings:
    return Settings()
