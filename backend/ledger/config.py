"""Configuration settings for the application."""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "Ledger Finance API"
    debug: bool = False
    database_path: str = "ledger.db"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # Pagination default when the client omits pageSize
    default_page_size: int = 10

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
