
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Vendor Directory API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"

    # Storage gateway
    storage_backend: str = Field(
        default="sql", alias="STORAGE_BACKEND",
    )  # "sql" | "memory"
    database_url: str = Field(
        default="sqlite+aiosqlite:///./vendors.db",
        alias="DATABASE_URL",
    )
    storage_fetch_concurrency: int = Field(
        default=16, ge=1, alias="STORAGE_FETCH_CONCURRENCY",
    )  # Max in-flight gets while loading the directory

    # Vendor records
    max_image_size_bytes: int = Field(default=2_000_000, alias="MAX_IMAGE_SIZE_BYTES")
    optimistic_concurrency: bool = Field(
        default=False, alias="OPTIMISTIC_CONCURRENCY",
    )  # Reject edits whose updatedAt no longer matches the stored record

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

settings = Settings()
