"""Module: config."""

from typing import Literal

from pydantic_settings import BaseSettings

# Centralized runtime configuration loaded from environment variables.
class Settings(BaseSettings):
    # Primary SQLAlchemy connection string for the relational backend.
    database_url: str
    # Which storage implementation serves API requests.
    storage_backend: Literal["database", "memory"] = "database"

    # Gemini REST API used to generate pet-care recommendations.
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-pro"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_timeout_seconds: float = 30.0

    # Ignore the document cached on the pet and call the generator every time.
    always_regenerate_recommendations: bool = False
    # Generate recommendations and derived health tips when a pet is created.
    generate_recommendations_on_create: bool = True

    # Fill the in-memory backend with demo data at startup.
    seed_on_startup: bool = False

    cors_origins: list[str] = [
        "http://localhost:5000",
        "http://127.0.0.1:5000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    log_level: str = "INFO"

    # Configure pydantic-settings to also load values from local .env file.
    class Config:
        env_file = ".env"

# Global settings instance imported by app modules at runtime.
settings = Settings()
