"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./field_checkin.db")

    # Auth boundary (tokens are issued elsewhere, only verified here)
    JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "change-me-in-production")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

    # Identity registry
    IDENTITY_REGISTRY_URL: str = os.getenv("IDENTITY_REGISTRY_URL", "http://localhost:9000")
    IDENTITY_REGISTRY_API_KEY: str | None = os.getenv("IDENTITY_REGISTRY_API_KEY")
    IDENTITY_REGISTRY_TIMEOUT: float = float(os.getenv("IDENTITY_REGISTRY_TIMEOUT", "10"))

    # Check-in days are counted in this timezone
    REPORTING_TIMEZONE: str = os.getenv("REPORTING_TIMEZONE", "Africa/Nairobi")

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        env_file = ".env"

settings = Settings()
