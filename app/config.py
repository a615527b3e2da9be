"""Configuration management for Corprex Scheduler."""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

SERVICE_NAME = "corprex-scheduler"
SERVICE_VERSION = "1.0.0"


class Config:
    """Application configuration."""

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    # Slot calendar
    # Number of days (starting today) for which weekday slots are generated at startup.
    SLOT_HORIZON_DAYS: int = int(os.getenv("SLOT_HORIZON_DAYS", "90"))
    # IANA zone used to decide "today" and "now" for past-time filtering.
    # Empty means the server's local clock.
    BUSINESS_TIMEZONE: str = os.getenv("BUSINESS_TIMEZONE", "")

    # Email notifications (HTTP email API, e.g. a transactional mail provider)
    # If EMAIL_API_URL is not set, confirmations are only logged.
    EMAIL_API_URL: str = os.getenv("EMAIL_API_URL", "")
    EMAIL_API_KEY: str = os.getenv("EMAIL_API_KEY", "")
    EMAIL_FROM: str = os.getenv("EMAIL_FROM", "scheduler@corprex.com")
    OPERATOR_EMAIL: str = os.getenv("OPERATOR_EMAIL", "admin@corprex.com")
    EMAIL_TIMEOUT_SECONDS: float = float(os.getenv("EMAIL_TIMEOUT_SECONDS", "10"))

    # Security
    API_KEY: str = os.getenv("API_KEY", "")  # Protects admin endpoints

    @classmethod
    def has_email_config(cls) -> bool:
        """Check if the email API is configured."""
        return bool(cls.EMAIL_API_URL)

    @classmethod
    def cors_origins(cls) -> list[str]:
        """CORS origins as a list."""
        origins = [o.strip() for o in cls.CORS_ORIGINS.split(",")]
        return [o for o in origins if o] or ["*"]


# Create a global config instance
config = Config()
