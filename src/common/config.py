"""
Configuration loader for the job tracker.

Loads all settings from environment variables (.env file).
Validates required settings and provides type-safe access.
"""

import logging
import os
from typing import List

from dotenv import load_dotenv

from .errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


class Config:
    """
    Centralized configuration for the API, store adapter and board client.

    All values loaded from environment variables - NO SECRETS IN CODE.
    """

    # ===== MongoDB =====
    MONGODB_URI: str = os.getenv("MONGODB_URI", "")
    # Used when the URI does not name a default database
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "job_tracker")
    JOBS_COLLECTION: str = os.getenv("JOBS_COLLECTION", "jobs")
    # Fail fast instead of pymongo's 30s default
    MONGO_TIMEOUT_MS: int = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

    # ===== Runtime =====
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    FLASK_ENV: str = os.getenv("FLASK_ENV", "")
    FLASK_PORT: int = int(os.getenv("FLASK_PORT", "5000"))
    FLASK_DEBUG: bool = os.getenv("FLASK_DEBUG", "false").lower() == "true"

    # ===== Logging =====
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "simple")

    # ===== Board client =====
    JOB_TRACKER_API_URL: str = os.getenv("JOB_TRACKER_API_URL", "http://localhost:5000/api")

    @classmethod
    def is_production(cls) -> bool:
        """True when running with ENVIRONMENT=production or FLASK_ENV=production."""
        return "production" in (cls.ENVIRONMENT.lower(), cls.FLASK_ENV.lower())

    @classmethod
    def missing_settings(cls) -> List[str]:
        """Names of required settings that are not set."""
        required_settings = {
            "MONGODB_URI": cls.MONGODB_URI,
        }
        return [name for name, value in required_settings.items() if not value]

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required configuration is present.
        Raises ConfigurationError if critical settings are missing.
        """
        missing = cls.missing_settings()
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}. "
                f"Please check your .env file."
            )

    @classmethod
    def warn_if_unconfigured(cls) -> bool:
        """
        Log a startup warning for missing settings outside production.

        Production deployments fail at first use instead, so nothing is
        logged there. Returns True if a warning was emitted.
        """
        missing = cls.missing_settings()
        if not missing or cls.is_production():
            return False
        logger.warning(f"{', '.join(missing)} is not defined in the environment or .env")
        return True
