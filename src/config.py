"""
Configuration settings for the application.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Storage settings
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "memory")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./omniproduct.db")
    DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"

    # Catalog rules
    MAX_PRODUCT_KILOS: float = float(os.getenv("MAX_PRODUCT_KILOS", "43.0"))

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.
        """
        return self.ENVIRONMENT.lower() == "production"

    @property
    def uses_sql_storage(self) -> bool:
        """Return True when products and suppliers live in a relational store."""
        return self.STORAGE_BACKEND.lower() == "sql"

    def __init__(self):
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        logging.basicConfig(level=self.log_level)
        self.logger = logging.getLogger(__name__)

        self.logger.debug(
            f"Config initialized with environment={self.ENVIRONMENT}, "
            f"storage={self.STORAGE_BACKEND}, log_level={self.log_level}"
        )


# Create a global settings instance for import
settings = Settings()
