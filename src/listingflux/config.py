"""
Configuration management for ListingFlux.
"""
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration."""

    # API Keys
    OPENAI_API_KEY: Optional[str] = os.getenv("OPENAI_API_KEY")

    # Optimizer configuration
    OPTIMIZER_MODEL: str = os.getenv("OPTIMIZER_MODEL", "gpt-4o-mini")
    OPTIMIZER_TEMPERATURE: float = float(os.getenv("OPTIMIZER_TEMPERATURE", "0.4"))
    OPTIMIZER_MAX_TOKENS: int = int(os.getenv("OPTIMIZER_MAX_TOKENS", "1200"))

    # Acquisition configuration
    # Options: "browser" (Playwright render-then-extract) or "http" (requests fetch-then-parse)
    ACQUISITION_STRATEGY: str = os.getenv("ACQUISITION_STRATEGY", "browser")
    ACQUISITION_TIMEOUT_S: int = int(os.getenv("ACQUISITION_TIMEOUT_S", "30"))
    LISTING_URL_TEMPLATE: str = os.getenv(
        "LISTING_URL_TEMPLATE", "https://www.amazon.com/dp/{identifier}"
    )
    USER_AGENT: str = os.getenv(
        "USER_AGENT",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36",
    )

    # Persistence (history is disabled when unset)
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")
    HISTORY_LIMIT: int = 50

    # Flask settings
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key")
    FLASK_ENV: str = os.getenv("FLASK_ENV", "development")
    FLASK_DEBUG: bool = os.getenv("FLASK_DEBUG", "True").lower() == "true"
    FLASK_HOST: str = os.getenv("FLASK_HOST", "0.0.0.0")
    FLASK_PORT: int = int(os.getenv("FLASK_PORT", "5000"))

    # CORS
    LOCAL_FRONTEND_URL: str = "http://localhost:5173"
    FRONTEND_URL: Optional[str] = os.getenv("FRONTEND_URL")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def get_cors_origins(cls) -> list[str]:
        """Allowed CORS origins: the local dev frontend plus the deployed one."""
        return [origin for origin in (cls.LOCAL_FRONTEND_URL, cls.FRONTEND_URL) if origin]

    @classmethod
    def validate(cls) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not cls.OPENAI_API_KEY:
            errors.append("OPENAI_API_KEY not set (optimizer will return fallback content)")

        if cls.ACQUISITION_STRATEGY not in ("browser", "http"):
            errors.append(
                f"Invalid ACQUISITION_STRATEGY: {cls.ACQUISITION_STRATEGY}. Must be 'browser' or 'http'"
            )

        if "{identifier}" not in cls.LISTING_URL_TEMPLATE:
            errors.append("LISTING_URL_TEMPLATE must contain an {identifier} placeholder")

        if not cls.DATABASE_URL:
            errors.append("DATABASE_URL not set (history/save disabled)")

        return errors

    @classmethod
    def is_valid(cls) -> bool:
        """Check if configuration is valid."""
        return len(cls.validate()) == 0

    @classmethod
    def get_summary(cls) -> dict:
        """Get configuration summary (safe for logging)."""
        return {
            "flask_env": cls.FLASK_ENV,
            "flask_debug": cls.FLASK_DEBUG,
            "acquisition_strategy": cls.ACQUISITION_STRATEGY,
            "acquisition_timeout_s": cls.ACQUISITION_TIMEOUT_S,
            "optimizer_model": cls.OPTIMIZER_MODEL,
            "openai_api_configured": cls.OPENAI_API_KEY is not None,
            "history_configured": cls.DATABASE_URL is not None,
            "cors_origins": cls.get_cors_origins(),
            "log_level": cls.LOG_LEVEL,
        }
