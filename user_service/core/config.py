# Standard library imports
import os
from typing import Final, List, Optional


DEFAULT_ALLOWED_ORIGINS: Final[List[str]] = [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://localhost:4000",
]


def _split_csv(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    """

    def __init__(self) -> None:
        # Database Configuration
        self.mongo_uri: Final[str] = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
        self.mongo_database_name: Final[str] = os.getenv("MONGO_DB_NAME", "user_service")
        self.mongo_server_selection_timeout_ms: Final[int] = int(
            os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000")
        )

        # Server Configuration
        self.environment: Final[str] = os.getenv("ENVIRONMENT", "development")
        self.host: Final[str] = os.getenv("HOST", "0.0.0.0")
        self.port: Final[int] = int(os.getenv("PORT", "5000"))
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()

        # Routing
        self.users_route_prefix: Final[str] = os.getenv("USERS_ROUTE_PREFIX", "/routes/users")

        # CORS Configuration
        self.frontend_url: Final[Optional[str]] = os.getenv("FRONTEND_URL") or None
        self.extra_allowed_origins: Final[List[str]] = _split_csv(os.getenv("CORS_ALLOWED_ORIGINS"))

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def allowed_origins(self) -> List[str]:
        """Origins accepted by the CORS allow-list, in declaration order without duplicates"""
        origins: List[str] = []
        candidates = [*DEFAULT_ALLOWED_ORIGINS, self.frontend_url, *self.extra_allowed_origins]
        for origin in candidates:
            if origin and origin not in origins:
                origins.append(origin)
        return origins


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment"""
    global _settings
    _settings = None
