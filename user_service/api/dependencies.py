# External package imports
from fastapi import Request

# Local application imports
from ..core.config import Settings, get_settings


def get_request_settings(request: Request) -> Settings:
    """
    Settings the serving application was built with

    Falls back to the process-wide settings when the app carries none.
    """
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()
