"""
Version 1 routes: the API banner, health snapshot and the users collection.
"""
from .health_controller import router as health_router
from .user_controller import router as user_router


__all__ = ["health_router", "user_router"]
