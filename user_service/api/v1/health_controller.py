# Standard library imports
import time
from typing import Any, Dict

# External package imports
from fastapi import APIRouter, Request

# Local application imports
from ..dependencies import get_request_settings
from ...di.container import get_container
from ...infrastructure.db.mongo_connection import ping_database
from ...utils.datetime_utils import to_iso, utc_now


router = APIRouter(tags=["health"])


@router.get("/")
async def root(request: Request) -> Dict[str, Any]:
    """API banner"""
    return {
        "message": "Hello World! API is running",
        "timestamp": to_iso(utc_now()),
        "environment": get_request_settings(request).environment,
    }


@router.get("/api/health")
async def health_check(request: Request) -> Dict[str, Any]:
    """
    Health snapshot

    Always answers 200; database connectivity is reported, not enforced.
    """
    container = get_container(get_request_settings(request))

    database_connected = False
    if container.is_registered("database"):
        database_connected = await ping_database(container.get("database"))

    started_at = getattr(request.app.state, "started_at", time.monotonic())

    return {
        "status": "OK",
        "database": "Connected" if database_connected else "Disconnected",
        "uptime": round(time.monotonic() - started_at, 3),
        "timestamp": to_iso(utc_now()),
        "port": get_request_settings(request).port,
    }
