"""
Entry point: python -m user_service
"""

import logging

import uvicorn

from .core.config import get_settings
from .main import app

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    logger.info(f"Starting User Service on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
