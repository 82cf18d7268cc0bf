# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
from typing import Optional
import logging
import time

# External package imports
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

# Local application imports
from .api.v1 import health_router, user_router
from .api.error_handlers import setup_error_handling
from .api.middleware import OriginAllowListMiddleware, RequestLoggingMiddleware
from .core.config import Settings, get_settings
from .core.logging_config import configure_logging
from .di.container import get_container
from .domain.repositories.user_repository import UserRepository
from .infrastructure.db.mongo_connection import close_connection
from .infrastructure.db.mongo_user_repository import MongoUserRepository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.

    Builds the container from the app settings, ensures the MongoDB indexes
    on startup and closes the client on shutdown. An unreachable database is
    logged; the API keeps serving and reports it through /api/health, and the
    repository retries the indexes before its first write.
    """
    repository = get_container(app.state.settings).get(UserRepository)

    if isinstance(repository, MongoUserRepository):
        try:
            await repository.ensure_indexes()
            logger.info("MongoDB connected, user indexes ensured")
        except PyMongoError as e:
            logger.error(f"MongoDB connection error: {e}")
            logger.warning("Running without database")
    else:
        logger.info(f"Using {type(repository).__name__} for user storage")

    yield

    close_connection()
    logger.info("Application shutdown complete")


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Environment variable loading
    - Logging, request logging and CORS middleware
    - Exception handlers that keep every error a JSON envelope
    - API route registration

    Returns:
        Configured FastAPI application instance
    """
    # Load environment variables from .env file
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)

    settings = settings or get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(
        title="User Service API",
        version="1.0.0",
        description="CRUD API over the users collection",
        lifespan=lifespan
    )
    application.state.settings = settings
    application.state.started_at = time.monotonic()

    # Innermost first: CORS headers, then the allow-list, then request logging
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
        allow_headers=["Content-Type", "Authorization"],
    )
    application.add_middleware(OriginAllowListMiddleware, allowed_origins=settings.allowed_origins)
    application.add_middleware(RequestLoggingMiddleware)

    setup_error_handling(application)

    # Register API routers
    application.include_router(health_router)
    application.include_router(user_router, prefix=settings.users_route_prefix)

    logger.info(f"Environment: {settings.environment}")
    return application


# Create application instance
app = create_application()
