from typing import TYPE_CHECKING, Optional
from ...core.config import Settings
from ...infrastructure.db.mongo_connection import (
    get_database,
    get_user_collection,
)

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DatabaseProvider:
    """Centralized database connection provider - single source of truth for all DB connections"""

    @staticmethod
    def register(container: "BaseContainer", settings: Optional[Settings] = None) -> None:
        """
        Register the database and its collections in the container.
        Repositories receive their collection from here, never from module globals.
        """
        container.register_singleton("database", get_database(settings))
        container.register_singleton("user_collection", get_user_collection(settings))
