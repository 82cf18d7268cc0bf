from .mongo_connection import (
    USERS_COLLECTION,
    close_connection,
    get_database,
    get_user_collection,
    ping_database,
)
from .mongo_user_repository import MongoUserRepository

__all__ = [
    "USERS_COLLECTION",
    "close_connection",
    "get_database",
    "get_user_collection",
    "ping_database",
    "MongoUserRepository",
]
