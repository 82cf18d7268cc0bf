from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from ..models.user import User


class UserRepository(ABC):
    """
    Repository interface - defines contract for user data access.

    Implementations assign ``id``/``created_at``/``updated_at`` and enforce
    email uniqueness, raising DuplicateEmailError on conflict.
    """

    @abstractmethod
    def is_valid_reference(self, user_id: str) -> bool:
        """Whether user_id is well-formed for this store's identifier format"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert a new user and return the stored document"""
        pass

    @abstractmethod
    async def find_all(self) -> List[User]:
        """All users, most recently created first"""
        pass

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        """Find user by ID"""
        pass

    @abstractmethod
    async def update_by_id(self, user_id: str, changes: Dict[str, Any]) -> Optional[User]:
        """Apply changes to the user, refresh updated_at, return the post-update user (None if absent)"""
        pass

    @abstractmethod
    async def delete_by_id(self, user_id: str) -> Optional[User]:
        """Remove the user and return its last snapshot (None if absent)"""
        pass
