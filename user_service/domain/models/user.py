from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class User:
    """
    Pure domain model for User entity - no external dependencies.

    ``id``, ``created_at`` and ``updated_at`` are assigned by the persistence
    layer; a freshly built User has them set to None.
    """
    id: Optional[str]
    name: str
    email: str
    age: Optional[int] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
