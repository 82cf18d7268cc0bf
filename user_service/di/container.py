# Standard library imports
from typing import Optional

# Local application imports
from ..core.config import Settings
from ..domain.repositories.user_repository import UserRepository
from .base_container import BaseContainer
from .providers import (
    DatabaseProvider,
    RepositoryProvider,
    UserProvider,
)


class DIContainer(BaseContainer):
    """
    Main dependency injection container.
    Composes all providers in the correct order.

    Registration order is important:
    1. Database connections (DatabaseProvider)
    2. Repositories (RepositoryProvider) - depends on database
    3. Use cases (UserProvider) - depend on repositories

    Passing ``user_repository`` skips steps 1 and 2 and wires the use cases
    to that repository instead (used by tests and tooling without MongoDB).
    ``settings`` selects the MongoDB URI and database; the process-wide
    settings are used when omitted.
    """

    def __init__(
        self,
        user_repository: Optional[UserRepository] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        super().__init__()
        self.setup(user_repository, settings)

    def setup(
        self,
        user_repository: Optional[UserRepository] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        """
        Setup dependency registrations by composing all providers.
        Order matters: database → repositories → use cases
        """
        if user_repository is None:
            DatabaseProvider.register(self, settings)
            RepositoryProvider.register(self)
        else:
            self.register_singleton(UserRepository, user_repository)

        UserProvider.register(self)


# Global container instance (singleton pattern)
_container: Optional[DIContainer] = None


def get_container(settings: Optional[Settings] = None) -> DIContainer:
    """
    Get the global DI container instance (singleton pattern)

    Args:
        settings: Used only when the container is built by this call

    Returns:
        DIContainer instance with all dependencies registered
    """
    global _container
    if _container is None:
        _container = DIContainer(settings=settings)
    return _container


def set_container(container: Optional[DIContainer]) -> None:
    """Replace the global container; None resets it to be rebuilt on next use"""
    global _container
    _container = container
