# Standard library imports
import logging

# Local application imports
from ....domain.repositories.user_repository import UserRepository
from ....domain.exceptions import InvalidUserReferenceError, UserNotFoundError
from ...dto.user_dto import UserResponse

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """Use case for permanently deleting a user"""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, user_id: str) -> UserResponse:
        """
        Delete a user by ID

        Returns:
            UserResponse with the deleted user's last snapshot

        Raises:
            InvalidUserReferenceError: If user_id is malformed
            UserNotFoundError: If no user has this ID
        """
        if not self.user_repository.is_valid_reference(user_id):
            raise InvalidUserReferenceError(user_id)

        deleted_user = await self.user_repository.delete_by_id(user_id)
        if deleted_user is None:
            raise UserNotFoundError(user_id)

        logger.info(f"Deleted user {user_id}")
        return UserResponse.from_user(deleted_user)
