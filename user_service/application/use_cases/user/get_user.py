# Local application imports
from ....domain.repositories.user_repository import UserRepository
from ....domain.exceptions import InvalidUserReferenceError, UserNotFoundError
from ...dto.user_dto import UserResponse


class GetUserUseCase:
    """Use case for getting a user by ID"""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, user_id: str) -> UserResponse:
        """
        Get a user by ID

        Args:
            user_id: ID of the user

        Returns:
            UserResponse with user information

        Raises:
            InvalidUserReferenceError: If user_id is malformed
            UserNotFoundError: If no user has this ID
        """
        if not self.user_repository.is_valid_reference(user_id):
            raise InvalidUserReferenceError(user_id)

        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        return UserResponse.from_user(user)
