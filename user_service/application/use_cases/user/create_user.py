# Standard library imports
import logging

# Local application imports
from ....domain.repositories.user_repository import UserRepository
from ....domain.models.user import User
from ....domain.constants import UserFields
from ....domain.exceptions import MissingRequiredFieldsError
from ....domain.validators import validate_user_fields
from ...dto.user_dto import UserCreateRequest, UserResponse

logger = logging.getLogger(__name__)


class CreateUserUseCase:
    """Use case for creating a new user"""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, request: UserCreateRequest) -> UserResponse:
        """
        Create a new user

        Args:
            request: Creation request with user details

        Returns:
            UserResponse with the stored user

        Raises:
            MissingRequiredFieldsError: If name or email is missing or empty
            UserValidationError: If a field breaks its rule
            DuplicateEmailError: If the email is already taken
        """
        # Reject before touching the store
        if not request.name or not request.email:
            raise MissingRequiredFieldsError()

        fields = validate_user_fields(request.model_dump(), partial=False)

        new_user = User(
            id=None,  # Will be set by repository
            name=fields[UserFields.NAME],
            email=fields[UserFields.EMAIL],
            age=fields[UserFields.AGE],
            address=fields[UserFields.ADDRESS],
        )

        saved_user = await self.user_repository.create(new_user)
        logger.info(f"Created user {saved_user.id}")

        return UserResponse.from_user(saved_user)
