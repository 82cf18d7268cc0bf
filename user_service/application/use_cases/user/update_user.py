# Standard library imports
import logging
from typing import Optional

# Local application imports
from ....domain.repositories.user_repository import UserRepository
from ....domain.constants import UserFields
from ....domain.exceptions import InvalidUserReferenceError, NoFieldsToUpdateError, UserNotFoundError
from ....domain.validators import validate_user_fields
from ...dto.user_dto import UserUpdateRequest, UserResponse

logger = logging.getLogger(__name__)


class UpdateUserUseCase:
    """Use case for partially updating a user"""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, user_id: str, request: Optional[UserUpdateRequest]) -> UserResponse:
        """
        Apply the fields present in the request to an existing user

        Args:
            user_id: ID of the user
            request: Update request; None is treated as an empty body

        Returns:
            UserResponse with the post-update user

        Raises:
            InvalidUserReferenceError: If user_id is malformed
            NoFieldsToUpdateError: If the body carries no applicable field
            UserValidationError: If a supplied field breaks its rule
            DuplicateEmailError: If the new email is already taken
            UserNotFoundError: If no user has this ID
        """
        if not self.user_repository.is_valid_reference(user_id):
            raise InvalidUserReferenceError(user_id)

        supplied = request.supplied_fields() if request is not None else {}
        supplied = {k: v for k, v in supplied.items() if k in UserFields.WRITABLE}
        if not supplied:
            raise NoFieldsToUpdateError()

        changes = validate_user_fields(supplied, partial=True)

        updated_user = await self.user_repository.update_by_id(user_id, changes)
        if updated_user is None:
            raise UserNotFoundError(user_id)

        logger.info(f"Updated user {user_id}: {sorted(changes)}")
        return UserResponse.from_user(updated_user)
