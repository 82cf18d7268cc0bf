# Standard library imports
import logging
from typing import Optional

# External package imports
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

# Local application imports
from ...application.dto.user_dto import UserCreateRequest, UserUpdateRequest
from ...application.use_cases.user.create_user import CreateUserUseCase
from ...application.use_cases.user.list_users import ListUsersUseCase
from ...application.use_cases.user.get_user import GetUserUseCase
from ...application.use_cases.user.update_user import UpdateUserUseCase
from ...application.use_cases.user.delete_user import DeleteUserUseCase
from ...domain.exceptions import UserServiceError
from ...di.container import get_container
from .responses import envelope, error_response, server_error_response

logger = logging.getLogger(__name__)


router = APIRouter(tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(request: Optional[UserCreateRequest] = None) -> JSONResponse:
    """
    Create a new user

    Args:
        request: User creation request; a missing body is treated as empty

    Returns:
        201 envelope with the created user
    """
    container = get_container()
    create_user_use_case = container.get(CreateUserUseCase)

    try:
        user = await create_user_use_case.execute(request or UserCreateRequest())
    except UserServiceError as exception:
        return error_response(exception)
    except Exception as exception:
        logger.error(f"Create user error: {exception}", exc_info=True)
        return server_error_response(exception)

    return envelope(status.HTTP_201_CREATED, "CREATE new user success", user)


@router.get("")
async def list_users() -> JSONResponse:
    """
    List all users, newest first

    Returns:
        200 envelope with the users and their count
    """
    container = get_container()
    list_users_use_case = container.get(ListUsersUseCase)

    try:
        users = await list_users_use_case.execute()
    except Exception as exception:
        logger.error(f"Get all users error: {exception}", exc_info=True)
        return server_error_response(exception)

    return envelope(status.HTTP_200_OK, "GET all users success", users, total=len(users))


@router.get("/{user_id}")
async def get_user(user_id: str) -> JSONResponse:
    """
    Get a user by ID

    Args:
        user_id: ID of the user

    Returns:
        200 envelope with the user
    """
    container = get_container()
    get_user_use_case = container.get(GetUserUseCase)

    try:
        user = await get_user_use_case.execute(user_id)
    except UserServiceError as exception:
        return error_response(exception)
    except Exception as exception:
        logger.error(f"Get user by ID error: {exception}", exc_info=True)
        return server_error_response(exception)

    return envelope(status.HTTP_200_OK, "GET user by ID success", user)


@router.patch("/{user_id}")
async def update_user(user_id: str, request: Optional[UserUpdateRequest] = None) -> JSONResponse:
    """
    Partially update a user; only keys present in the body change

    Args:
        user_id: ID of the user
        request: Fields to change

    Returns:
        200 envelope with the post-update user
    """
    container = get_container()
    update_user_use_case = container.get(UpdateUserUseCase)

    try:
        user = await update_user_use_case.execute(user_id, request)
    except UserServiceError as exception:
        return error_response(exception)
    except Exception as exception:
        logger.error(f"Update user error: {exception}", exc_info=True)
        return server_error_response(exception)

    return envelope(status.HTTP_200_OK, "UPDATE user success", user)


@router.delete("/{user_id}")
async def delete_user(user_id: str) -> JSONResponse:
    """
    Delete a user permanently

    Args:
        user_id: ID of the user

    Returns:
        200 envelope with the deleted user's last snapshot
    """
    container = get_container()
    delete_user_use_case = container.get(DeleteUserUseCase)

    try:
        user = await delete_user_use_case.execute(user_id)
    except UserServiceError as exception:
        return error_response(exception)
    except Exception as exception:
        logger.error(f"Delete user error: {exception}", exc_info=True)
        return server_error_response(exception)

    return envelope(status.HTTP_200_OK, "DELETE user success", user)
