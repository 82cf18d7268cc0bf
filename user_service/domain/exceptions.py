from typing import List


class UserServiceError(Exception):
    """Base class for user service domain errors"""


class MissingRequiredFieldsError(UserServiceError):
    """Create request lacks name or email"""

    def __init__(self) -> None:
        super().__init__("Name and email are required")


class InvalidUserReferenceError(UserServiceError):
    """User ID is not well-formed for the persistence layer"""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"Invalid user ID format: {user_id}")


class UserNotFoundError(UserServiceError):
    """Well-formed user ID with no matching user"""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class NoFieldsToUpdateError(UserServiceError):
    """Update request carries no applicable field"""

    def __init__(self) -> None:
        super().__init__("No fields to update")


class UserValidationError(UserServiceError):
    """One or more user fields failed validation"""

    def __init__(self, errors: List[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Validation failed")


class DuplicateEmailError(UserServiceError):
    """Another user already owns this email address"""

    def __init__(self, email: str = "") -> None:
        self.email = email
        super().__init__(f"Email already exists: {email}" if email else "Email already exists")
