"""
Field rules for the User entity.

Both the create and the partial-update paths go through
``validate_user_fields``; it returns the normalized values to persist or
raises ``UserValidationError`` listing every failing field.
"""
# Standard library imports
import re
from typing import Any, Dict, List, Mapping

# Local application imports
from ..constants import UserFields
from ..exceptions import UserValidationError


# local-part@domain.tld, ASCII word characters with single '.'/'-' separators
EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*(?:\.\w{2,3})+$", re.ASCII)

MIN_AGE = 0
MAX_AGE = 150

NAME_REQUIRED = "Name is required"
EMAIL_REQUIRED = "Email is required"
EMAIL_INVALID = "Please enter a valid email"
AGE_NOT_INTEGER = "Age must be an integer"
AGE_TOO_LOW = "Age must be positive"
AGE_TOO_HIGH = "Age must be less than 150"
NAME_NOT_TEXT = "Name must be a string"
EMAIL_NOT_TEXT = "Email must be a string"
ADDRESS_NOT_TEXT = "Address must be a string"

INTEGER_TEXT = re.compile(r"^\s*[-+]?\d+\s*$", re.ASCII)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _is_text_like(value: Any) -> bool:
    return not isinstance(value, (dict, list))


def _clean_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value.strip() if isinstance(value, str) else str(value).strip()


def _cast_age(value: Any) -> Any:
    """Integer form of a JSON age value, or None when it has none"""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and INTEGER_TEXT.match(value):
        return int(value)
    return None


def validate_user_fields(fields: Mapping[str, Any], partial: bool = False) -> Dict[str, Any]:
    """
    Validate and normalize user fields.

    Args:
        fields: Candidate values keyed by UserFields names; unknown keys are ignored
        partial: When True only the supplied keys are checked (update path);
            when False name and email are required (create path)

    Returns:
        Normalized values: trimmed strings, lowercased email, integer age.
        Scalars are cast the way a JSON client would expect (``123`` becomes
        ``"123"``, ``"30"`` and ``30.0`` become ``30``). In partial mode only
        the supplied keys are returned; an explicit None for age or address
        is kept so the field gets cleared.

    Raises:
        UserValidationError: If any field breaks its rule
    """
    errors: List[str] = []
    cleaned: Dict[str, Any] = {}

    if UserFields.NAME in fields or not partial:
        name = fields.get(UserFields.NAME)
        if name is not None and not _is_text_like(name):
            errors.append(NAME_NOT_TEXT)
        else:
            name = _clean_text(name) if name is not None else ""
            if not name:
                errors.append(NAME_REQUIRED)
            cleaned[UserFields.NAME] = name

    if UserFields.EMAIL in fields or not partial:
        email = fields.get(UserFields.EMAIL)
        if email is not None and not _is_text_like(email):
            errors.append(EMAIL_NOT_TEXT)
        else:
            email = normalize_email(_clean_text(email)) if email is not None else ""
            if not email:
                errors.append(EMAIL_REQUIRED)
            elif not EMAIL_PATTERN.match(email):
                errors.append(EMAIL_INVALID)
            cleaned[UserFields.EMAIL] = email

    if UserFields.AGE in fields or not partial:
        age = fields.get(UserFields.AGE)
        if age is not None:
            age = _cast_age(age)
            if age is None:
                errors.append(AGE_NOT_INTEGER)
            elif age < MIN_AGE:
                errors.append(AGE_TOO_LOW)
            elif age > MAX_AGE:
                errors.append(AGE_TOO_HIGH)
        cleaned[UserFields.AGE] = age

    if UserFields.ADDRESS in fields or not partial:
        address = fields.get(UserFields.ADDRESS)
        if address is not None and not _is_text_like(address):
            errors.append(ADDRESS_NOT_TEXT)
        else:
            cleaned[UserFields.ADDRESS] = _clean_text(address) if address is not None else None

    if errors:
        raise UserValidationError(errors)

    return cleaned
