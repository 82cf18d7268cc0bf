from .user_validator import EMAIL_PATTERN, normalize_email, validate_user_fields

__all__ = ["EMAIL_PATTERN", "normalize_email", "validate_user_fields"]
