from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from tunebook.errors import ValidationError

_email_adapter: TypeAdapter[str] = TypeAdapter(EmailStr)


def validate_name(name: str) -> str:
    """Validate display name and return it stripped."""
    name = name.strip()
    if not name:
        raise ValidationError("Name is required")
    if len(name) > 64:
        raise ValidationError("Name must be at most 64 characters long")
    return name


def validate_email(email: str) -> str:
    """Validate email address shape and return it normalized.

    Raises:
        ValidationError: If the address is missing or malformed
    """
    if not email.strip():
        raise ValidationError("Email is required")
    try:
        return _email_adapter.validate_python(email.strip())
    except PydanticValidationError:
        raise ValidationError("Invalid email address") from None


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Requirements:
    - Not empty
    - Not made only of whitespace

    Raises:
        ValidationError: If password doesn't meet requirements
    """
    if not password:
        raise ValidationError("Password is required")

    if not password.strip():
        raise ValidationError("Password cannot consist only of whitespace")
