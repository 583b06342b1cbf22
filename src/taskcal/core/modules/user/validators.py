from taskcal.errors import ValidationError

MAX_PASSWORD_BYTES = 72


def validate_username(username: str) -> None:
    """Validate username meets requirements.

    Requirements:
    - Not empty
    - No whitespace characters

    Raises:
        ValidationError: If username doesn't meet requirements
    """
    if not username:
        raise ValidationError("Username cannot be empty")

    if any(char.isspace() for char in username):
        raise ValidationError("Username cannot contain whitespace characters")


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Requirements:
    - No whitespace characters
    - Minimum length of 2 characters
    - At most 72 bytes once UTF-8 encoded (bcrypt input limit)

    Raises:
        ValidationError: If password doesn't meet requirements
    """
    if len(password) < 2:
        raise ValidationError("Password must be at least 2 characters long")

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")

    if any(char.isspace() for char in password):
        raise ValidationError("Password cannot contain whitespace characters")
