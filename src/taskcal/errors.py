from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "No encontrada") -> None:
        super().__init__(message)


class TaskNotFoundError(NotFoundError):
    """Raised when no task has the requested id."""


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Acceso denegado") -> None:
        super().__init__(message)


class MissingTokenError(AuthenticationError):
    """Raised when a protected request carries no bearer token."""


class InvalidOrExpiredTokenError(AuthenticationError):
    """Raised when a token has a bad signature, bad claims or has expired."""

    def __init__(self, message: str = "Token inválido o expirado") -> None:
        super().__init__(message)


class CredentialsError(UserError):
    """Raised when a login attempt is rejected."""

    def __init__(self, message: str = "Credenciales inválidas") -> None:
        super().__init__(message)


class UserNotFoundError(CredentialsError):
    """Raised when logging in with an unknown username."""

    def __init__(self, message: str = "Usuario no encontrado") -> None:
        super().__init__(message)


class InvalidCredentialsError(CredentialsError):
    """Raised when the password does not match the stored hash."""

    def __init__(self, message: str = "Contraseña incorrecta") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """Raised when a user tries to access a resource they do not have permission for."""


class ForbiddenError(AccessDeniedError):
    """Raised when a user acts on a task owned by someone else."""

    def __init__(self, message: str = "No autorizado") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class DuplicateUserError(ValidationError):
    """Raised when registering a username that already exists."""

    def __init__(self, message: str = "El usuario ya existe") -> None:
        super().__init__(message)


class StorageIOError(Exception):
    """Raised when a JSON collection file cannot be written."""
