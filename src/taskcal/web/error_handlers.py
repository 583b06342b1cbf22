import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from taskcal.errors import (
    AccessDeniedError,
    AuthenticationError,
    CredentialsError,
    InvalidOrExpiredTokenError,
    NotFoundError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"error": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    # Order matters: InvalidOrExpiredTokenError is an AuthenticationError answered with 403
    if isinstance(exc, InvalidOrExpiredTokenError):
        status_code = 403
        error_type = "invalid_token"
    elif isinstance(exc, AuthenticationError):
        status_code = 401
        error_type = "authentication_error"
    elif isinstance(exc, AccessDeniedError):
        status_code = 403
        error_type = "access_denied"
    elif isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
    elif isinstance(exc, CredentialsError):
        status_code = 400
        error_type = "invalid_credentials"
    elif isinstance(exc, ValidationError):
        status_code = 400
        error_type = "validation_error"
    else:
        # Default for any other UserError subclass
        status_code = 400
        error_type = "bad_request"

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def request_validation_error_handler(_: Request, exc: RequestValidationError) -> Response:
    """Handle malformed request bodies and query parameters (422), reporting the first problem."""
    errors = exc.errors()
    if not errors:
        return create_json_error_response(status_code=422, message="Invalid request", error_type="validation_error")

    first = errors[0]
    # loc starts with the request part, e.g. ("body", "password") or ("query", "month")
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = f"{field}: {first['msg']}" if field else first["msg"]
    return create_json_error_response(status_code=422, message=message, error_type="validation_error")


async def storage_error_handler(_: Request, exc: Exception) -> Response:
    """Handle failed writes of a collection file (500, nothing saved)."""
    logger.error("storage_error", error=str(exc))
    return create_json_error_response(status_code=500, message="Error al guardar los datos", error_type="storage_error")


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("unexpected_error", error=str(exc))
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
