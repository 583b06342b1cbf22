from fastapi import APIRouter
from pydantic import BaseModel, Field

from taskcal.web.deps import AppDep
from taskcal.web.openapi import ErrorResponse, SuccessResponse

router = APIRouter(tags=["auth"])


class LoginRequest(BaseModel):
    """Authentication request."""

    username: str = Field(..., description="Username for authentication")
    password: str = Field(..., description="Password for authentication")


class LoginResponse(SuccessResponse):
    """Authentication response."""

    token: str = Field(..., description="Bearer token for subsequent requests")
    username: str = Field(..., description="Authenticated username")


@router.post(
    "/login",
    summary="Authenticate user",
    description="Authenticate with username and password to receive a time-limited bearer token.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        400: {"model": ErrorResponse, "description": "Unknown user or wrong password"},
    },
)
async def login(login_data: LoginRequest, app: AppDep) -> LoginResponse:
    result = await app.login(login_data.username, login_data.password)
    return LoginResponse(token=result.token, username=result.username)
