from fastapi import APIRouter
from pydantic import BaseModel, Field

from taskcal.web.deps import AppDep
from taskcal.web.openapi import ErrorResponse, SuccessResponse

router = APIRouter(tags=["users"])


class CreateUserRequest(BaseModel):
    """Request to register a new user."""

    username: str = Field(..., min_length=1, description="Username for the new user")
    password: str = Field(..., min_length=1, description="Password for the new user")


@router.post(
    "/users",
    summary="Register user",
    description="Create a new user account. Open to anyone; usernames are unique.",
    operation_id="createUser",
    responses={
        201: {"description": "User created successfully"},
        400: {"model": ErrorResponse, "description": "Username taken or invalid credentials format"},
    },
    status_code=201,
)
async def create_user(create_data: CreateUserRequest, app: AppDep) -> SuccessResponse:
    await app.register(create_data.username, create_data.password)
    return SuccessResponse()
