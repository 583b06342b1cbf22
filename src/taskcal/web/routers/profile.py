from fastapi import APIRouter

from taskcal.core.modules.user.models import UserView
from taskcal.web.deps import AppDep, AuthTokenDep
from taskcal.web.openapi import ErrorResponse

router = APIRouter(tags=["profile"])


@router.get(
    "/profile",
    summary="Get current user profile",
    description="Get the profile of the user the bearer token was issued to.",
    operation_id="getCurrentUserProfile",
    responses={
        200: {"description": "Current user profile"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Invalid or expired token"},
    },
)
async def get_profile(app: AppDep, auth_token: AuthTokenDep) -> UserView:
    return await app.get_current_user(auth_token)
