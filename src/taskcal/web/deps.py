from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskcal.app import App
from taskcal.core.modules.session.models import AuthToken
from taskcal.errors import MissingTokenError

bearer_scheme = HTTPBearer(auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_auth_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> AuthToken:
    """Extract the token from the Authorization Bearer header.

    Only presence is checked here; the App facade verifies signature and expiry.
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenError
    return AuthToken(credentials.credentials)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
AuthTokenDep = Annotated[AuthToken, Depends(get_auth_token)]
