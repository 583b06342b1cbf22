from datetime import UTC, datetime, timedelta

import structlog
from jose import ExpiredSignatureError, JWTError, jwt

from taskcal.core.core import Service
from taskcal.core.modules.session.models import AuthToken, LoginResult, TokenClaims
from taskcal.errors import InvalidCredentialsError, InvalidOrExpiredTokenError, UserNotFoundError
from taskcal.utils import now

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Issues and verifies stateless signed session tokens."""

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(minutes=self.config.token_ttl_minutes)

    async def login(self, username: str, password: str) -> LoginResult:
        """Check credentials and issue a token bound to the username."""
        user = await self.core.services.user.find_by_username(username)
        if user is None:
            logger.info("login_failed", username=username, reason="unknown_user")
            raise UserNotFoundError
        if not self.core.services.user.verify_password(user, password):
            logger.info("login_failed", username=username, reason="bad_password")
            raise InvalidCredentialsError

        token = self.create_token(user.username)
        logger.info("login_succeeded", username=user.username)
        return LoginResult(token=token, username=user.username)

    def create_token(self, username: str, issued_at: datetime | None = None) -> AuthToken:
        issued_at = issued_at or now()
        claims = {
            "sub": username,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.token_ttl).timestamp()),
        }
        return AuthToken(jwt.encode(claims, self.config.token_secret_key, algorithm=self.config.token_algorithm))

    def verify_token(self, auth_token: AuthToken) -> TokenClaims:
        """Check signature and expiry, return the embedded identity."""
        try:
            payload = jwt.decode(auth_token, self.config.token_secret_key, algorithms=[self.config.token_algorithm])
        except ExpiredSignatureError as e:
            raise InvalidOrExpiredTokenError from e
        except JWTError as e:
            logger.debug("token_rejected", error=str(e))
            raise InvalidOrExpiredTokenError from e

        username = payload.get("sub")
        issued_at = payload.get("iat")
        expires_at = payload.get("exp")
        if not isinstance(username, str) or not username or expires_at is None:
            raise InvalidOrExpiredTokenError
        return TokenClaims(
            username=username,
            issued_at=datetime.fromtimestamp(issued_at or expires_at, UTC),
            expires_at=datetime.fromtimestamp(expires_at, UTC),
        )
