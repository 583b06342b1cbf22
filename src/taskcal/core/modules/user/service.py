import bcrypt
import structlog

from taskcal.config import Config
from taskcal.core.core import Service
from taskcal.core.db import JsonCollection
from taskcal.core.modules.user.models import User
from taskcal.core.modules.user.validators import MAX_PASSWORD_BYTES, validate_password, validate_username
from taskcal.errors import DuplicateUserError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Credential store backed by the users JSON file."""

    def __init__(self, config: Config) -> None:
        super().__init__(config)
        self._collection = JsonCollection(config.users_path, User)

    async def find_by_username(self, username: str) -> User | None:
        """Get user by username, or None if there is no such user."""
        users = await self._collection.read()
        return next((u for u in users if u.username == username), None)

    async def create_user(self, username: str, password: str) -> User:
        """Register a user with a bcrypt-hashed password."""
        validate_username(username)
        validate_password(password)
        # Hash outside the lock, bcrypt is deliberately slow
        password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self.config.bcrypt_rounds))
        user = User(username=username, password_hash=password_hash.decode("utf-8"))

        async with self._collection.transaction() as users:
            if any(u.username == username for u in users):
                raise DuplicateUserError
            users.append(user)

        logger.info("user_registered", username=username)
        return user

    def verify_password(self, user: User, password: str) -> bool:
        """Verify password against stored hash."""
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), user.password_hash.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            logger.warning("invalid_password_hash", username=user.username)
            return False

    async def on_start(self) -> None:
        users = await self._collection.read()
        logger.debug("user_service_started", user_count=len(users), path=str(self._collection.path))
