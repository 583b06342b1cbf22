from taskcal.core.core import Service
from taskcal.core.modules.session.models import AuthToken
from taskcal.core.modules.task.models import Task
from taskcal.core.modules.user.models import User
from taskcal.errors import ForbiddenError, InvalidOrExpiredTokenError


class AccessService(Service):
    async def ensure_authenticated(self, auth_token: AuthToken) -> User:
        """Verify the token and resolve it to an existing user."""
        claims = self.core.services.session.verify_token(auth_token)
        user = await self.core.services.user.find_by_username(claims.username)
        if user is None:
            # Signed for a user that no longer exists in the credential store
            raise InvalidOrExpiredTokenError
        return user

    def ensure_task_owner(self, user: User, task: Task) -> None:
        """Ensure the user owns the task, raise ForbiddenError if not."""
        if task.owner != user.username:
            raise ForbiddenError
