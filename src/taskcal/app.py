from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from taskcal.config import Config
from taskcal.core.core import Core
from taskcal.core.modules.session.models import AuthToken, LoginResult
from taskcal.core.modules.task.models import Task, TaskDraft, TaskFilter, TaskPatch
from taskcal.core.modules.user.models import UserView


class App:
    """Facade for all application operations, authenticates before delegating to Core."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def register(self, username: str, password: str) -> None:
        """Create a new user account (public)."""
        await self._core.services.user.create_user(username, password)

    async def login(self, username: str, password: str) -> LoginResult:
        """Authenticate user and issue a session token."""
        return await self._core.services.session.login(username, password)

    async def get_current_user(self, auth_token: AuthToken) -> UserView:
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        return UserView.from_domain(current_user)

    async def list_tasks(self, auth_token: AuthToken, task_filter: TaskFilter | None = None) -> list[Task]:
        """Get the current user's tasks."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.task.list_tasks(current_user, task_filter)

    async def get_task(self, auth_token: AuthToken, task_id: str) -> Task:
        """Get one task (owner only)."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.task.get_task(current_user, task_id)

    async def create_task(self, auth_token: AuthToken, draft: TaskDraft) -> Task:
        """Create a task owned by the current user."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.task.create_task(current_user, draft)

    async def update_task(self, auth_token: AuthToken, task_id: str, patch: TaskPatch) -> Task:
        """Update task fields (partial update, owner only)."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.task.update_task(current_user, task_id, patch)

    async def delete_task(self, auth_token: AuthToken, task_id: str) -> None:
        """Delete a task (owner only)."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        await self._core.services.task.delete_task(current_user, task_id)
