import structlog

from taskcal.config import Config
from taskcal.core.core import Service
from taskcal.core.db import JsonCollection
from taskcal.core.modules.task.models import Task, TaskDraft, TaskFilter, TaskPatch
from taskcal.core.modules.user.models import User
from taskcal.errors import TaskNotFoundError, ValidationError
from taskcal.utils import timestamp_id

logger = structlog.get_logger(__name__)


def _find_index(tasks: list[Task], task_id: str) -> int:
    for index, task in enumerate(tasks):
        if task.id == task_id:
            return index
    raise TaskNotFoundError


def _next_task_id(tasks: list[Task]) -> str:
    taken = {task.id for task in tasks}
    candidate = int(timestamp_id())
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


class TaskService(Service):
    """Task store for all users, kept in a single JSON file.

    The file is not partitioned by user. Ownership checks happen here, inside
    the same locked read-modify-write that applies the change.
    """

    def __init__(self, config: Config) -> None:
        super().__init__(config)
        self._collection = JsonCollection(config.tasks_path, Task)

    async def on_start(self) -> None:
        tasks = await self._collection.read()
        logger.debug("task_service_started", task_count=len(tasks), path=str(self._collection.path))

    async def list_tasks(self, owner: User, task_filter: TaskFilter | None = None) -> list[Task]:
        """Get the user's tasks in stored order, optionally filtered."""
        tasks = [task for task in await self._collection.read() if task.owner == owner.username]
        if task_filter is not None:
            tasks = [task for task in tasks if task_filter.matches(task)]
        logger.debug("list_tasks", owner=owner.username, count=len(tasks))
        return tasks

    async def get_task(self, user: User, task_id: str) -> Task:
        tasks = await self._collection.read()
        task = tasks[_find_index(tasks, task_id)]
        self.core.services.access.ensure_task_owner(user, task)
        return task

    async def create_task(self, owner: User, draft: TaskDraft) -> Task:
        """Append a new task owned by the given user."""
        async with self._collection.transaction() as tasks:
            if draft.id is not None and any(task.id == draft.id for task in tasks):
                raise ValidationError(f"Task '{draft.id}' already exists")
            task = Task(
                id=draft.id or _next_task_id(tasks),
                owner=owner.username,
                **draft.model_dump(exclude={"id"}),
            )
            tasks.append(task)

        logger.info("task_created", task_id=task.id, owner=owner.username, date=task.date.isoformat())
        return task

    async def update_task(self, user: User, task_id: str, patch: TaskPatch) -> Task:
        """Merge the patch into a task owned by the user."""
        async with self._collection.transaction() as tasks:
            index = _find_index(tasks, task_id)
            self.core.services.access.ensure_task_owner(user, tasks[index])
            tasks[index] = patch.apply(tasks[index])
            task = tasks[index]

        logger.info("task_updated", task_id=task_id, owner=user.username, fields=sorted(patch.model_fields_set))
        return task

    async def delete_task(self, user: User, task_id: str) -> None:
        """Remove a task owned by the user."""
        async with self._collection.transaction() as tasks:
            index = _find_index(tasks, task_id)
            self.core.services.access.ensure_task_owner(user, tasks[index])
            del tasks[index]

        logger.info("task_deleted", task_id=task_id, owner=user.username)
