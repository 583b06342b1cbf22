import datetime as dt
from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import Field

from taskcal.core.modules.task.models import Task, TaskDraft, TaskFilter, TaskPatch
from taskcal.utils import MONTH_RE
from taskcal.web.deps import AppDep, AuthTokenDep
from taskcal.web.openapi import ErrorResponse, SuccessResponse

router: APIRouter = APIRouter(tags=["tasks"])

AUTH_RESPONSES: dict[int | str, dict[str, object]] = {
    401: {"model": ErrorResponse, "description": "Missing bearer token"},
    403: {"model": ErrorResponse, "description": "Invalid or expired token, or task owned by another user"},
}


class CreateTaskResponse(SuccessResponse):
    id: str = Field(..., description="Id of the stored task")


@router.get(
    "/tasks",
    summary="List own tasks",
    description="""Get the current user's tasks in stored order.

Tasks of other users are never returned. All filters are optional and combined with AND:
- `q` - case-insensitive text matched against name and subject
- `status` - exact status, e.g. `pendiente`
- `date` - a single day, `YYYY-MM-DD`
- `month` - a calendar month, `YYYY-MM`""",
    operation_id="listTasks",
    responses={200: {"description": "Tasks owned by the current user"}, **AUTH_RESPONSES},
)
async def list_tasks(
    app: AppDep,
    auth_token: AuthTokenDep,
    q: Annotated[str | None, Query(description="Text to search in name and subject")] = None,
    status: Annotated[str | None, Query(description="Exact status")] = None,
    date: Annotated[dt.date | None, Query(description="Single day, YYYY-MM-DD")] = None,
    month: Annotated[str | None, Query(pattern=MONTH_RE.pattern, description="Calendar month, YYYY-MM")] = None,
) -> list[Task]:
    task_filter = TaskFilter(q=q, status=status, date=date, month=month)
    return await app.list_tasks(auth_token, task_filter)


@router.get(
    "/tasks/{task_id}",
    summary="Get task",
    description="Get a single task. Only its owner can read it.",
    operation_id="getTask",
    responses={
        200: {"description": "Task details"},
        404: {"model": ErrorResponse, "description": "Task not found"},
        **AUTH_RESPONSES,
    },
)
async def get_task(task_id: str, app: AppDep, auth_token: AuthTokenDep) -> Task:
    return await app.get_task(auth_token, task_id)


@router.post(
    "/tasks",
    summary="Create task",
    description=(
        "Create a task owned by the current user. The owner is taken from the token; "
        "an `owner` field in the body is ignored. When `id` is omitted the server assigns one."
    ),
    operation_id="createTask",
    responses={
        200: {"description": "Task created"},
        400: {"model": ErrorResponse, "description": "Duplicate id"},
        500: {"model": ErrorResponse, "description": "Tasks file could not be written"},
        **AUTH_RESPONSES,
    },
)
async def create_task(draft: TaskDraft, app: AppDep, auth_token: AuthTokenDep) -> CreateTaskResponse:
    task = await app.create_task(auth_token, draft)
    return CreateTaskResponse(id=task.id)


@router.put(
    "/tasks/{task_id}",
    summary="Update task",
    description=(
        "Partially update a task. Only the fields provided are changed; `id` and `owner` "
        "cannot be changed. Only the owner can update a task."
    ),
    operation_id="updateTask",
    responses={
        200: {"description": "Task updated"},
        404: {"model": ErrorResponse, "description": "Task not found"},
        500: {"model": ErrorResponse, "description": "Tasks file could not be written"},
        **AUTH_RESPONSES,
    },
)
async def update_task(task_id: str, patch: TaskPatch, app: AppDep, auth_token: AuthTokenDep) -> SuccessResponse:
    await app.update_task(auth_token, task_id, patch)
    return SuccessResponse()


@router.delete(
    "/tasks/{task_id}",
    summary="Delete task",
    description="Delete a task. Only the owner can delete a task.",
    operation_id="deleteTask",
    responses={
        200: {"description": "Task deleted"},
        404: {"model": ErrorResponse, "description": "Task not found"},
        500: {"model": ErrorResponse, "description": "Tasks file could not be written"},
        **AUTH_RESPONSES,
    },
)
async def delete_task(task_id: str, app: AppDep, auth_token: AuthTokenDep) -> SuccessResponse:
    await app.delete_task(auth_token, task_id)
    return SuccessResponse()
