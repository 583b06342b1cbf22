from taskcal.web.routers.auth import router as auth_router
from taskcal.web.routers.profile import router as profile_router
from taskcal.web.routers.tasks import router as tasks_router
from taskcal.web.routers.users import router as users_router

__all__ = [
    "auth_router",
    "profile_router",
    "tasks_router",
    "users_router",
]
