from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from taskcal.app import App
from taskcal.config import Config
from taskcal.errors import StorageIOError, UserError
from taskcal.web.error_handlers import (
    general_exception_handler,
    request_validation_error_handler,
    storage_error_handler,
    user_error_handler,
)
from taskcal.web.openapi import API_PREFIX, set_custom_openapi
from taskcal.web.routers import auth_router, profile_router, tasks_router, users_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="TaskCal API",
        lifespan=lifespan,
    )
    # Set before startup so dependencies work even without lifespan events
    app.state.app = app_instance
    app.state.config = config

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Health check endpoint (at root level, outside the API prefix)
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(users_router, prefix=API_PREFIX)
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(profile_router, prefix=API_PREFIX)
    app.include_router(tasks_router, prefix=API_PREFIX)

    # Register error handlers
    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StorageIOError, storage_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
