from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import cast

import structlog

from taskcal.config import Config

logger = structlog.get_logger(__name__)


class Service:
    """Base class for services owning their own storage."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    from taskcal.core.modules.access.service import AccessService  # noqa: PLC0415
    from taskcal.core.modules.session.service import SessionService  # noqa: PLC0415
    from taskcal.core.modules.task.service import TaskService  # noqa: PLC0415
    from taskcal.core.modules.user.service import UserService  # noqa: PLC0415

    user: UserService
    session: SessionService
    access: AccessService
    task: TaskService

    def __init__(self, config: Config) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []

        # Service configuration: (attribute_name, module_path, class_name)
        # Order matters for initialization - user must be first
        service_configs = [
            ("user", "taskcal.core.modules.user.service", "UserService"),
            ("session", "taskcal.core.modules.session.service", "SessionService"),
            ("access", "taskcal.core.modules.access.service", "AccessService"),
            ("task", "taskcal.core.modules.task.service", "TaskService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(config)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config and all service instances."""

    config: Config
    services: Services

    def __init__(self, config: Config) -> None:
        self.config = config
        self.services = Services(config)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.services.start_all()
        logger.info("core_started", data_path=self.config.data_path)

    async def on_stop(self) -> None:
        await self.services.stop_all()
