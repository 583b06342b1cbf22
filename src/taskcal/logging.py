import logging

import structlog

from taskcal.config import Config

SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def setup_logging(config: Config) -> None:
    """Route structlog through stdlib logging; console output in debug mode, JSON lines otherwise."""
    logging.basicConfig(level=logging.DEBUG if config.debug else logging.INFO, format="%(message)s")
    # Access lines come from uvicorn's own handler (see web/runner.py)
    logging.getLogger("uvicorn.access").propagate = False

    renderer = structlog.dev.ConsoleRenderer() if config.debug else structlog.processors.JSONRenderer()
    structlog.configure(
        processors=[*SHARED_PROCESSORS, renderer],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.get_logger(__name__).info(
        "logging_configured",
        debug=config.debug,
        users_file=str(config.users_path),
        tasks_file=str(config.tasks_path),
    )
