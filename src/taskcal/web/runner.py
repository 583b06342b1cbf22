"""Uvicorn entry point."""

import copy
from typing import Any

import structlog
import uvicorn
from uvicorn.config import LOGGING_CONFIG

from taskcal.app import App
from taskcal.config import Config
from taskcal.web.server import create_fastapi_app

logger = structlog.get_logger(__name__)


def build_log_config() -> dict[str, Any]:
    """Uvicorn's default dictConfig with shorter access and error line formats."""
    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s %(client_addr)s "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s %(levelname)s %(message)s"
    return log_config


def run_server(app: App, config: Config) -> None:
    fastapi_app = create_fastapi_app(app, config)
    logger.info("server_starting", host=config.host, port=config.port, cors_origins=config.cors_origins)
    uvicorn.run(fastapi_app, host=config.host, port=config.port, log_config=build_log_config(), access_log=True)
