"""Application entry point for the TaskCal server."""

from taskcal.app import App
from taskcal.config import Config
from taskcal.logging import setup_logging
from taskcal.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
