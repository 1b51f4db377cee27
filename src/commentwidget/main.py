"""Application entry point for the comment widget server."""

from commentwidget.app import App
from commentwidget.config import Config
from commentwidget.logging import setup_logging
from commentwidget.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
