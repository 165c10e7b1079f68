"""Entry point: `tunebook` console script and `python -m tunebook.main`."""

import structlog

from tunebook import __version__
from tunebook.app import App
from tunebook.config import Config
from tunebook.logging import setup_logging
from tunebook.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    structlog.get_logger(__name__).info(
        "starting_tunebook", version=__version__, host=config.host, port=config.port, bearer_tokens=config.accept_bearer_tokens
    )
    run_server(App(config), config)


if __name__ == "__main__":
    main()
