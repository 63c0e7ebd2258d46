"""Logging setup shared by the CLI and the web app."""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_LEVEL = logging.WARNING


def configure_logging(level: int = DEFAULT_LEVEL) -> None:
    """Configure root logging if it has not been configured yet."""
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return
    logging.basicConfig(level=level, format=LOG_FORMAT)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger with the shared configuration applied."""
    configure_logging()
    return logging.getLogger(name)
