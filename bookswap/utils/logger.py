"""Logging helpers.

Library modules only ask for named loggers; handlers and format are left to
whatever process embeds the catalog. Scripts call :func:`configure_logging`.
"""
import logging

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
