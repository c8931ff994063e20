from __future__ import annotations

import logging

from planimeter.consts.logging import DEFAULT_LOG_LEVEL, LOG_DATE_FORMAT, LOG_FORMAT

_configured = False


def configure_logging(log_level: int | str = DEFAULT_LOG_LEVEL) -> None:
    global _configured  # noqa: PLW0603
    logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, level=log_level)
    logging.getLogger("planimeter").setLevel(log_level)
    _configured = True


def get_logger(name: str, log_level: int | str | None = None) -> logging.Logger:
    if not _configured:
        configure_logging()
    logger = logging.getLogger(name)
    if log_level is not None:
        logger.setLevel(log_level)
    return logger
