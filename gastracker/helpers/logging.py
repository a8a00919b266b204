"""Logger module.

Loggers write to stdout. Level and color come from the ``LOG_LEVEL`` and
``LOG_COLOR`` environment variables unless passed explicitly.
"""

import logging
import os
import sys

import colorlog

loggers: dict[str, logging.Logger] = {}

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def _env_log_color() -> bool:
    return os.getenv("LOG_COLOR", "false").strip().lower() in {"1", "true", "yes"}


def _build_handler(log_handler: str, log_color: bool) -> logging.Handler:
    if log_handler != "stdout":
        err_msg = f"Invalid handler: {log_handler}"
        raise ValueError(err_msg)

    if log_color:
        handler: logging.Handler = colorlog.StreamHandler(sys.stdout)
        handler.setFormatter(
            colorlog.ColoredFormatter(
                f"%(log_color)s {LOG_FORMAT}", log_colors=LOG_COLORS
            )
        )
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def get_logger(
    name: str,
    log_handler: str = "stdout",
    log_level: str | None = None,
    log_color: bool | None = None,
) -> logging.Logger:
    """Get a configured logger, cached by name.

    Args:
        name: The name of the logger, usually ``__name__``.
        log_handler: The log handler type ('stdout').
        log_level: The logging level; defaults to ``LOG_LEVEL`` or INFO.
        log_color: Whether to use colored output; defaults to ``LOG_COLOR``.

    Returns:
        logging.Logger: Configured logger instance.

    Raises:
        ValueError: If invalid handler or log level is provided.
    """
    if name in loggers:
        return loggers[name]

    level_name = (log_level or os.getenv("LOG_LEVEL", "INFO")).strip().upper()
    if level_name not in LOG_LEVELS:
        err_msg = f"Invalid log level: {log_level or level_name}"
        raise ValueError(err_msg)
    level = LOG_LEVELS[level_name]

    color = _env_log_color() if log_color is None else log_color
    handler = _build_handler(log_handler, color)
    handler.setLevel(level)

    logger = colorlog.getLogger(name) if color else logging.getLogger(name)
    logger.setLevel(level)
    logger.addHandler(handler)

    loggers[name] = logger
    return logger
