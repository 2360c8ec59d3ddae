"""Per-module file logging."""

from logging import INFO, Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter

from blogapp.configs.settings import settings

_file_handler: RotatingFileHandler | None = None


def _get_file_handler() -> RotatingFileHandler:
    global _file_handler
    if _file_handler is None:
        log_file = Path(settings.LOG_FILE)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _file_handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=5)
        _file_handler.setLevel(INFO)
        _file_handler.setFormatter(
            JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"),
        )
    return _file_handler


def file_logger(logger: Logger) -> Logger:
    """
    Attach the shared rotating JSON file handler to a logger.

    Args:
        logger: Logger to extend, usually ``getLogger(__name__)``.

    Returns:
        The same logger, for assignment at module level.
    """
    if settings.LOG_TO_FILE:
        handler = _get_file_handler()
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.setLevel(settings.LOG_LEVEL.upper())
    return logger
