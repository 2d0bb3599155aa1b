"""
Logging setup for the EasyJob backend.

Everything goes through the root logger so module loggers created with
``logging.getLogger(__name__)`` pick up the same handlers.
"""
import logging
import logging.config
from typing import Any, Dict, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Libraries that log request lines, SQL or font/image internals at INFO/DEBUG
NOISY_LOGGERS = (
    "uvicorn.access",
    "sqlalchemy.engine",
    "multipart",
    "PIL",
    "fontTools",
    "google.auth",
    "urllib3",
)


def build_logging_config(level: str = "INFO", log_file: Optional[str] = None) -> Dict[str, Any]:
    """Returns a ``dictConfig`` mapping: stdout always, a file when ``log_file`` is set."""
    level = level.upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"

    handlers: Dict[str, Dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "stream": "ext://sys.stdout",
        },
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "standard",
            "filename": log_file,
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": LOG_FORMAT, "datefmt": LOG_DATE_FORMAT},
        },
        "handlers": handlers,
        "root": {"level": level, "handlers": list(handlers)},
        "loggers": {name: {"level": "WARNING"} for name in NOISY_LOGGERS},
    }


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure application-wide logging.

    Calling it again replaces the root handlers instead of stacking them.

    Args:
        level: Logging level name; unknown names fall back to INFO
        log_file: Optional file path that receives a copy of every record
    """
    logging.config.dictConfig(build_logging_config(level, log_file))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
