"""Loguru logging configuration.

Two streams share one level. Application logs are human-readable.
Print audit records, bound through :func:`audit_logger`, are
serialized as JSON lines so batch confirmations can be reconciled
later. With a ``log_dir`` each stream also gets its own rotating file.
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"

APP_LOG_FILE = "ward-registry.log"
AUDIT_LOG_FILE = "print-audit.log"


def _is_audit(record: Any) -> bool:
    return bool(record["extra"].get("json_output", False))


def _is_app(record: Any) -> bool:
    return not _is_audit(record)


def audit_logger(**context: Any) -> Any:
    """Return a logger whose records go to the JSON audit stream."""
    return logger.bind(json_output=True, **context)


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """Configure the application and audit sinks.

    Args:
        log_level: Minimum log level to emit.
        log_dir: Optional directory for log files (rotated every 24 hours,
            retained 7 days).
    """
    level = log_level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=_LOG_FORMAT, filter=_is_app)
    logger.add(sys.stderr, level=level, serialize=True, filter=_is_audit)
    if not log_dir:
        return

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    rotation = {"rotation": "24h", "retention": "7 days"}
    logger.add(log_path / APP_LOG_FILE, level=level, format=_LOG_FORMAT, filter=_is_app, **rotation)
    logger.add(log_path / AUDIT_LOG_FILE, level=level, serialize=True, filter=_is_audit, **rotation)
