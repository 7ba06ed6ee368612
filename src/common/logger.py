"""
Centralized logging configuration for the job tracker.

Messages logged through a JobLogger carry the operation and job id twice:
as a `[op:update] [job:65a1b2c3]` prefix for the plain text format, and as
`operation` / `job_id` fields for the JSON line format.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# LogRecord attributes copied into JSON lines when present
CONTEXT_FIELDS = ("operation", "job_id")


class JsonFormatter(logging.Formatter):
    """One JSON object per line; None-valued context fields are left out."""

    def format(self, record: logging.LogRecord) -> str:
        data: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                data[key] = value
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


class JobLogger:
    """Logger bound to an operation and, optionally, one job record."""

    def __init__(
        self,
        name: str,
        operation: Optional[str] = None,
        job_id: Optional[str] = None,
    ):
        self.logger = logging.getLogger(name)
        self.operation = operation
        self.job_id = job_id

    def bind(self, operation: Optional[str] = None, job_id: Optional[str] = None) -> "JobLogger":
        """Return a logger for the same name with extra context."""
        return JobLogger(
            self.logger.name,
            operation=operation or self.operation,
            job_id=job_id or self.job_id,
        )

    def _format_message(self, message: str) -> str:
        prefix = []
        if self.operation:
            prefix.append(f"[op:{self.operation}]")
        if self.job_id:
            prefix.append(f"[job:{str(self.job_id)[:8]}]")
        return " ".join(prefix + [message])

    def _log(self, level: int, message: str, **kwargs) -> None:
        extra = {"operation": self.operation, "job_id": self.job_id, **kwargs.pop("extra", {})}
        self.logger.log(level, self._format_message(message), extra=extra, **kwargs)

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs):
        """Log at ERROR with the active traceback."""
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, message, **kwargs)


def setup_logging(level: str = "INFO", format: str = "simple") -> None:
    """
    Configure the root logger with a single stdout handler.

    Args:
        level: Log level name; unknown names fall back to INFO
        format: "simple" for text lines, "json" for JSON lines
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))

    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(
    name: str,
    operation: Optional[str] = None,
    job_id: Optional[str] = None,
) -> JobLogger:
    return JobLogger(name, operation, job_id)
