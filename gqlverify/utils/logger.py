"""
Structured logging utility for the verification engine.

Provides JSON-formatted logging with payload previews, context injection,
and operation timing so test runs can be grepped and parsed after the fact.
"""

import json
import logging
import time
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Dict, Optional, Union

from gqlverify.exceptions import VerificationError

DEFAULT_PREVIEW_LENGTH = 120


def preview_payload(
    payload: Union[bytes, str, None], limit: int = DEFAULT_PREVIEW_LENGTH
) -> str:
    """
    Shorten a JSON payload for inclusion in a log line.

    Whitespace runs are collapsed so multi-line canonical buffers stay on
    a single log line.

    Args:
        payload: Raw payload bytes or text (None for absent data)
        limit: Maximum number of characters kept

    Returns:
        Preview string

    Example:
        >>> preview_payload(b'{"a": 1}')
        '{"a": 1}'
        >>> preview_payload(None)
        'null'
    """
    if payload is None:
        return "null"

    if isinstance(payload, bytes):
        text = payload.decode("utf-8", errors="replace")
    else:
        text = payload

    text = " ".join(text.split())
    if len(text) <= limit:
        return text

    return f"{text[:limit]}... ({len(text)} chars)"


class StructuredLogger:
    """
    JSON-formatted logger with context injection and operation timing.

    Every record is emitted as one JSON object per line.
    """

    def __init__(self, name: str):
        """
        Initialize structured logger.

        Args:
            name: Logger name (typically __name__ from calling module)
        """
        self.logger = logging.getLogger(name)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("%(message)s", datefmt="%Y-%m-%dT%H:%M:%S")
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def _format_log(
        self,
        level: str,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        duration_ms: Optional[float] = None,
        error: Optional[str] = None,
    ) -> str:
        """
        Format log entry as JSON.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR)
            message: Human-readable message
            operation: Operation name (e.g., "verify", "diff")
            context: Context dict with case name, query preview, etc.
            duration_ms: Operation duration in milliseconds
            error: Error message if applicable

        Returns:
            JSON-formatted log string
        """
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": level,
            "message": message,
        }

        if operation:
            log_entry["operation"] = operation

        if context:
            log_entry["context"] = context

        if duration_ms is not None:
            log_entry["duration_ms"] = round(duration_ms, 2)

        if error:
            log_entry["error"] = error

        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def debug(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Log debug message."""
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(self._format_log("DEBUG", message, operation, context))

    def info(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        duration_ms: Optional[float] = None,
    ):
        """Log info message."""
        self.logger.info(self._format_log("INFO", message, operation, context, duration_ms))

    def warning(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        error: Optional[str] = None,
    ):
        """Log warning message."""
        self.logger.warning(
            self._format_log("WARNING", message, operation, context, error=error)
        )

    def error(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        error: Optional[str] = None,
        duration_ms: Optional[float] = None,
    ):
        """Log error message."""
        self.logger.error(
            self._format_log("ERROR", message, operation, context, duration_ms, error)
        )


def log_operation(operation_name: str):
    """
    Decorator to log operation start, duration, and outcome.

    Usage:
        @log_operation("verify")
        def verify(case):
            ...
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)

            context: Dict[str, Any] = {"function": func.__name__}
            case = args[0] if args else kwargs.get("case")
            case_name = getattr(case, "name", None)
            if case_name:
                context["case"] = case_name

            logger.debug(f"Starting {operation_name}", operation=operation_name, context=context)

            start_time = time.time()
            try:
                result = func(*args, **kwargs)
            except VerificationError as e:
                # Expected failure; the caller reports it.
                logger.warning(
                    f"Failed {operation_name}",
                    operation=operation_name,
                    context={**context, "duration_ms": round((time.time() - start_time) * 1000, 2)},
                    error=f"{type(e).__name__}: {e}".splitlines()[0],
                )
                raise
            except Exception as e:
                duration_ms = (time.time() - start_time) * 1000
                logger.error(
                    f"Failed {operation_name}",
                    operation=operation_name,
                    context=context,
                    error=f"{type(e).__name__}: {e}".splitlines()[0],
                    duration_ms=duration_ms,
                )
                raise

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                f"Completed {operation_name}",
                operation=operation_name,
                context=context,
                duration_ms=duration_ms,
            )
            return result

        return wrapper

    return decorator


def get_logger(name: str) -> StructuredLogger:
    """
    Factory function to get a structured logger instance.

    Args:
        name: Logger name (typically __name__ from calling module)

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(name)
