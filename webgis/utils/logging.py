"""Logging helpers: debug logging gated on APP_DEBUG, error logging with context."""

import logging
import traceback
from typing import Optional, Any

from webgis.config import DEBUG

logger = logging.getLogger("WebGIS")


def debug_log(message: str, *args, **kwargs) -> None:
    """Log a debug message only if APP_DEBUG is enabled (supports % formatting)."""
    if DEBUG:
        logger.debug(message, *args, **kwargs)


def error_log(
    message: str,
    exc: Optional[Exception] = None,
    context: Optional[dict] = None,
) -> None:
    """
    Error logging with context and, in debug mode, the full traceback.

    Args:
        message: Error message
        exc: Optional exception object
        context: Ids of the records involved (feedback_id, user_id, ...)
    """
    parts = [message]

    if context:
        parts.append("Context: " + ", ".join(f"{k}={v}" for k, v in context.items()))

    if exc:
        parts.append(f"Exception: {type(exc).__name__}: {exc}")
        if DEBUG:
            parts.append(f"Traceback:\n{''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))}")

    logger.error(" | ".join(parts))


def log_request_error(
    request: Any,
    exc: Exception,
    message: Optional[str] = None
) -> None:
    """Log a failed request with its method, path and route parameters (the ids acted on)."""
    context = {}

    try:
        context["method"] = request.method
        context["path"] = request.url.path
        context.update(getattr(request, "path_params", None) or {})
    except AttributeError as e:
        logger.debug(f"Could not extract request context: {e}")

    error_log(message or f"Unhandled exception: {type(exc).__name__}", exc=exc, context=context)
