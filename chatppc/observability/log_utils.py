"""
Structured logging helpers.

Context keys are passed through ``extra`` so the formatter and any JSON
shipper see them as fields (source, session_id, chunk_count, ...).
Values are rendered compactly: chunk text is truncated and collections
are summarized by size, so a failing batch never dumps whole documents
into the log.

Dependencies: logging (stdlib), chatppc.core.exceptions
System role: Logging helper functions
"""

import logging
from typing import Any

from chatppc.core.exceptions import ChatPPCException

MAX_VALUE_LENGTH = 200

# Attributes of LogRecord that extra= must not overwrite
_RESERVED = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def _render(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, BaseException):
        value = f"{type(value).__name__}: {value}"
    elif isinstance(value, (list, tuple, set)):
        return f"{len(value)} items"
    elif isinstance(value, dict):
        return f"{len(value)} keys"
    text = str(value)
    if len(text) > MAX_VALUE_LENGTH:
        return f"{text[:MAX_VALUE_LENGTH]}... ({len(text)} chars)"
    return text


def _extra(context: dict[str, Any]) -> dict[str, Any]:
    return {
        (f"ctx_{key}" if key in _RESERVED else key): _render(value)
        for key, value in context.items()
    }


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with context fields.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Fields such as source, session_id or chunk_count
    """
    logger.log(level, message, extra=_extra(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an exception with its traceback and context fields.

    Application errors contribute their details map, so a failed ingest
    logs the source it carried even when the caller did not pass it.
    """
    fields = {}
    if isinstance(exc, ChatPPCException):
        fields.update(exc.details)
        exc_message = exc.message
    else:
        exc_message = str(exc)
    fields.update(context)
    fields["error_type"] = type(exc).__name__
    fields["error_msg"] = exc_message
    logger.error(message, exc_info=exc, extra=_extra(fields))
