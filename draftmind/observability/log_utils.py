"""
Logging utilities for safe structured logging.

Keeps log records small: vectors, BLOBs and long chunk texts are
summarized instead of written out.

Dependencies: logging (stdlib), numpy
System role: Logging helper functions
"""

import logging
from typing import Any

import numpy as np


def safe_log_value(value: Any, max_length: int = 200) -> str:
    """
    Convert any value to a short string for logging.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            val_str = value
        elif isinstance(value, (bytes, bytearray)):
            val_str = f"blob({len(value)} bytes)"
        elif isinstance(value, np.ndarray):
            val_str = f"vector({value.size} dims)"
        elif isinstance(value, (list, tuple)):
            if value and all(isinstance(item, float) for item in value):
                val_str = f"vector({len(value)} dims)"
            else:
                val_str = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, (set, frozenset)):
            val_str = f"set({len(value)} items)"
        elif isinstance(value, dict):
            val_str = f"dict({len(value)} keys)"
        else:
            val_str = str(value)

        if len(val_str) > max_length:
            return val_str[:max_length] + f"... ({len(val_str)} chars)"
        return val_str
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with structured context, summarizing every value.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    logger.log(level, message, extra=safe_context)


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    level: int = logging.ERROR,
    **context,
) -> None:
    """
    Log an exception with its type and message as structured fields.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        level: Log level; tracebacks are attached only at ERROR and above
        **context: Additional key-value pairs
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    safe_context.update(
        {
            "error_type": type(exc).__name__,
            "error_msg": safe_log_value(str(exc)),
        }
    )
    logger.log(level, message, exc_info=True if level >= logging.ERROR else None, extra=safe_context)
