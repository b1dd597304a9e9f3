"""Shared router helpers."""

from .error_handling import handle_errors

__all__ = ["handle_errors"]
