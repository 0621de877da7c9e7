"""Utility functions for JSON Transform."""

from .json_pointer import JSONPointer, escape_segment, join_pointer, unescape_segment
from .validation import ValidationUtils

__all__ = [
    "JSONPointer",
    "ValidationUtils",
    "escape_segment",
    "join_pointer",
    "unescape_segment",
]
