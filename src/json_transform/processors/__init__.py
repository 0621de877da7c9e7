"""Mapping processors for array and object sources."""

from .array_processor import ArrayMapProcessor
from .object_processor import ObjectMapProcessor

__all__ = ["ArrayMapProcessor", "ObjectMapProcessor"]
