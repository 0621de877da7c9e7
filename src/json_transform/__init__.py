"""
JSON Transform - arbitrary transformation of JSON-able data.

Implements a small language describing transformations of a JSON-able
value into another one, addressing data with JSON Pointers (RFC 6901):

    >>> from json_transform import compile
    >>> compile('"" <@ { "/$K/id":$V-`id` }').apply([{"id": 1, "name": "Alice"}])
    {'1': {'name': 'Alice'}}
"""

__version__ = "0.1.0"

from .transformer import Transformer, compile, parse_transform
from .json_transformer import JSONTransformer
from .types import (
    EvaluationError,
    InterpolationTypeError,
    InvalidPointerError,
    MapTypeError,
    ModifierTypeError,
    MoveSourceError,
    PointerError,
    PointerIndexError,
    PointerNotFoundError,
    TransformError,
    TransformResult,
    TransformSyntaxError,
    UnboundVariableError,
)

__all__ = [
    "Transformer",
    "compile",
    "parse_transform",
    "JSONTransformer",
    "TransformResult",
    "TransformError",
    "TransformSyntaxError",
    "EvaluationError",
    "UnboundVariableError",
    "MapTypeError",
    "ModifierTypeError",
    "InterpolationTypeError",
    "MoveSourceError",
    "PointerError",
    "PointerNotFoundError",
    "PointerIndexError",
    "InvalidPointerError",
]
