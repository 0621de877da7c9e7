"""Core type definitions for JSON Transform."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union


JSONValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]


class ValueKind(Enum):
    """Enumeration of JSON value kinds."""
    NULL = "null"
    BOOL = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class StatementOp(Enum):
    """Enumeration of statement operators."""
    COPY = "<-"
    MOVE = "<<"


class MappingKind(Enum):
    """Enumeration of mapping operators."""
    ARRAY = "<@"
    OBJECT = "<%"


class ModifierOp(Enum):
    """Enumeration of single-value modifiers."""
    ADD_KEY = "+"
    DEL_KEY = "-"


class ErrorType(Enum):
    """Enumeration of error types."""
    SYNTAX = "syntax"
    UNBOUND_VARIABLE = "unbound_variable"
    MAP_TYPE = "map_type"
    MODIFIER_TYPE = "modifier_type"
    INTERPOLATION_TYPE = "interpolation_type"
    MOVE_SOURCE = "move_source"
    POINTER_NOT_FOUND = "pointer_not_found"
    POINTER_INDEX = "pointer_index"
    INVALID_POINTER = "invalid_pointer"
    INPUT = "input"


@dataclass
class TransformResult:
    """Result of a text-level transform operation."""
    success: bool
    json_string: str
    data: Any = None
    errors: Optional[List[str]] = None


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str
    partial_results: Optional[Any] = None


class TransformError(Exception):
    """Base exception for every compile and evaluation failure."""

    error_type: Optional[ErrorType] = None

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class TransformSyntaxError(TransformError):
    """Malformed program text, raised at compile time only."""

    error_type = ErrorType.SYNTAX

    def __init__(self, message: str, position: int = 0, line: int = 1,
                 column: int = 1, expected: Optional[str] = None):
        detail = f"{message} at line {line}, column {column}"
        if expected:
            detail += f" (expected {expected})"
        super().__init__(detail, context={
            "position": position,
            "line": line,
            "column": column,
            "expected": expected,
        })
        self.position = position
        self.line = line
        self.column = column
        self.expected = expected


class EvaluationError(TransformError):
    """Base class for errors raised while applying a program."""


class UnboundVariableError(EvaluationError):
    error_type = ErrorType.UNBOUND_VARIABLE


class MapTypeError(EvaluationError):
    error_type = ErrorType.MAP_TYPE


class ModifierTypeError(EvaluationError):
    error_type = ErrorType.MODIFIER_TYPE


class InterpolationTypeError(EvaluationError):
    error_type = ErrorType.INTERPOLATION_TYPE


class MoveSourceError(EvaluationError):
    error_type = ErrorType.MOVE_SOURCE


class PointerError(EvaluationError):
    """Base class for JSON Pointer failures."""


class PointerNotFoundError(PointerError):
    error_type = ErrorType.POINTER_NOT_FOUND


class PointerIndexError(PointerError):
    error_type = ErrorType.POINTER_INDEX


class InvalidPointerError(PointerError):
    error_type = ErrorType.INVALID_POINTER


# Abstract base classes for interfaces

class MappingProcessorInterface(ABC):
    """Abstract interface for mapping processors."""

    @abstractmethod
    def process(self, source: JSONValue, body: Any, environment: Any,
                evaluate: Callable[[Any], JSONValue]) -> JSONValue:
        """Evaluate a mapping body once per element of source."""
        pass


class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""

    @abstractmethod
    def validate_input(self, input_data: str) -> ValidationResult:
        """Validate input data."""
        pass

    @abstractmethod
    def handle_transform_error(self, error: TransformError) -> ErrorResponse:
        """Handle compile and evaluation errors."""
        pass
