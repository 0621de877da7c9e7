"""Error handling implementation for JSON Transform."""

import logging
from typing import Any, List, Optional

from .types import (
    ErrorHandlerInterface,
    ErrorResponse,
    ErrorType,
    TransformError,
    TransformSyntaxError,
    ValidationError,
    ValidationResult,
)
from .utils.validation import ValidationUtils


_SUGGESTED_ACTIONS = {
    ErrorType.SYNTAX: "Check the program text near the reported line and column. "
                      "Literal '$' characters in pointers and strings must be written as '\\$'.",
    ErrorType.UNBOUND_VARIABLE: "Bind the variable with '$name <- ...' before using it. "
                                "$K, $V and $C only exist inside mapping descriptions.",
    ErrorType.MAP_TYPE: "Use '<@' to map over arrays and '<%' to map over objects.",
    ErrorType.MODIFIER_TYPE: "The '+' and '-' modifiers can only be applied to objects.",
    ErrorType.INTERPOLATION_TYPE: "Only strings, numbers, booleans and null can be interpolated. "
                                  "Point at a scalar inside the array or object instead.",
    ErrorType.MOVE_SOURCE: "The source of '<<' must be a single JSON pointer other than \"\". "
                           "Use '<-' to copy the result of an expression.",
    ErrorType.POINTER_NOT_FOUND: "Check that every segment of the JSON pointer exists in the data.",
    ErrorType.POINTER_INDEX: "Array segments must be an existing index, or '-' to append.",
    ErrorType.INVALID_POINTER: "JSON pointers must be empty or start with '/'.",
    ErrorType.INPUT: "Provide valid JSON input.",
}


class ErrorHandler(ErrorHandlerInterface):
    """
    Error handler for JSON Transform operations.

    Validates input before it reaches the evaluator and turns compile and
    evaluation errors into diagnostics with a suggested action. Errors
    are never recovered from: a failed transformation has no partial
    result.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, input_data: str) -> ValidationResult:
        """
        Validate input JSON string.

        Args:
            input_data: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        result = ValidationUtils.validate_json_string(input_data)
        for warning in result.warnings:
            self.logger.warning(warning)
        return result

    def validate_data(self, data: Any) -> ValidationResult:
        """Validate already decoded input data."""
        return ValidationUtils.validate_data(data)

    def handle_transform_error(self, error: TransformError) -> ErrorResponse:
        """
        Log a transform error and suggest how to fix it.

        Args:
            error: TransformError to handle

        Returns:
            ErrorResponse with the suggested action
        """
        error_type = error.error_type
        label = error_type.value if error_type else type(error).__name__
        self.logger.error(f"Transform error: {label} - {error}")

        return ErrorResponse(
            can_recover=False,
            suggested_action=_SUGGESTED_ACTIONS.get(
                error_type, "Unknown error type. Please check logs and retry."),
            partial_results=None
        )

    def format_error(self, error: TransformError) -> str:
        """Format a transform error as a one-line diagnostic."""
        kind = "Syntax error" if isinstance(error, TransformSyntaxError) else "Transform failed"
        return f"{kind}: {error}"

    def format_validation_errors(self, errors: List[ValidationError]) -> List[str]:
        messages = []
        for error in errors:
            if error.location:
                messages.append(f"{error.message} ({error.location})")
            else:
                messages.append(error.message)
        return messages
