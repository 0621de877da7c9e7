"""Validation utilities for transformation input."""

import json
from typing import Any, List, Optional, Set, Tuple

from ..types import ErrorType, ValidationError, ValidationResult
from ..values import kind_of
from .json_pointer import join_pointer

NESTING_TOO_DEEP = "JSON input nesting too deep"


class ValidationUtils:
    """Utility class for validating JSON text and in-memory data."""

    @staticmethod
    def validate_json_string(json_string: str) -> ValidationResult:
        """
        Validate JSON string syntax.

        Args:
            json_string: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not json_string.strip():
            errors.append(ValidationError(
                type=ErrorType.INPUT,
                message="JSON input is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.INPUT,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)
        except RecursionError:
            errors.append(ValidationError(
                type=ErrorType.INPUT,
                message=NESTING_TOO_DEEP,
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        max_depth = ValidationUtils._calculate_max_depth(data)
        if max_depth > 100:
            warnings.append(f"Deep nesting detected (depth: {max_depth}). "
                            "Mapping bodies recurse per level.")

        return ValidationResult(is_valid=True, errors=errors, warnings=warnings)

    @staticmethod
    def validate_data(data: Any) -> ValidationResult:
        """
        Validate that in-memory data is JSON-able and acyclic.

        Args:
            data: Value to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        try:
            problem = ValidationUtils._find_invalid_value(data, [], set())
        except RecursionError:
            problem = NESTING_TOO_DEEP, []
        if problem:
            message, path = problem
            errors.append(ValidationError(
                type=ErrorType.INPUT,
                message=message,
                location=join_pointer(path) or "root"
            ))
        return ValidationResult(is_valid=not errors, errors=errors, warnings=[])

    @staticmethod
    def _find_invalid_value(data: Any, path: List[Any],
                            seen: Set[int]) -> Optional[Tuple[str, List[Any]]]:
        """Return (message, path) of the first non-JSON-able or circular value."""
        try:
            kind_of(data)
        except TypeError as e:
            return str(e), path

        if isinstance(data, (dict, list)):
            obj_id = id(data)
            if obj_id in seen:
                return "Circular reference detected", path
            seen.add(obj_id)
            try:
                if isinstance(data, dict):
                    for key, value in data.items():
                        if not isinstance(key, str):
                            return f"Object key {key!r} is not a string", path
                        problem = ValidationUtils._find_invalid_value(value, path + [key], seen)
                        if problem:
                            return problem
                else:
                    for index, item in enumerate(data):
                        problem = ValidationUtils._find_invalid_value(item, path + [index], seen)
                        if problem:
                            return problem
            finally:
                seen.remove(obj_id)
        return None

    @staticmethod
    def _calculate_max_depth(data: Any, current_depth: int = 0) -> int:
        """Calculate maximum nesting depth without recursing."""
        max_depth = current_depth
        stack = [(data, current_depth)]
        while stack:
            value, depth = stack.pop()
            max_depth = max(max_depth, depth)
            if isinstance(value, dict):
                stack.extend((child, depth + 1) for child in value.values())
            elif isinstance(value, list):
                stack.extend((child, depth + 1) for child in value)
        return max_depth
