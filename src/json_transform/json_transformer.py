"""Text-level JSON Transform facade with validation, caching and profiling."""

import json
import logging
import os
from typing import Any, Dict, Optional

from .error_handler import ErrorHandler
from .profiler import PerformanceProfiler
from .transformer import Transformer, compile
from .types import TransformError, TransformResult
from .utils.validation import NESTING_TOO_DEEP

DEBUG_ENV_VAR = "JSON_TRANSFORM_DEBUG"

_FALSE_VALUES = {"", "0", "false", "no", "off"}


def debug_from_env(environ: Optional[Dict[str, str]] = None) -> bool:
    """Whether the JSON_TRANSFORM_DEBUG environment variable asks for tracing."""
    environ = os.environ if environ is None else environ
    return environ.get(DEBUG_ENV_VAR, "").strip().lower() not in _FALSE_VALUES


class JSONTransformer:
    """
    Facade applying transformation programs to JSON text.

    Validates the input, compiles the program (caching compiled programs
    by their text), applies it and encodes the result. User errors are
    reported through TransformResult instead of being raised.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 debug: Optional[bool] = None,
                 enable_profiling: bool = False,
                 indent: Optional[int] = None,
                 cache_size: int = 64):
        """
        Initialize the JSON Transformer.

        Args:
            logger: Optional logger instance
            debug: Trace parsing and evaluation at debug level; defaults
                to the JSON_TRANSFORM_DEBUG environment variable
            enable_profiling: Record performance metrics for each call
            indent: Indentation of the encoded output, compact when None
            cache_size: Maximum number of compiled programs kept
        """
        self.logger = logger or logging.getLogger(__name__)
        self.debug = debug_from_env() if debug is None else debug
        self.indent = indent
        self.cache_size = cache_size
        self.error_handler = ErrorHandler(self.logger)
        self.profiler = PerformanceProfiler(self.logger) if enable_profiling else None
        self._cache: Dict[str, Transformer] = {}

    def compile(self, program_text: str) -> Transformer:
        """
        Compile program text, reusing a previous compilation when possible.

        Raises:
            TransformSyntaxError: If the program is invalid
        """
        transformer = self._cache.get(program_text)
        if transformer is not None:
            return transformer

        if self.profiler:
            with self.profiler.profile_operation("compile", len(program_text.encode("utf-8"))) as p:
                transformer = compile(program_text, self.logger, trace=self.debug)
                p.statement_count = len(transformer)
        else:
            transformer = compile(program_text, self.logger, trace=self.debug)

        if self.debug:
            self.logger.debug(f"Compiled program: {json.dumps(transformer.program.to_dict())}")

        if len(self._cache) >= self.cache_size:
            self._cache.pop(next(iter(self._cache)))
        self._cache[program_text] = transformer
        return transformer

    def transform(self, program_text: str, json_string: str) -> TransformResult:
        """
        Apply a program to JSON text.

        Args:
            program_text: Transformation program
            json_string: Input JSON text

        Returns:
            TransformResult with the encoded output, or the errors
        """
        validation = self.error_handler.validate_input(json_string)
        if not validation.is_valid:
            return self._failure(self.error_handler.format_validation_errors(validation.errors))

        return self._run(program_text, json.loads(json_string), len(json_string.encode("utf-8")))

    def transform_data(self, program_text: str, data: Any) -> TransformResult:
        """
        Apply a program to already decoded data.

        Args:
            program_text: Transformation program
            data: JSON-able input data

        Returns:
            TransformResult with the transformed data and its encoding
        """
        validation = self.error_handler.validate_data(data)
        if not validation.is_valid:
            return self._failure(self.error_handler.format_validation_errors(validation.errors))

        return self._run(program_text, data, 0)

    def _run(self, program_text: str, data: Any, input_size: int) -> TransformResult:
        try:
            transformer = self.compile(program_text)
            self.logger.info(f"Applying program with {len(transformer)} statements")

            if self.profiler:
                with self.profiler.profile_operation("apply", input_size) as p:
                    result = transformer.apply(data)
                    json_string = self.encode(result)
                    p.output_size = len(json_string.encode("utf-8"))
                    p.statement_count = len(transformer)
            else:
                result = transformer.apply(data)
                json_string = self.encode(result)

        except TransformError as e:
            response = self.error_handler.handle_transform_error(e)
            return self._failure([self.error_handler.format_error(e),
                                  f"Hint: {response.suggested_action}"])
        except RecursionError:
            self.logger.error("Transform error: input nesting exceeds the recursion limit")
            return self._failure([f"{NESTING_TOO_DEEP} to transform"])

        return TransformResult(success=True, json_string=json_string, data=result)

    def encode(self, data: Any) -> str:
        return json.dumps(data, ensure_ascii=False, indent=self.indent)

    @staticmethod
    def _failure(errors) -> TransformResult:
        return TransformResult(success=False, json_string="", data=None, errors=errors)
