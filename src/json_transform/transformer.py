"""Compile entry point and the reusable Transformer it returns."""

import copy
import logging
from typing import Optional, Tuple

from .engines import Evaluator
from .models import Program, Statement
from .parser import parse
from .types import JSONValue


class Transformer:
    """
    A compiled transformation program.

    Instances are immutable and hold no per-call state: every apply call
    works on a private deep copy of its input and a fresh environment, so
    one Transformer can be reused, or shared between threads, freely.
    """

    def __init__(self, program: Program, source: str = "",
                 logger: Optional[logging.Logger] = None, trace: bool = False):
        self._program = program
        self._source = source
        self._evaluator = Evaluator(logger, trace=trace)

    @property
    def program(self) -> Program:
        return self._program

    @property
    def source(self) -> str:
        return self._source

    @property
    def statements(self) -> Tuple[Statement, ...]:
        return self._program.statements

    def __len__(self) -> int:
        return len(self._program)

    def __repr__(self) -> str:
        return f"<Transformer with {len(self)} statements>"

    def apply(self, value: JSONValue) -> JSONValue:
        """
        Transform a JSON-able value.

        The caller's value is never modified. If any statement fails the
        error propagates and no partial result is produced.

        Args:
            value: Input data, made of dicts, lists, strings, numbers,
                booleans and None, without circular references

        Returns:
            The transformed data

        Raises:
            EvaluationError: On the first failing statement
        """
        return self._evaluator.run(self._program, copy.deepcopy(value))

    __call__ = apply


def compile(text: str, logger: Optional[logging.Logger] = None,
            trace: bool = False) -> Transformer:
    """
    Compile transformation program text.

    Args:
        text: Program text
        logger: Optional logger used for tracing
        trace: Log each executed statement at debug level

    Returns:
        Reusable Transformer

    Raises:
        TransformSyntaxError: If text is not a valid program
    """
    return Transformer(parse(text, logger), text, logger, trace)


parse_transform = compile
