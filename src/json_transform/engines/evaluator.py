"""Evaluator executing a compiled program against a document."""

import copy
import logging
from typing import Optional

from ..environment import Environment
from ..models import (
    Expr,
    Literal,
    MappingExpr,
    ModifierExpr,
    PointerDestination,
    PointerRef,
    Program,
    Statement,
    StringInterp,
    VarRef,
)
from ..processors import ArrayMapProcessor, ObjectMapProcessor
from ..types import (
    JSONValue,
    MappingKind,
    ModifierOp,
    ModifierTypeError,
    MoveSourceError,
    StatementOp,
)
from ..utils.json_pointer import JSONPointer
from ..values import describe, render


class Evaluator:
    """
    Environment-threaded interpreter for transformation programs.

    Each run works on its own document and Environment; the evaluator
    itself holds no per-run state, so one instance can serve any number
    of runs.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, trace: bool = False):
        """
        Initialize the evaluator.

        Args:
            logger: Optional logger instance
            trace: Log every statement and its result at debug level
        """
        self.logger = logger or logging.getLogger(__name__)
        self.trace = trace
        self.array_processor = ArrayMapProcessor(self.logger)
        self.object_processor = ObjectMapProcessor(self.logger)

    def run(self, program: Program, document: JSONValue) -> JSONValue:
        """
        Execute every statement of program in order.

        Args:
            program: Compiled program
            document: Root value, modified in place

        Returns:
            The transformed document

        Raises:
            EvaluationError: On the first failing statement
        """
        environment = Environment()
        for statement in program:
            document = self.execute(statement, document, environment)
        return document

    def execute(self, statement: Statement, document: JSONValue,
                environment: Environment) -> JSONValue:
        """Execute one statement and return the new document root."""
        if statement.op == StatementOp.MOVE and not isinstance(statement.source, PointerRef):
            raise MoveSourceError(
                f"Move on line {statement.line} needs a bare JSON pointer as source",
                context={"line": statement.line},
            )

        value = copy.deepcopy(self.evaluate(statement.source, document, environment))

        # the source slot is found before writing, so that a destination
        # replacing one of its ancestors does not change what gets removed
        source_slot = None
        if statement.op == StatementOp.MOVE:
            source_pointer = self.pointer(statement.source.path, document, environment)
            if source_pointer.is_root:
                raise MoveSourceError(
                    f"Move on line {statement.line} cannot take the whole document",
                    context={"line": statement.line},
                )
            source_slot = source_pointer.locate(document)

        destination = statement.destination
        if isinstance(destination, PointerDestination):
            target = self.pointer(destination.path, document, environment)
            document = target.set(document, value)
            target_text = target.text
        else:
            environment.bind(destination.name, value)
            target_text = f"${destination.name}"

        if source_slot is not None:
            parent, key = source_slot
            del parent[key]

        if self.trace:
            self.logger.debug(f"line {statement.line}: {statement.op.value} "
                              f"{describe(value)} into {target_text!r}")
        return document

    def evaluate(self, expr: Expr, document: JSONValue, environment: Environment) -> JSONValue:
        """
        Evaluate an expression.

        Expressions never modify the document; only statements do.
        """
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, PointerRef):
            return self.pointer(expr.path, document, environment).resolve(document)
        if isinstance(expr, VarRef):
            return environment.lookup(expr.name)
        if isinstance(expr, StringInterp):
            return self.interpolate(expr, document, environment)
        if isinstance(expr, MappingExpr):
            return self._evaluate_mapping(expr, document, environment)
        if isinstance(expr, ModifierExpr):
            return self._evaluate_modifier(expr, document, environment)
        raise TypeError(f"Unknown expression node: {type(expr).__name__}")

    def interpolate(self, expr: StringInterp, document: JSONValue,
                    environment: Environment, where: str = "a string") -> str:
        pieces = []
        for part in expr.parts:
            if isinstance(part, str):
                pieces.append(part)
            else:
                pieces.append(render(self.evaluate(part, document, environment), where))
        return "".join(pieces)

    def pointer(self, path: StringInterp, document: JSONValue,
                environment: Environment) -> JSONPointer:
        return JSONPointer(self.interpolate(path, document, environment, "a JSON pointer"))

    def _evaluate_mapping(self, expr: MappingExpr, document: JSONValue,
                          environment: Environment) -> JSONValue:
        source = self.evaluate(expr.source, document, environment)
        processor = (self.array_processor if expr.kind == MappingKind.ARRAY
                     else self.object_processor)
        return processor.process(
            source, expr.body, environment,
            lambda body_expr: self.evaluate(body_expr, document, environment),
        )

    def _evaluate_modifier(self, expr: ModifierExpr, document: JSONValue,
                           environment: Environment) -> JSONValue:
        operand = self.evaluate(expr.operand, document, environment)
        if not isinstance(operand, dict):
            raise ModifierTypeError(
                f"Modifier '{expr.op.value}' requires an object, got {describe(operand)}",
                context={"operator": expr.op.value},
            )
        key = render(self.evaluate(expr.key, document, environment), "an object key")

        if expr.op == ModifierOp.ADD_KEY:
            result = dict(operand)
            result[key] = self.evaluate(expr.value, document, environment)
            return result

        if key not in operand:
            return operand
        return {k: v for k, v in operand.items() if k != key}
