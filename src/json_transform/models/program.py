"""Statement and program nodes of the transformation AST."""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Tuple, Union

from ..types import StatementOp
from .expressions import Expr, StringInterp


@dataclass(frozen=True)
class VariableDestination:
    """Statement target binding a user variable."""

    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "variable", "name": self.name}


@dataclass(frozen=True)
class PointerDestination:
    """Statement target writing the document at a JSON Pointer."""

    path: StringInterp

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "pointer", "path": self.path.to_dict()}


Destination = Union[VariableDestination, PointerDestination]


@dataclass(frozen=True)
class Statement:
    """
    A single transformation: destination, operator and source expression.

    Statements without a written destination carry the pointer at the
    head of their source expression as destination, and are flagged with
    ``implied_destination``.
    """

    destination: Destination
    op: StatementOp
    source: Expr
    implied_destination: bool = False
    line: int = 1

    def __post_init__(self):
        if not isinstance(self.op, StatementOp):
            raise ValueError(f"Invalid op: {self.op}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "destination": self.destination.to_dict(),
            "operator": self.op.value,
            "source": self.source.to_dict(),
            "impliedDestination": self.implied_destination,
            "line": self.line,
        }


@dataclass(frozen=True)
class Program:
    """Ordered, immutable sequence of statements."""

    statements: Tuple[Statement, ...] = ()

    def __iter__(self) -> Iterator[Statement]:
        return iter(self.statements)

    def __len__(self) -> int:
        return len(self.statements)

    def to_dict(self) -> Dict[str, Any]:
        return {"statements": [statement.to_dict() for statement in self.statements]}
