"""Expression nodes of the transformation AST."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from ..types import JSONValue, MappingKind, ModifierOp


class Expr:
    """Base class for expression nodes."""

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True)
class Literal(Expr):
    """A JSON scalar written directly in the program."""

    value: JSONValue

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "literal", "value": self.value}


@dataclass(frozen=True)
class VarRef(Expr):
    """
    Reference to a variable binding.

    User variables start with a lower-case letter; the upper-case names
    ``K``, ``V`` and ``C`` are bound inside mapping bodies.
    """

    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "variable", "name": self.name}


@dataclass(frozen=True)
class StringInterp(Expr):
    """Concatenation of literal text and interpolated expressions."""

    parts: Tuple[Union[str, Expr], ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "string",
            "parts": [part if isinstance(part, str) else part.to_dict()
                      for part in self.parts],
        }


@dataclass(frozen=True)
class PointerRef(Expr):
    """Read of the document at a JSON Pointer."""

    path: StringInterp

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "pointer", "path": self.path.to_dict()}


@dataclass(frozen=True)
class ArrayMapBody:
    """``[ value ]`` mapping description, collected into an array."""

    value: Expr

    def to_dict(self) -> Dict[str, Any]:
        return {"shape": "array", "value": self.value.to_dict()}


@dataclass(frozen=True)
class ObjectMapBody:
    """``{ key : value }`` mapping description, collected into an object."""

    key: Expr
    value: Expr

    def to_dict(self) -> Dict[str, Any]:
        return {"shape": "object", "key": self.key.to_dict(),
                "value": self.value.to_dict()}


MapBody = Union[ArrayMapBody, ObjectMapBody]


@dataclass(frozen=True)
class MappingExpr(Expr):
    """Evaluation of a body once per element of an array or object."""

    source: Expr
    kind: MappingKind
    body: MapBody

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "mapping",
            "operator": self.kind.value,
            "source": self.source.to_dict(),
            "body": self.body.to_dict(),
        }


@dataclass(frozen=True)
class ModifierExpr(Expr):
    """Derivation of a new object by adding or removing one key."""

    operand: Expr
    op: ModifierOp
    key: Expr
    value: Optional[Expr] = None

    def __post_init__(self):
        if self.op == ModifierOp.ADD_KEY and self.value is None:
            raise ValueError("ADD_KEY modifier requires a value")
        if self.op == ModifierOp.DEL_KEY and self.value is not None:
            raise ValueError("DEL_KEY modifier takes no value")

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "type": "modifier",
            "operator": self.op.value,
            "operand": self.operand.to_dict(),
            "key": self.key.to_dict(),
        }
        if self.value is not None:
            result["value"] = self.value.to_dict()
        return result
