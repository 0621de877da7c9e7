"""AST models for JSON Transform programs."""

from .expressions import (
    ArrayMapBody,
    Expr,
    Literal,
    MapBody,
    MappingExpr,
    ModifierExpr,
    ObjectMapBody,
    PointerRef,
    StringInterp,
    VarRef,
)
from .program import (
    Destination,
    PointerDestination,
    Program,
    Statement,
    VariableDestination,
)

__all__ = [
    "ArrayMapBody",
    "Destination",
    "Expr",
    "Literal",
    "MapBody",
    "MappingExpr",
    "ModifierExpr",
    "ObjectMapBody",
    "PointerDestination",
    "PointerRef",
    "Program",
    "Statement",
    "StringInterp",
    "VarRef",
    "VariableDestination",
]
