"""Tests for program models."""

import json

import pytest
from json_transform.models import (
    ArrayMapBody,
    Literal,
    MappingExpr,
    ModifierExpr,
    PointerDestination,
    PointerRef,
    Program,
    Statement,
    StringInterp,
    VarRef,
    VariableDestination,
)
from json_transform.parser import parse
from json_transform.types import MappingKind, ModifierOp, StatementOp


class TestExpressions:
    """Tests for expression nodes."""

    def test_interpolated_string_to_dict(self):
        """Test dictionary conversion of a string with a variable."""
        string = StringInterp(("/", VarRef("K"), "/id"))
        assert string.to_dict() == {
            "type": "string",
            "parts": ["/", {"type": "variable", "name": "K"}, "/id"],
        }

    def test_add_key_requires_value(self):
        """Test validation of '+' modifiers."""
        with pytest.raises(ValueError, match="requires a value"):
            ModifierExpr(VarRef("V"), ModifierOp.ADD_KEY, StringInterp(("id",)))

    def test_del_key_takes_no_value(self):
        """Test validation of '-' modifiers."""
        with pytest.raises(ValueError, match="takes no value"):
            ModifierExpr(VarRef("V"), ModifierOp.DEL_KEY, StringInterp(("id",)), Literal(1))

    def test_expressions_are_hashable(self):
        """Test that frozen nodes can be compared and hashed."""
        expr = PointerRef(StringInterp(("/a",)))
        assert expr == PointerRef(StringInterp(("/a",)))
        assert len({expr, PointerRef(StringInterp(("/a",)))}) == 1

    def test_mapping_to_dict(self):
        """Test dictionary conversion of a mapping."""
        expr = MappingExpr(PointerRef(StringInterp(())), MappingKind.ARRAY,
                           ArrayMapBody(VarRef("V")))

        assert expr.to_dict() == {
            "type": "mapping",
            "operator": "<@",
            "source": {"type": "pointer", "path": {"type": "string", "parts": []}},
            "body": {"shape": "array", "value": {"type": "variable", "name": "V"}},
        }

    def test_modifier_to_dict(self):
        """Test dictionary conversion of a '-' modifier."""
        expr = ModifierExpr(VarRef("V"), ModifierOp.DEL_KEY, StringInterp(("id",)))
        result = expr.to_dict()

        assert result["operator"] == "-"
        assert result["key"] == {"type": "string", "parts": ["id"]}
        assert "value" not in result


class TestProgram:
    """Tests for Statement and Program."""

    def test_statement_requires_operator(self):
        """Test validation of the statement operator."""
        with pytest.raises(ValueError, match="Invalid op"):
            Statement(VariableDestination("v"), "<-", Literal(1))

    def test_statement_to_dict(self):
        """Test dictionary conversion of a statement."""
        statement = Statement(
            PointerDestination(StringInterp(("/b",))),
            StatementOp.MOVE,
            PointerRef(StringInterp(("/a",))),
            line=3,
        )

        assert statement.to_dict() == {
            "destination": {"type": "pointer", "path": {"type": "string", "parts": ["/b"]}},
            "operator": "<<",
            "source": {"type": "pointer", "path": {"type": "string", "parts": ["/a"]}},
            "impliedDestination": False,
            "line": 3,
        }

    def test_program_iteration(self):
        """Test iterating a program."""
        program = parse('$a <- 1\n$b <- 2')
        assert [s.destination.name for s in program] == ["a", "b"]

    def test_program_to_dict_is_json(self):
        """Test that a program dump is JSON-serializable."""
        program = parse('"" <@ { "/$K/id":$V-`id` }\n"/x" <- true')
        dumped = json.loads(json.dumps(program.to_dict()))

        assert len(dumped["statements"]) == 2
        assert dumped["statements"][0]["impliedDestination"] is True
        assert dumped["statements"][1]["source"] == {"type": "literal", "value": True}

    def test_empty_program(self):
        """Test the default program."""
        assert len(Program()) == 0
        assert Program().to_dict() == {"statements": []}
