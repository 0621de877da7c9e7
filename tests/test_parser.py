"""Tests for the program parser."""

import pytest
from json_transform.lexer import tokenize
from json_transform.models import (
    ArrayMapBody,
    Literal,
    MappingExpr,
    ModifierExpr,
    ObjectMapBody,
    PointerDestination,
    PointerRef,
    Program,
    StringInterp,
    VarRef,
    VariableDestination,
)
from json_transform.parser import Parser, parse
from json_transform.types import MappingKind, ModifierOp, StatementOp, TransformSyntaxError


class TestParser:
    """Tests for Parser class."""

    def test_parse_empty_program(self):
        """Test parsing a program with no statements."""
        program = parse("  # only a comment\n")
        assert isinstance(program, Program)
        assert len(program) == 0

    def test_parse_copy(self):
        """Test parsing a copy between pointers."""
        program = parse('"/destination" <- "/source"')
        statement = program.statements[0]

        assert statement.op == StatementOp.COPY
        assert statement.destination == PointerDestination(StringInterp(("/destination",)))
        assert statement.source == PointerRef(StringInterp(("/source",)))
        assert not statement.implied_destination

    def test_parse_move(self):
        """Test parsing a move."""
        statement = parse('"/b" << "/a"').statements[0]
        assert statement.op == StatementOp.MOVE

    def test_parse_variable_binding(self):
        """Test binding a variable then using it."""
        program = parse('$defs <- "/definitions"\n"" <- $defs')

        assert len(program) == 2
        assert program.statements[0].destination == VariableDestination("defs")
        assert program.statements[1].source == VarRef("defs")
        assert program.statements[1].line == 2

    def test_parse_literals(self):
        """Test scalar literals as sources."""
        program = parse('"/a" <- 1 "/b" <- -2.5 "/c" <- true "/d" <- null')
        assert [s.source for s in program] == [
            Literal(1), Literal(-2.5), Literal(True), Literal(None),
        ]

    def test_parse_array_mapping_with_implied_destination(self):
        """Test the array identity program."""
        statement = parse('"" <@ [ $V ]').statements[0]

        assert statement.implied_destination
        assert statement.op == StatementOp.COPY
        assert statement.destination == PointerDestination(StringInterp(()))
        assert statement.source == MappingExpr(
            PointerRef(StringInterp(())), MappingKind.ARRAY, ArrayMapBody(VarRef("V"))
        )

    def test_parse_object_mapping(self):
        """Test the object identity program."""
        source = parse('"" <% { $K:$V }').statements[0].source

        assert source.kind == MappingKind.OBJECT
        assert source.body == ObjectMapBody(VarRef("K"), VarRef("V"))

    def test_parse_records_to_map(self):
        """Test a mapping whose key is an interpolated pointer and value a modifier."""
        source = parse('"" <@ { "/$K/id":$V-`id` }').statements[0].source

        assert source.body.key == PointerRef(StringInterp(("/", VarRef("K"), "/id")))
        assert source.body.value == ModifierExpr(
            VarRef("V"), ModifierOp.DEL_KEY, StringInterp(("id",))
        )

    def test_parse_add_key_modifier(self):
        """Test the '+' modifier."""
        body = parse('"" <% [ $V+`id`:$K ]').statements[0].source.body

        assert body.value == ModifierExpr(
            VarRef("V"), ModifierOp.ADD_KEY, StringInterp(("id",)), VarRef("K")
        )

    def test_modifiers_are_left_associative(self):
        """Test chaining modifiers."""
        source = parse('"/x" <- $v+`a`:1+`b`:2-`c`').statements[0].source

        assert source.op == ModifierOp.DEL_KEY
        assert source.operand.op == ModifierOp.ADD_KEY
        assert source.operand.value == Literal(2)
        assert source.operand.operand.value == Literal(1)
        assert source.operand.operand.operand == VarRef("v")

    def test_parse_copy_with_mapping(self):
        """Test copying the result of a mapping."""
        statement = parse('"/destination" <- "/source" <@ [ $V+`order`:$K ]').statements[0]

        assert not statement.implied_destination
        assert isinstance(statement.source, MappingExpr)
        assert statement.source.source == PointerRef(StringInterp(("/source",)))

    def test_nested_mapping(self):
        """Test a mapping inside a mapping body."""
        body = parse('"" <@ [ $V <@ [ $V ] ]').statements[0].source.body
        assert isinstance(body.value, MappingExpr)

    def test_operator_without_destination(self):
        """Test an operator whose destination is implied by the source pointer."""
        statement = parse('<- "/a" <% { $K:$V }').statements[0]

        assert statement.implied_destination
        assert statement.destination == PointerDestination(StringInterp(("/a",)))

    def test_statements_without_separators(self):
        """Test several statements on one line."""
        program = parse('"/a" <- "/b" "/c" <- "/d" "/e" <@ [ $V ]')
        assert len(program) == 3

    def test_comment_does_not_change_parse(self):
        """Test that trailing comments are ignored."""
        plain = parse('"/b" <- "/a"\n"" <@ [ $V ]')
        commented = parse('"/b" <- "/a"   # copy a\n"" <@ [ $V ] # identity')
        assert plain == commented

    def test_missing_destination_without_pointer_head(self):
        """Test a bare expression that does not start with a pointer."""
        with pytest.raises(TransformSyntaxError, match="must start with a JSON pointer"):
            parse("$v <@ [ $V ]")

    def test_system_variable_destination(self):
        """Test rejection of assignment to $K, $V or $C."""
        with pytest.raises(TransformSyntaxError, match="system variable"):
            parse('$K <- "/a"')

    def test_invalid_mapping_description(self):
        """Test a mapping operator without brackets."""
        with pytest.raises(TransformSyntaxError) as exc_info:
            parse('"" <@ $V')
        assert exc_info.value.expected == "'[' or '{'"

    def test_missing_colon_in_object_mapping(self):
        """Test an object mapping without a colon."""
        with pytest.raises(TransformSyntaxError, match="expected ':'"):
            parse('"" <% { $K $V }')

    def test_unclosed_array_mapping(self):
        """Test a mapping body reaching the end of input."""
        with pytest.raises(TransformSyntaxError, match="end of input"):
            parse('"" <@ [ $V')

    def test_invalid_modifier_argument(self):
        """Test a modifier with a non-string argument."""
        with pytest.raises(TransformSyntaxError, match="Invalid modifier argument"):
            parse('"" <- $v-true')

    def test_missing_source(self):
        """Test an operator without a source expression."""
        with pytest.raises(TransformSyntaxError, match="Expected a value"):
            parse('"/a" <-')

    def test_error_position(self):
        """Test that syntax errors carry the offending token position."""
        with pytest.raises(TransformSyntaxError) as exc_info:
            Parser(tokenize('"/a" <- "/b"\n"/c" <- ]')).parse()
        assert exc_info.value.line == 2
        assert exc_info.value.column == 9
