"""Recursive-descent parser building the transformation AST."""

import logging
from typing import List, Optional, Set

from .lexer import Token, TokenType, tokenize
from .models import (
    ArrayMapBody,
    Destination,
    Expr,
    Literal,
    MapBody,
    MappingExpr,
    ModifierExpr,
    ObjectMapBody,
    PointerDestination,
    PointerRef,
    Program,
    Statement,
    StringInterp,
    VarRef,
    VariableDestination,
)
from .types import MappingKind, ModifierOp, StatementOp, TransformSyntaxError

_STATEMENT_OPS = {
    TokenType.COPY: StatementOp.COPY,
    TokenType.MOVE: StatementOp.MOVE,
}

_MAPPING_OPS = {
    TokenType.ARRAY_MAP: MappingKind.ARRAY,
    TokenType.OBJECT_MAP: MappingKind.OBJECT,
}

_LITERALS = {TokenType.NUMBER, TokenType.TRUE, TokenType.FALSE, TokenType.NULL}

_KEY_ARGUMENTS = {
    TokenType.STRING,
    TokenType.POINTER,
    TokenType.VARIABLE,
    TokenType.SYSTEM_VARIABLE,
}

_PRIMARIES = _LITERALS | _KEY_ARGUMENTS


class Parser:
    """
    Parser for transformation programs.

    Consumes the token list produced by the lexer and returns an immutable
    Program. No type checking happens here: whether an operand is an array,
    object or string is only known once the program is applied.
    """

    def __init__(self, tokens: List[Token], logger: Optional[logging.Logger] = None):
        """
        Initialize the parser.

        Args:
            tokens: Token list ending with an EOF token
            logger: Optional logger instance
        """
        self.tokens = tokens
        self.index = 0
        self.logger = logger or logging.getLogger(__name__)

    def parse(self) -> Program:
        """
        Parse the whole token list.

        Returns:
            Program with the statements in source order

        Raises:
            TransformSyntaxError: If the tokens do not form a valid program
        """
        statements = []
        while self._current().type != TokenType.EOF:
            statement = self._parse_statement()
            self.logger.debug(f"Parsed statement on line {statement.line}: "
                              f"{statement.op.value} into {statement.destination}")
            statements.append(statement)
        return Program(tuple(statements))

    def _parse_statement(self) -> Statement:
        start = self._current()

        # Destination followed by an operator
        if (start.type in (TokenType.VARIABLE, TokenType.POINTER)
                and self._peek().type in _STATEMENT_OPS):
            destination = self._parse_destination()
            op = _STATEMENT_OPS[self._advance().type]
            source = self._parse_source_expression()
            return Statement(destination, op, source, line=start.line)

        if start.type == TokenType.SYSTEM_VARIABLE and self._peek().type in _STATEMENT_OPS:
            raise self._error(f"Cannot assign to system variable ${start.value}", start,
                              expected="a user variable or JSON pointer")

        # Operator without destination, or a bare source expression
        op = StatementOp.COPY
        if start.type in _STATEMENT_OPS:
            op = _STATEMENT_OPS[self._advance().type]
        head = self._current()
        source = self._parse_source_expression()
        if head.type != TokenType.POINTER:
            raise self._error("Statement without destination must start with a JSON pointer",
                              head, expected="a destination and <- or <<")
        destination = PointerDestination(self._string_from_token(head))
        return Statement(destination, op, source, implied_destination=True, line=start.line)

    def _parse_destination(self) -> Destination:
        token = self._advance()
        if token.type == TokenType.VARIABLE:
            return VariableDestination(token.value)
        return PointerDestination(self._string_from_token(token))

    def _parse_source_expression(self) -> Expr:
        """Parse a primary followed by any number of modifiers and mappings."""
        expr = self._parse_primary()
        while True:
            token = self._current()
            if token.type in _MAPPING_OPS:
                self._advance()
                kind = _MAPPING_OPS[token.type]
                expr = MappingExpr(expr, kind, self._parse_map_body())
            elif token.type == TokenType.PLUS:
                self._advance()
                key = self._parse_key_argument()
                self._expect(TokenType.COLON)
                value = self._parse_primary()
                expr = ModifierExpr(expr, ModifierOp.ADD_KEY, key, value)
            elif token.type == TokenType.MINUS:
                self._advance()
                key = self._parse_key_argument()
                expr = ModifierExpr(expr, ModifierOp.DEL_KEY, key)
            else:
                return expr

    def _parse_map_body(self) -> MapBody:
        token = self._current()
        if token.type == TokenType.LBRACKET:
            self._advance()
            value = self._parse_source_expression()
            self._expect(TokenType.RBRACKET)
            return ArrayMapBody(value)
        if token.type == TokenType.LBRACE:
            self._advance()
            key = self._parse_source_expression()
            self._expect(TokenType.COLON)
            value = self._parse_source_expression()
            self._expect(TokenType.RBRACE)
            return ObjectMapBody(key, value)
        raise self._error("Invalid mapping description", token, expected="'[' or '{'")

    def _parse_key_argument(self) -> Expr:
        token = self._current()
        if token.type not in _KEY_ARGUMENTS:
            raise self._error("Invalid modifier argument", token,
                              expected=self._describe(_KEY_ARGUMENTS))
        return self._parse_primary()

    def _parse_primary(self) -> Expr:
        token = self._current()
        if token.type in _LITERALS:
            self._advance()
            return Literal(token.value)
        if token.type == TokenType.POINTER:
            self._advance()
            return PointerRef(self._string_from_token(token))
        if token.type == TokenType.STRING:
            self._advance()
            return self._string_from_token(token)
        if token.type in (TokenType.VARIABLE, TokenType.SYSTEM_VARIABLE):
            self._advance()
            return VarRef(token.value)
        raise self._error("Expected a value", token, expected=self._describe(_PRIMARIES))

    def _string_from_token(self, token: Token) -> StringInterp:
        parts = []
        for part in token.value:
            if isinstance(part, Token):
                parts.append(VarRef(part.value))
            else:
                parts.append(part)
        return StringInterp(tuple(parts))

    def _current(self) -> Token:
        return self.tokens[self.index]

    def _peek(self) -> Token:
        return self.tokens[min(self.index + 1, len(self.tokens) - 1)]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        if token.type != TokenType.EOF:
            self.index += 1
        return token

    def _expect(self, token_type: TokenType) -> Token:
        token = self._current()
        if token.type != token_type:
            raise self._error(f"Unexpected {token.type.value}", token,
                              expected=f"'{token_type.value}'")
        return self._advance()

    @staticmethod
    def _describe(token_types: Set[TokenType]) -> str:
        return ", ".join(sorted(t.value for t in token_types))

    @staticmethod
    def _error(message: str, token: Token, expected: Optional[str] = None) -> TransformSyntaxError:
        if token.type == TokenType.EOF and "end of input" not in message:
            message = f"{message}, found end of input"
        return TransformSyntaxError(message, token.position, token.line, token.column, expected)


def parse(text: str, logger: Optional[logging.Logger] = None) -> Program:
    """Tokenize and parse program text."""
    return Parser(tokenize(text, logger), logger).parse()
