"""Tests for the lexer."""

import pytest
from json_transform.lexer import Lexer, Token, TokenType, tokenize
from json_transform.types import TransformSyntaxError


def types_of(text):
    return [token.type for token in tokenize(text)]


class TestLexer:
    """Tests for Lexer class."""

    def test_operators(self):
        """Test recognition of every operator."""
        assert types_of("<- << <@ <% + - : { } [ ]") == [
            TokenType.COPY, TokenType.MOVE, TokenType.ARRAY_MAP, TokenType.OBJECT_MAP,
            TokenType.PLUS, TokenType.MINUS, TokenType.COLON,
            TokenType.LBRACE, TokenType.RBRACE, TokenType.LBRACKET, TokenType.RBRACKET,
            TokenType.EOF,
        ]

    def test_empty_program(self):
        """Test that an empty program yields only EOF."""
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF

    def test_comments_and_whitespace_dropped(self):
        """Test comment stripping."""
        assert types_of('# leading comment\n"/a" <- "/b"  # trailing\n') == [
            TokenType.POINTER, TokenType.COPY, TokenType.POINTER, TokenType.EOF,
        ]

    def test_hash_inside_quotes_is_not_comment(self):
        """Test that # inside a pointer or string is literal text."""
        tokens = tokenize('"/a#b" `x#y`')
        assert tokens[0].value == ("/a#b",)
        assert tokens[1].value == ("x#y",)

    def test_numbers(self):
        """Test integer and float literals."""
        tokens = tokenize("0 42 -7 1.5 2e3")
        values = [token.value for token in tokens[:-1]]
        assert values == [0, 42, -7, 1.5, 2000.0]
        assert isinstance(values[1], int)
        assert isinstance(values[4], float)

    def test_keywords(self):
        """Test true, false and null literals."""
        tokens = tokenize("true false null")
        assert [(t.type, t.value) for t in tokens[:-1]] == [
            (TokenType.TRUE, True), (TokenType.FALSE, False), (TokenType.NULL, None),
        ]

    def test_unknown_word(self):
        """Test that bare words other than keywords are rejected."""
        with pytest.raises(TransformSyntaxError, match="Unknown word 'nope'"):
            tokenize("nope")

    def test_variables(self):
        """Test user and system variables."""
        tokens = tokenize("$defs $K $V $C")
        assert [(t.type, t.value) for t in tokens[:-1]] == [
            (TokenType.VARIABLE, "defs"),
            (TokenType.SYSTEM_VARIABLE, "K"),
            (TokenType.SYSTEM_VARIABLE, "V"),
            (TokenType.SYSTEM_VARIABLE, "C"),
        ]

    def test_variable_name_mixed_case(self):
        """Test that a user variable may contain upper-case letters after the first."""
        assert tokenize("$myVar")[0].value == "myVar"

    @pytest.mark.parametrize("text", ["$X", "$1", "$", "$_a"])
    def test_invalid_variable(self, text):
        """Test malformed variable names."""
        with pytest.raises(TransformSyntaxError, match="Invalid variable"):
            tokenize(text)

    def test_pointer_interpolation(self):
        """Test variables inside a JSON pointer."""
        token = tokenize('"/$K/id"')[0]
        assert token.type == TokenType.POINTER
        assert token.value[0] == "/"
        assert isinstance(token.value[1], Token)
        assert token.value[1].type == TokenType.SYSTEM_VARIABLE
        assert token.value[1].value == "K"
        assert token.value[2] == "/id"

    def test_string_escapes(self):
        """Test JSON escapes plus backtick and dollar escapes."""
        token = tokenize(r'`a\`b\$c\nA\\`')[0]
        assert token.type == TokenType.STRING
        assert token.value == ("a`b$c\nA\\",)

    def test_pointer_may_contain_backtick(self):
        """Test that a pointer can hold a literal backtick."""
        assert tokenize('"/a`b"')[0].value == ("/a`b",)

    def test_empty_pointer(self):
        """Test the root pointer token."""
        token = tokenize('""')[0]
        assert token.type == TokenType.POINTER
        assert token.value == ()

    def test_invalid_escape(self):
        """Test rejection of unknown escapes."""
        with pytest.raises(TransformSyntaxError, match="Invalid escape"):
            tokenize(r'`\q`')

    def test_short_unicode_escape(self):
        """Test rejection of truncated \\u escapes."""
        with pytest.raises(TransformSyntaxError, match="Invalid escape"):
            tokenize(r'"\u12"')

    def test_unicode_escape(self):
        """Test a BMP \\u escape."""
        assert tokenize(r'`caf\u00e9`')[0].value == ("caf\u00e9",)

    def test_surrogate_pair_escape(self):
        """Test that a UTF-16 surrogate pair decodes to one character."""
        token = tokenize(r'`\ud83d\ude00!`')[0]

        assert token.value == ("\U0001F600!",)
        assert len(token.value[0]) == 2

    @pytest.mark.parametrize("text", [
        r'`\ud83d`',
        r'`\ud83dx`',
        r'`\ud83d\u0041`',
        r'`\ude00`',
    ])
    def test_unpaired_surrogate(self, text):
        """Test rejection of surrogates that do not form a pair."""
        with pytest.raises(TransformSyntaxError, match="Unpaired"):
            tokenize(text)

    def test_unterminated_pointer(self):
        """Test unterminated JSON pointer."""
        with pytest.raises(TransformSyntaxError, match="Unterminated JSON pointer"):
            tokenize('"/b" <- "/a')

    def test_unterminated_string(self):
        """Test unterminated backtick string."""
        with pytest.raises(TransformSyntaxError, match="Unterminated string"):
            tokenize("`abc")

    def test_unexpected_character(self):
        """Test unexpected characters."""
        with pytest.raises(TransformSyntaxError, match="Unexpected character '!'"):
            tokenize("!")

    def test_token_locations(self):
        """Test line and column tracking."""
        tokens = Lexer('"/a"\n  <- "/b"').tokenize()
        assert (tokens[0].line, tokens[0].column) == (1, 1)
        assert (tokens[1].line, tokens[1].column) == (2, 3)
        assert tokens[1].position == 7

    def test_error_location(self):
        """Test that syntax errors report line and column."""
        with pytest.raises(TransformSyntaxError) as exc_info:
            tokenize('"/a" <- "/b"\n  ?')
        assert exc_info.value.line == 2
        assert exc_info.value.column == 3

    def test_minus_before_backtick_is_operator(self):
        """Test that '-' is a modifier unless a digit follows."""
        assert types_of("$V-`id`") == [
            TokenType.SYSTEM_VARIABLE, TokenType.MINUS, TokenType.STRING, TokenType.EOF,
        ]
