# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the Teeny BASIC lexer/tokenizer.
#
# Test coverage includes:
#   - Operators, including the two-character comparison forms
#   - Keywords (case-insensitive) versus identifiers
#   - Number and string literals
#   - Comments and whitespace handling
#   - Cursor alignment after multi-character tokens
#   - Source locations
#   - Error conditions
# =============================================================================

import pytest
from teeny.compiler.lexer import (
    Lexer,
    Token,
    TokenType,
    KEYWORDS,
    STRUCTURAL_TYPES,
    KEYWORD_TYPES,
    OPERATOR_TYPES,
)
from teeny.compiler.errors import (
    LexicalError,
    InvalidCharacterError,
    IllegalStringCharacterError,
    UnterminatedStringError,
    MalformedNumberError,
)
from teeny.errors import SourceLocation


# =============================================================================
# Helper Functions
# =============================================================================

def tokenize(source: str) -> list[Token]:
    """Tokenize everything, dropping the trailing NEWLINE and EOF."""
    tokens = list(Lexer(source, "<test>").tokenize())
    assert tokens[-1].type == TokenType.EOF
    assert tokens[-2].type == TokenType.NEWLINE
    return tokens[:-2]


def types(source: str) -> list[TokenType]:
    return [t.type for t in tokenize(source)]


# =============================================================================
# Structural Tokens
# =============================================================================

class TestStructuralTokens:
    """The end-of-input sentinel and line breaks."""

    def test_empty_source(self):
        """An empty program is a single newline followed by EOF."""
        tokens = list(Lexer("").tokenize())
        assert [t.type for t in tokens] == [TokenType.NEWLINE, TokenType.EOF]

    def test_trailing_newline_is_added(self):
        """The last statement does not need its own line break."""
        tokens = list(Lexer("PRINT 1").tokenize())
        assert [t.type for t in tokens] == [
            TokenType.PRINT,
            TokenType.NUMBER,
            TokenType.NEWLINE,
            TokenType.EOF,
        ]

    def test_blank_lines(self):
        assert types("\n\n") == [TokenType.NEWLINE, TokenType.NEWLINE]

    def test_whitespace_only(self):
        """Spaces, tabs and carriage returns are skipped."""
        assert types(" \t \r ") == []

    def test_crlf_line_endings(self):
        assert types("LET\r\nLET") == [TokenType.LET, TokenType.NEWLINE, TokenType.LET]

    def test_eof_repeats_nothing(self):
        """tokenize() stops right after the EOF token."""
        tokens = list(Lexer("1").tokenize())
        assert sum(1 for t in tokens if t.type == TokenType.EOF) == 1


# =============================================================================
# Operator Tests
# =============================================================================

class TestOperators:
    """Single and two-character operators."""

    def test_arithmetic_operators(self):
        assert types("+ - * /") == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.STAR,
            TokenType.SLASH,
        ]

    def test_operators_without_spaces(self):
        assert types("+- */ >= = !=") == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.STAR,
            TokenType.SLASH,
            TokenType.GE,
            TokenType.ASSIGN,
            TokenType.NE,
        ]

    @pytest.mark.parametrize("text,expected", [
        ("==", TokenType.EQ),
        ("!=", TokenType.NE),
        ("<", TokenType.LT),
        ("<=", TokenType.LE),
        (">", TokenType.GT),
        (">=", TokenType.GE),
        ("=", TokenType.ASSIGN),
        ("!", TokenType.NOT),
    ])
    def test_comparison_and_assignment(self, text, expected):
        tokens = tokenize(text)
        assert len(tokens) == 1
        assert tokens[0].type == expected
        assert tokens[0].text == text

    def test_two_char_operator_takes_priority(self):
        """'>' followed by '=' is one token, not two."""
        assert types(">=5") == [TokenType.GE, TokenType.NUMBER]

    def test_cursor_after_two_char_operator(self):
        """The character after a two-character operator starts a new token."""
        assert types("<=<") == [TokenType.LE, TokenType.LT]
        assert types("===") == [TokenType.EQ, TokenType.ASSIGN]
        assert types("!==") == [TokenType.NE, TokenType.ASSIGN]

    def test_lone_bang_is_not(self):
        """'!' is accepted by the lexer even though no rule consumes it."""
        assert types("! =") == [TokenType.NOT, TokenType.ASSIGN]


# =============================================================================
# Keyword and Identifier Tests
# =============================================================================

class TestKeywordsAndIdentifiers:

    @pytest.mark.parametrize("word", sorted(KEYWORDS))
    def test_all_keywords(self, word):
        tokens = tokenize(word)
        assert tokens[0].type == KEYWORDS[word]
        assert tokens[0].type.is_keyword

    def test_keywords_are_case_insensitive(self):
        tokens = tokenize("print Print PRINT pRiNt")
        assert all(t.type == TokenType.PRINT for t in tokens)

    def test_keyword_keeps_original_text(self):
        tokens = tokenize("endWhile")
        assert tokens[0].type == TokenType.ENDWHILE
        assert tokens[0].text == "endWhile"

    def test_identifier(self):
        tokens = tokenize("counter")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].text == "counter"

    def test_identifier_with_digits(self):
        tokens = tokenize("x1y2")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].text == "x1y2"

    def test_keyword_prefix_is_identifier(self):
        """Only whole words are keywords."""
        tokens = tokenize("printer LETTER iffy")
        assert all(t.type == TokenType.IDENTIFIER for t in tokens)

    def test_keyword_between_operators(self):
        assert types("IF+-123 foo*THEN/") == [
            TokenType.IF,
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.NUMBER,
            TokenType.IDENTIFIER,
            TokenType.STAR,
            TokenType.THEN,
            TokenType.SLASH,
        ]


# =============================================================================
# Literal Tests
# =============================================================================

class TestNumbers:

    def test_integer(self):
        tokens = tokenize("123")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].text == "123"

    def test_decimal(self):
        tokens = tokenize("9.8654")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].text == "9.8654"

    def test_numbers_and_operators(self):
        tokens = tokenize("+-123 9.8654*/")
        assert [t.text for t in tokens] == ["+", "-", "123", "9.8654", "*", "/"]

    def test_number_followed_by_identifier(self):
        tokens = tokenize("12abc")
        assert [(t.type, t.text) for t in tokens] == [
            (TokenType.NUMBER, "12"),
            (TokenType.IDENTIFIER, "abc"),
        ]

    def test_sign_is_separate_token(self):
        assert types("-5") == [TokenType.MINUS, TokenType.NUMBER]

    def test_trailing_point_is_error(self):
        with pytest.raises(MalformedNumberError) as exc_info:
            tokenize("12.")
        assert exc_info.value.text == "12."

    def test_point_followed_by_letter_is_error(self):
        with pytest.raises(MalformedNumberError):
            tokenize("3.x")

    def test_second_point_is_unknown(self):
        """'1.5' is a number; the '.' after it starts no token."""
        with pytest.raises(InvalidCharacterError):
            tokenize("1.5.3")


class TestStrings:

    def test_string_literal(self):
        tokens = tokenize('"Hello, World!"')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].text == "Hello, World!"

    def test_empty_string(self):
        tokens = tokenize('""')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].text == ""

    def test_keywords_inside_string(self):
        tokens = tokenize('"PRINT LET 12."')
        assert len(tokens) == 1
        assert tokens[0].text == "PRINT LET 12."

    def test_string_and_comment(self):
        assert types('+- "This is a string" -- This is a comment!\n */') == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.STRING,
            TokenType.NEWLINE,
            TokenType.STAR,
            TokenType.SLASH,
        ]

    @pytest.mark.parametrize("char", ["\t", "\\", "%", "\r"])
    def test_illegal_characters(self, char):
        with pytest.raises(IllegalStringCharacterError) as exc_info:
            tokenize(f'"a{char}b"')
        assert exc_info.value.char == char

    def test_string_cannot_span_lines(self):
        with pytest.raises(IllegalStringCharacterError) as exc_info:
            tokenize('"abc\ndef"')
        assert exc_info.value.char == "\n"

    def test_unclosed_string_at_end_of_line(self):
        """The appended newline ends an unclosed string on the last line."""
        with pytest.raises(IllegalStringCharacterError):
            tokenize('PRINT "abc')

    def test_end_of_input_inside_string(self):
        with pytest.raises(UnterminatedStringError):
            tokenize('"abc\0')


# =============================================================================
# Comments
# =============================================================================

class TestComments:

    def test_comment_line(self):
        assert types("-- nothing to see here") == []

    def test_comment_after_statement(self):
        assert types("LET a = 1 -- set a") == [
            TokenType.LET,
            TokenType.IDENTIFIER,
            TokenType.ASSIGN,
            TokenType.NUMBER,
        ]

    def test_comment_keeps_newline(self):
        assert types("-- first\nPRINT") == [TokenType.NEWLINE, TokenType.PRINT]

    def test_comment_may_contain_anything(self):
        assert types('-- @#$ "unclosed 12. %') == []

    def test_single_minus_is_operator(self):
        assert types("- -") == [TokenType.MINUS, TokenType.MINUS]


# =============================================================================
# Locations and Laziness
# =============================================================================

class TestLocations:

    def test_token_positions(self):
        tokens = list(Lexer("LET x\n  PRINT", "prog.teeny").tokenize())
        assert (tokens[0].line, tokens[0].column) == (1, 1)
        assert (tokens[1].line, tokens[1].column) == (1, 5)
        assert (tokens[2].line, tokens[2].column) == (1, 6)
        assert (tokens[3].line, tokens[3].column) == (2, 3)

    def test_location_property(self):
        token = tokenize("  abc")[0]
        assert token.location == SourceLocation("<test>", 1, 3)
        assert str(token.location) == "<test>:1:3"

    def test_error_location(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            tokenize("LET a = 1\nPRINT @")
        error = exc_info.value
        assert error.char == "@"
        assert error.location.line == 2
        assert error.location.column == 7
        assert error.source_line == "PRINT @"

    def test_tokens_are_produced_lazily(self):
        """Earlier tokens are available before a later lexical error."""
        stream = Lexer("PRINT 1\n#").tokenize()
        assert next(stream).type == TokenType.PRINT
        assert next(stream).type == TokenType.NUMBER
        assert next(stream).type == TokenType.NEWLINE
        with pytest.raises(InvalidCharacterError):
            next(stream)

    def test_next_token_pulls_one_at_a_time(self):
        lexer = Lexer("GOTO end")
        assert lexer.next_token().type == TokenType.GOTO
        assert lexer.next_token().text == "end"
        assert lexer.next_token().type == TokenType.NEWLINE
        assert lexer.next_token().type == TokenType.EOF

    def test_tokens_are_immutable(self):
        token = tokenize("a")[0]
        with pytest.raises(AttributeError):
            token.text = "b"


# =============================================================================
# Error Conditions
# =============================================================================

class TestErrors:

    @pytest.mark.parametrize("char", ["@", "#", "(", ";", "&", "_"])
    def test_unknown_characters(self, char):
        with pytest.raises(InvalidCharacterError):
            tokenize(char)

    def test_lexical_errors_share_base(self):
        for source in ("@", '"%"', "1."):
            with pytest.raises(LexicalError):
                tokenize(source)

    def test_error_message_format(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            list(Lexer("a $", "bad.teeny").tokenize())
        message = str(exc_info.value)
        assert message.startswith("bad.teeny:1:3: error: unknown token '$'")
        assert "    a $" in message


# =============================================================================
# Token Type Groups
# =============================================================================

class TestTokenTypeGroups:

    def test_groups_are_disjoint(self):
        assert not (STRUCTURAL_TYPES & KEYWORD_TYPES)
        assert not (STRUCTURAL_TYPES & OPERATOR_TYPES)
        assert not (KEYWORD_TYPES & OPERATOR_TYPES)

    def test_groups_cover_every_type(self):
        assert STRUCTURAL_TYPES | KEYWORD_TYPES | OPERATOR_TYPES == set(TokenType)

    def test_predicates(self):
        assert TokenType.WHILE.is_keyword
        assert not TokenType.WHILE.is_operator
        assert TokenType.GE.is_operator
        assert TokenType.IDENTIFIER.is_structural
        assert not TokenType.IDENTIFIER.is_keyword

    def test_keyword_table(self):
        assert set(KEYWORDS.values()) == KEYWORD_TYPES
        assert KEYWORDS["ENDWHILE"] == TokenType.ENDWHILE
