"""
Teeny BASIC Lexer (Tokenizer)
=============================

This module implements the lexer for Teeny BASIC. It converts source
text into a lazy stream of tokens that the parser pulls one at a time.

Token Categories
----------------
- Structural: end of file, newline (statements are line-terminated)
- Literals: numbers (123, 9.75), strings ("double quoted")
- Identifiers: variable and label names (letter, then letters/digits)
- Keywords: LABEL GOTO PRINT INPUT LET IF THEN ENDIF WHILE REPEAT ENDWHILE
- Operators: = ! + - * / == != < <= > >=

Keywords are matched case-insensitively, so ``print``, ``Print`` and
``PRINT`` are all the PRINT keyword. The token keeps the original text.

Comments
--------
A comment starts with ``--`` and runs to the end of the line. The line
break itself is still returned as a NEWLINE token.

Strings
-------
No escape sequences. Strings are copied verbatim into a printf format
string, so carriage returns, line feeds, tabs, backslashes and '%' are
rejected inside them.

Numbers
-------
Decimal digits with an optional fraction: ``12``, ``3.25``. There is no
sign (that is the unary operator's job), no exponent and no other base.
``12.`` is an error.

Example Usage
-------------
>>> from teeny.compiler.lexer import Lexer
>>> for token in Lexer('LET x = 3.5').tokenize():
...     print(token)
Token(LET, 'LET', 1:1)
Token(IDENTIFIER, 'x', 1:5)
Token(ASSIGN, '=', 1:7)
Token(NUMBER, '3.5', 1:9)
Token(NEWLINE, '\\n', 1:12)
Token(EOF, '\\x00', 2:1)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator
import string

from teeny.errors import SourceLocation
from teeny.compiler.errors import (
    InvalidCharacterError,
    IllegalStringCharacterError,
    UnterminatedStringError,
    MalformedNumberError,
)


# Marks the end of the character buffer.
END_OF_INPUT = "\0"


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token types for Teeny BASIC.

    The three groups below are disjoint. Membership is tested against
    the STRUCTURAL, KEYWORD and OPERATOR sets, never against the order
    of the members.
    """

    # === Structural Tokens ===
    EOF = auto()            # End of input
    NEWLINE = auto()        # Statement terminator
    NUMBER = auto()         # 12, 3.25
    IDENTIFIER = auto()     # Variable and label names
    STRING = auto()         # "text" (value excludes the quotes)

    # === Keywords ===
    LABEL = auto()
    GOTO = auto()
    PRINT = auto()
    INPUT = auto()
    LET = auto()
    IF = auto()
    THEN = auto()
    ENDIF = auto()
    WHILE = auto()
    REPEAT = auto()
    ENDWHILE = auto()

    # === Operators ===
    ASSIGN = auto()         # =
    NOT = auto()            # !
    PLUS = auto()           # +
    MINUS = auto()          # -
    STAR = auto()           # *
    SLASH = auto()          # /
    EQ = auto()             # ==
    NE = auto()             # !=
    LT = auto()             # <
    LE = auto()             # <=
    GT = auto()             # >
    GE = auto()             # >=

    @property
    def is_structural(self) -> bool:
        return self in STRUCTURAL_TYPES

    @property
    def is_keyword(self) -> bool:
        return self in KEYWORD_TYPES

    @property
    def is_operator(self) -> bool:
        return self in OPERATOR_TYPES


STRUCTURAL_TYPES = frozenset({
    TokenType.EOF,
    TokenType.NEWLINE,
    TokenType.NUMBER,
    TokenType.IDENTIFIER,
    TokenType.STRING,
})

KEYWORD_TYPES = frozenset({
    TokenType.LABEL,
    TokenType.GOTO,
    TokenType.PRINT,
    TokenType.INPUT,
    TokenType.LET,
    TokenType.IF,
    TokenType.THEN,
    TokenType.ENDIF,
    TokenType.WHILE,
    TokenType.REPEAT,
    TokenType.ENDWHILE,
})

OPERATOR_TYPES = frozenset({
    TokenType.ASSIGN,
    TokenType.NOT,
    TokenType.PLUS,
    TokenType.MINUS,
    TokenType.STAR,
    TokenType.SLASH,
    TokenType.EQ,
    TokenType.NE,
    TokenType.LT,
    TokenType.LE,
    TokenType.GT,
    TokenType.GE,
})

COMPARISON_TYPES = frozenset({
    TokenType.EQ,
    TokenType.NE,
    TokenType.LT,
    TokenType.LE,
    TokenType.GT,
    TokenType.GE,
})


# =============================================================================
# Keyword and Operator Mapping
# =============================================================================

# Upper-case reserved word -> token type
KEYWORDS: dict[str, TokenType] = {
    token_type.name: token_type for token_type in KEYWORD_TYPES
}

# Operators that are always a single character
SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "\n": TokenType.NEWLINE,
}

# First character -> (type alone, type when followed by '=')
EQUALS_PAIR_TOKENS: dict[str, tuple[TokenType, TokenType]] = {
    ">": (TokenType.GT, TokenType.GE),
    "<": (TokenType.LT, TokenType.LE),
    "=": (TokenType.ASSIGN, TokenType.EQ),
    "!": (TokenType.NOT, TokenType.NE),
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from Teeny BASIC source.

    Attributes:
        type: The TokenType classification
        text: The exact lexeme (string literals exclude their quotes)
        line: Line number of the first character (1-indexed)
        column: Column number of the first character (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    text: str
    line: int = 1
    column: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.text!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes Teeny BASIC source code on demand.

    The lexer holds the whole character buffer plus a cursor. A newline
    is appended to the buffer so the last statement does not need its
    own line break. Reading past the end yields END_OF_INPUT.

    Cursor discipline: after ``next_token`` returns, the cursor sits on
    the first character after the token. Operators advance by their
    width. Strings, numbers and identifiers are scanned so the cursor
    rests on their last character, then advanced once more.

    Usage:
        lexer = Lexer(source_text, filename)
        token = lexer.next_token()      # pull one token
        tokens = list(lexer.tokenize()) # or drain the rest

    Attributes:
        source: The source text with the trailing newline appended
        filename: Name of the source file (for error reporting)
        current_char: Character under the cursor
        current_position: Index of current_char in source
    """

    DIGITS = string.digits
    IDENT_START = string.ascii_letters
    IDENT_CHARS = string.ascii_letters + string.digits
    WHITESPACE = " \t\r"
    ILLEGAL_STRING_CHARS = "\r\n\t\\%"

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the lexer with source code.

        Args:
            source: The BASIC source code to tokenize
            filename: Name of the source file (for error messages)
        """
        self.source = source + "\n"
        self.filename = filename

        self.current_char = ""
        self.current_position = -1

        # Line tracking for error reporting
        self._line = 1
        self._line_start_pos = 0

        self._next_char()

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens until (and including) the EOF token.

        Yields:
            Token objects representing each lexical element

        Raises:
            LexicalError: If a character cannot be tokenized
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _next_char(self, steps: int = 1) -> None:
        """Move the cursor forward, updating line tracking."""
        for _ in range(steps):
            if self.current_char == "\n":
                self._line += 1
                self._line_start_pos = self.current_position + 1
            self.current_position += 1

        if self.current_position >= len(self.source):
            self.current_char = END_OF_INPUT
        else:
            self.current_char = self.source[self.current_position]

    def _peek(self) -> str:
        """Return the character after the cursor without advancing."""
        pos = self.current_position + 1
        if pos >= len(self.source):
            return END_OF_INPUT
        return self.source[pos]

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace(self) -> None:
        while self.current_char in self.WHITESPACE:
            self._next_char()

    def _skip_comment(self) -> None:
        """Skip a ``--`` comment, stopping on the newline that ends it."""
        if self.current_char == "-" and self._peek() == "-":
            while self.current_char not in ("\n", END_OF_INPUT):
                self._next_char()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Callers must stop once an EOF token has been returned.

        Raises:
            LexicalError: If the text at the cursor forms no valid token
        """
        self._skip_whitespace()
        self._skip_comment()

        start_line = self._line
        start_column = self.current_position - self._line_start_pos + 1

        char = self.current_char
        next_char = self._peek()

        if char in SINGLE_CHAR_TOKENS:
            token = self._make_token(SINGLE_CHAR_TOKENS[char], char, start_line, start_column)
            self._next_char()
            return token

        if char in EQUALS_PAIR_TOKENS:
            single, double = EQUALS_PAIR_TOKENS[char]
            if next_char == "=":
                token = self._make_token(double, char + next_char, start_line, start_column)
                self._next_char(2)
            else:
                token = self._make_token(single, char, start_line, start_column)
                self._next_char()
            return token

        if char == END_OF_INPUT:
            return self._make_token(TokenType.EOF, char, start_line, start_column)

        if char == '"':
            token = self._scan_string(start_line, start_column)
        elif char in self.DIGITS:
            token = self._scan_number(start_line, start_column)
        elif char in self.IDENT_START:
            token = self._scan_identifier(start_line, start_column)
        else:
            raise InvalidCharacterError(
                char,
                SourceLocation(self.filename, start_line, start_column),
                self._get_current_line(),
            )

        # Literal scanners leave the cursor on the token's last character
        self._next_char()
        return token

    def _scan_string(self, start_line: int, start_column: int) -> Token:
        """Scan a string literal; the cursor ends on the closing quote."""
        self._next_char()  # opening "
        start_pos = self.current_position

        while self.current_char != '"':
            if self.current_char in self.ILLEGAL_STRING_CHARS:
                raise IllegalStringCharacterError(
                    self.current_char,
                    self._here(),
                    self._get_current_line(),
                )
            if self.current_char == END_OF_INPUT:
                raise UnterminatedStringError(
                    SourceLocation(self.filename, start_line, start_column),
                    self._get_current_line(),
                )
            self._next_char()

        text = self.source[start_pos:self.current_position]
        return self._make_token(TokenType.STRING, text, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """Scan a numeric literal; the cursor ends on its last digit."""
        start_pos = self.current_position

        while self._peek() in self.DIGITS:
            self._next_char()

        if self._peek() == ".":
            self._next_char()
            if self._peek() not in self.DIGITS:
                raise MalformedNumberError(
                    self.source[start_pos:self.current_position + 1],
                    SourceLocation(self.filename, start_line, start_column),
                    self._get_current_line(),
                )
            while self._peek() in self.DIGITS:
                self._next_char()

        text = self.source[start_pos:self.current_position + 1]
        return self._make_token(TokenType.NUMBER, text, start_line, start_column)

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        """
        Scan an identifier or keyword.

        The cursor ends on the last character of the name.
        """
        start_pos = self.current_position

        while self._peek() in self.IDENT_CHARS:
            self._next_char()

        text = self.source[start_pos:self.current_position + 1]
        token_type = KEYWORDS.get(text.upper(), TokenType.IDENTIFIER)
        return self._make_token(token_type, text, start_line, start_column)

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _make_token(
        self,
        token_type: TokenType,
        text: str,
        line: int,
        column: int,
    ) -> Token:
        return Token(
            type=token_type,
            text=text,
            line=line,
            column=column,
            filename=self.filename,
        )

    def _here(self) -> SourceLocation:
        column = self.current_position - self._line_start_pos + 1
        return SourceLocation(self.filename, self._line, column)

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]
