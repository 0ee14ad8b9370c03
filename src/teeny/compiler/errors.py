"""
Teeny BASIC Compiler Error Hierarchy
====================================

This module defines the exception hierarchy for the BASIC-to-C compiler.
All exceptions inherit from BasicError, which itself inherits from
the base TeenyError for consistent error handling across the toolchain.

Compilation stops at the first error: the lexer and parser raise one of
these and the exception propagates up through the recursive descent, so
no partial output is ever produced.

Exception Hierarchy
-------------------
BasicError (base for all compiler errors)
├── LexicalError - characters that cannot be tokenized
│   ├── InvalidCharacterError - character matches no token form
│   ├── IllegalStringCharacterError - reserved character inside a string
│   ├── UnterminatedStringError - end of input inside a string
│   └── MalformedNumberError - decimal point without a following digit
├── BasicSyntaxError - token stream does not match the grammar
│   ├── UnexpectedTokenError - token category mismatch
│   ├── InvalidStatementError - token cannot start a statement
│   └── MissingComparisonError - comparison without an operator
└── BasicSemanticError - grammatical but meaningless programs
    ├── UndeclaredVariableError - variable used before LET/INPUT
    ├── DuplicateLabelError - LABEL declared twice
    └── UndeclaredLabelError - GOTO to a label that never appears

Error Message Format
--------------------
    loop.teeny:3:7: error: undeclared variable 'cnt'
        PRINT cnt
              ^
    hint: assign it with LET or read it with INPUT first
"""

from typing import Optional

from teeny.errors import TeenyError, SourceLocation


# =============================================================================
# Base Compiler Exception
# =============================================================================

class BasicError(TeenyError):
    """
    Base exception for all compiler errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            loop.teeny:3:7: error: undeclared variable 'cnt'
                PRINT cnt
                      ^
            hint: assign it with LET or read it with INPUT first
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexical Errors
# =============================================================================

class LexicalError(BasicError):
    """
    Source text that cannot be split into tokens.

    Examples:
        - A character that starts no token ('@', '#', ...)
        - A raw tab or backslash inside a string literal
        - A number such as '12.' with nothing after the point
    """
    pass


class InvalidCharacterError(LexicalError):
    """Character that matches no token form."""

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"unknown token '{char}' (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


class IllegalStringCharacterError(LexicalError):
    """
    Reserved character inside a string literal.

    Strings are copied verbatim into printf format strings, so line
    breaks, tabs, backslashes and '%' may not appear in them.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"illegal character {char!r} in string",
            location=location,
            hint="strings may not contain line breaks, tabs, '\\' or '%'",
            source_line=source_line,
        )


class UnterminatedStringError(LexicalError):
    """End of input reached before the closing quote."""

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated string literal",
            location=location,
            hint="add closing '\"' to complete the string",
            source_line=source_line,
        )


class MalformedNumberError(LexicalError):
    """Decimal point not followed by a digit."""

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"illegal character in number '{text}'",
            location=location,
            hint="a decimal point must be followed by at least one digit",
            source_line=source_line,
        )


# =============================================================================
# Syntax Errors (Parser)
# =============================================================================

class BasicSyntaxError(BasicError):
    """
    Token stream that does not match the grammar.

    Examples:
        - Missing THEN after an IF comparison
        - Statement not followed by a newline
        - ENDWHILE without a matching WHILE
    """
    pass


class UnexpectedTokenError(BasicSyntaxError):
    """Current token is not of the category the grammar requires."""

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        if expected:
            message = f"expected {expected}, got {found}"
        else:
            message = f"unexpected token {found}"

        super().__init__(message, location=location, source_line=source_line)


class InvalidStatementError(BasicSyntaxError):
    """Token that cannot begin a statement."""

    def __init__(
        self,
        text: str,
        category: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        self.category = category
        super().__init__(
            f"invalid statement at {text!r} ({category})",
            location=location,
            hint="statements start with PRINT, IF, WHILE, LABEL, GOTO, LET or INPUT",
            source_line=source_line,
        )


class MissingComparisonError(BasicSyntaxError):
    """IF/WHILE condition without a comparison operator."""

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            f"expected comparison operator at {found!r}",
            location=location,
            hint="conditions need one of ==, !=, <, <=, >, >=",
            source_line=source_line,
        )


# =============================================================================
# Semantic Errors
# =============================================================================

class BasicSemanticError(BasicError):
    """
    Program that parses but violates the naming rules.

    Variables must be assigned before they are read, label names must be
    unique, and every GOTO must name a label that exists somewhere.
    """
    pass


class UndeclaredVariableError(BasicSemanticError):
    """Variable referenced before any LET or INPUT assigns it."""

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.identifier = identifier
        super().__init__(
            f"undeclared variable '{identifier}'",
            location=location,
            hint="assign it with LET or read it with INPUT first",
            source_line=source_line,
        )


class DuplicateLabelError(BasicSemanticError):
    """LABEL name declared more than once."""

    def __init__(
        self,
        label: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.label = label
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{label}' was first declared at {original_location}"

        super().__init__(
            f"label already exists: '{label}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UndeclaredLabelError(BasicSemanticError):
    """GOTO target that no LABEL statement declares."""

    def __init__(
        self,
        label: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.label = label
        super().__init__(
            f"attempting to GOTO undeclared label '{label}'",
            location=location,
            source_line=source_line,
        )
