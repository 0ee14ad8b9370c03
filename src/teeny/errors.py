"""
Teeny Error Hierarchy
=====================

This module defines the root of the exception hierarchy for the Teeny
toolchain. All exceptions inherit from TeenyError, allowing callers to
catch every toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
TeenyError (base)
└── BasicError (compiler errors, see teeny.compiler.errors)
    ├── LexicalError - characters that form no valid token
    ├── BasicSyntaxError - token stream does not match the grammar
    └── BasicSemanticError - undeclared variables, duplicate labels, etc.

Design Philosophy
-----------------
Each exception captures source location information (filename, line, column)
when applicable. This allows for detailed error messages that help users
quickly locate and fix issues in their source code.

Error messages follow this format:
    filename:line:column: error: description
    source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class TeenyError(Exception):
    """
    Base exception for all Teeny errors.

    All exceptions in the toolchain inherit from this class, allowing
    callers to catch all of them with a single except clause:

        try:
            compile_file("program.teeny")
        except TeenyError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Tokens and errors carry one of these so messages can point at the
    exact spot in the program. The frozen design ensures locations cannot
    be accidentally modified.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
