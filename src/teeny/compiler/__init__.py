"""
Teeny BASIC Compiler
====================

This package translates Teeny BASIC, a small line-oriented BASIC, into
C source code.

- A lexer that produces tokens on demand
- A recursive descent parser that checks the grammar, tracks variables
  and labels, and translates as it goes
- An emitter that collects the generated C in header and body buffers

Pipeline
--------
    BASIC source → Lexer ⇄ Parser → Emitter → C source

Usage
-----
>>> from teeny.compiler import compile_basic
>>> source = '''
... LET n = 3
... WHILE n > 0 REPEAT
...     PRINT n
...     LET n = n - 1
... ENDWHILE
... '''
>>> print(compile_basic(source))

Language Summary
----------------
- One numeric type (float)
- PRINT, INPUT, LET, IF/THEN/ENDIF, WHILE/REPEAT/ENDWHILE, LABEL, GOTO
- Arithmetic + - * / with unary sign; comparisons == != < <= > >=
- Comments start with ``--`` and run to the end of the line
"""

__version__ = "1.0.0"

from teeny.compiler.compiler import (
    BasicCompiler,
    CompilerOptions,
    CompilerResult,
    compile_basic,
    compile_file,
)
from teeny.compiler.errors import (
    BasicError,
    LexicalError,
    BasicSyntaxError,
    BasicSemanticError,
    InvalidCharacterError,
    IllegalStringCharacterError,
    UnterminatedStringError,
    MalformedNumberError,
    UnexpectedTokenError,
    InvalidStatementError,
    MissingComparisonError,
    UndeclaredVariableError,
    DuplicateLabelError,
    UndeclaredLabelError,
)
from teeny.compiler.lexer import Lexer, Token, TokenType
from teeny.compiler.parser import Parser
from teeny.compiler.emitter import Emitter

__all__ = [
    # Version
    "__version__",
    # Main API
    "BasicCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_basic",
    "compile_file",
    # Errors
    "BasicError",
    "LexicalError",
    "BasicSyntaxError",
    "BasicSemanticError",
    "InvalidCharacterError",
    "IllegalStringCharacterError",
    "UnterminatedStringError",
    "MalformedNumberError",
    "UnexpectedTokenError",
    "InvalidStatementError",
    "MissingComparisonError",
    "UndeclaredVariableError",
    "DuplicateLabelError",
    "UndeclaredLabelError",
    # Pipeline components
    "Lexer",
    "Token",
    "TokenType",
    "Parser",
    "Emitter",
]
