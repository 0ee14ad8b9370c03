"""
Teeny - A Small BASIC-to-C Toolchain
====================================

Teeny compiles programs written in Teeny BASIC, a minimal line-oriented
BASIC dialect, into portable C source code that any C compiler can build.

Main Components
---------------
- **compiler**: lexer, parser and C emitter (tbc)
    Converts BASIC source files (.teeny) to C source (.c)

- **cli**: command-line front end
    Reads the source file, runs the compiler and writes the result

Quick Start
-----------
Compile a string:
    >>> from teeny import compile_basic
    >>> print(compile_basic('PRINT "hello, world"'))

Compile a file:
    >>> from teeny import BasicCompiler
    >>> result = BasicCompiler().compile_file("hello.teeny")
    >>> result.variables
    []

Or use the command-line tool:
    $ tbc hello.teeny -o hello.c
    $ cc hello.c -o hello
"""

__version__ = "1.0.0"
__author__ = "Teeny Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from teeny.errors import TeenyError, SourceLocation
from teeny.compiler import (
    BasicCompiler,
    CompilerOptions,
    CompilerResult,
    compile_basic,
    compile_file,
    BasicError,
)

__all__ = [
    "__version__",
    "TeenyError",
    "SourceLocation",
    "BasicCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_basic",
    "compile_file",
    "BasicError",
]
