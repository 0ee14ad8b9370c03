"""
Teeny BASIC Compiler Main Module
================================

This module provides the main compiler interface. Compilation is a
single pass: the parser pulls tokens from the lexer and hands C
fragments to the emitter as it recognizes each construct.

    Source → Lexer ⇄ Parser → Emitter → C source

Usage
-----
Command line:
    $ tbc hello.teeny -o hello.c

Programmatic:
    >>> from teeny.compiler import compile_basic
    >>> c_source = compile_basic('PRINT "hello"')

The generated C program reads and prints floats with stdio and can be
built with any C compiler:

    $ cc hello.c -o hello

Error Handling
--------------
Compilation stops at the first error, raised as a BasicError subclass.
No output is produced for a program that fails to compile.
"""

import logging
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field

from teeny.compiler.lexer import Lexer
from teeny.compiler.parser import Parser
from teeny.compiler.emitter import Emitter


logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        trace: Log every grammar rule as it is recognized (DEBUG level on
               the ``teeny.compiler.parser`` logger).
        header_comment: Start the generated C with a comment naming the
                        source file.
    """
    trace: bool = False
    header_comment: bool = False


@dataclass
class CompilerResult:
    """
    Result of a compilation.

    Attributes:
        filename: Source filename
        success: True if compilation succeeded
        code: Generated C source
        variables: Declared variables, in declaration order
        labels: Declared labels, in source order
        token_count: Number of tokens lexed
    """
    filename: str = ""
    success: bool = False
    code: str = ""
    variables: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    token_count: int = 0


class BasicCompiler:
    """
    Teeny BASIC to C compiler.

    Example:
        compiler = BasicCompiler()
        result = compiler.compile_file("hello.teeny")
        print(result.code)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Compile BASIC source code to C.

        Args:
            source: BASIC source code string
            filename: Source filename for error messages

        Returns:
            CompilerResult containing the C code and symbol information

        Raises:
            BasicError: If compilation fails
        """
        emitter = Emitter()
        if self.options.header_comment:
            emitter.header_line(f"/* Generated by tbc from {filename} */")

        lexer = Lexer(source, filename)
        parser = Parser(lexer, emitter, trace=self.options.trace)
        parser.parse()

        result = CompilerResult(
            filename=filename,
            success=True,
            code=emitter.output,
            variables=list(parser.symbols),
            labels=list(parser.labels_declared),
            token_count=parser.token_count,
        )

        logger.info(
            f"Compiled {filename}: {result.token_count} tokens, "
            f"{len(result.variables)} variables, {len(result.labels)} labels"
        )
        return result

    def compile_file(self, filepath: str | Path) -> CompilerResult:
        """
        Compile a BASIC source file to C.

        Raises:
            BasicError: If compilation fails
            FileNotFoundError: If source file not found
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(filepath))


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_basic(source: str, filename: str = "<input>") -> str:
    """
    Compile BASIC source code to C.

    Raises:
        BasicError: If compilation fails

    Example:
        >>> print(compile_basic('PRINT "hi"'))
        #include <stdio.h>
        int main(void){
        printf("hi\\n");
        return 0;
        }
    """
    return BasicCompiler().compile_source(source, filename).code


def compile_file(
    filepath: str | Path,
    output_path: Optional[str | Path] = None,
) -> str:
    """
    Compile a BASIC source file to C, optionally writing the result.

    Raises:
        BasicError: If compilation fails
        FileNotFoundError: If source file not found
    """
    result = BasicCompiler().compile_file(filepath)

    if output_path:
        Path(output_path).write_text(result.code, encoding="utf-8")

    return result.code
