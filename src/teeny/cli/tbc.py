"""
tbc - Teeny BASIC Compiler Command-Line Interface
=================================================

This module implements the command-line interface for the Teeny BASIC
compiler. It reads a BASIC program, compiles it, and writes C source.

Usage Examples
--------------
Basic compilation (writes hello.c):
    $ tbc hello.teeny

With output file:
    $ tbc hello.teeny -o out.c

Print the generated C instead of writing a file:
    $ tbc --stdout hello.teeny

Show every grammar rule as it is recognized:
    $ tbc --trace hello.teeny

Full pipeline to an executable:
    $ tbc hello.teeny && cc hello.c -o hello
"""

import logging
from pathlib import Path
from typing import Optional

import click

from teeny import __version__
from teeny.compiler import BasicCompiler, CompilerOptions
from teeny.cli.errors import ExitCode, handle_cli_exception


# Source file used when none is given on the command line
DEFAULT_INPUT = Path("test.program")


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output C file (default: input with .c suffix)",
)
@click.option(
    "--stdout", "to_stdout",
    is_flag=True,
    help="Print the generated C to standard output instead of a file",
)
@click.option(
    "--trace",
    is_flag=True,
    help="Log each grammar rule as it is recognized",
)
@click.option(
    "--header-comment",
    is_flag=True,
    help="Start the output with a comment naming the source file",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="tbc")
def main(
    input_file: Optional[Path],
    output: Optional[Path],
    to_stdout: bool,
    trace: bool,
    header_comment: bool,
    verbose: bool,
) -> None:
    """
    Compile a Teeny BASIC program to C.

    INPUT_FILE is the BASIC source file to compile (default: test.program).

    \b
    Examples:
        tbc hello.teeny              # Outputs hello.c
        tbc hello.teeny -o out.c     # Specify output file
        tbc --stdout hello.teeny     # Print C to the terminal
        tbc --trace hello.teeny      # Trace grammar rules

    \b
    Language summary:
        PRINT expr | "text"     LET var = expr     INPUT var
        IF cmp THEN ... ENDIF   WHILE cmp REPEAT ... ENDWHILE
        LABEL name              GOTO name          -- comment
    """
    if input_file is None:
        input_file = DEFAULT_INPUT

    if output is None:
        output = input_file.with_suffix(".c")

    if trace or verbose:
        logging.basicConfig(format="%(name)s: %(message)s")
        logging.getLogger("teeny").setLevel(logging.DEBUG if trace else logging.INFO)

    options = CompilerOptions(trace=trace, header_comment=header_comment)

    try:
        if verbose:
            click.echo(f"Compiling {input_file}...")

        compiler = BasicCompiler(options)
        result = compiler.compile_file(input_file)

        if to_stdout:
            click.echo(result.code, nl=False)
            return

        output.write_text(result.code, encoding="utf-8")

        if verbose:
            click.echo(f"Wrote {len(result.code)} bytes to {output}")
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(f"Variables: {', '.join(result.variables) or '(none)'}")
            click.echo(f"Labels: {', '.join(result.labels) or '(none)'}")

        click.echo(f"Compiled {input_file} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
