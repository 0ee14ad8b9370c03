"""
Teeny Command-Line Interface
============================

This package provides the command-line tool for the Teeny toolchain:

- **tbc**: Teeny BASIC to C compiler

The tool is a Click-based CLI application with help text and
consistent exit codes (see ``teeny.cli.errors``).
"""

__all__ = ["tbc"]
