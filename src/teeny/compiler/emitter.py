"""
C Source Emitter
================

Collects the generated C text in two buffers while the parser runs:

- **header**: the include, the ``main`` prologue and one ``float``
  declaration per variable, in the order variables are first assigned
- **body**: the translated statements, in source order

The parser may add to either buffer at any time. The final text is
always header followed by body, regardless of how the calls were
interleaved. Nothing here validates or escapes; the parser is
responsible for handing over well-formed C fragments.
"""

from pathlib import Path
from typing import Protocol


class TextSink(Protocol):
    """Anything with a ``write(str)`` method (open files, StringIO, ...)."""

    def write(self, text: str) -> int: ...


class Emitter:
    """
    Accumulates generated C code.

    Example:
        emitter = Emitter()
        emitter.header_line("#include <stdio.h>")
        emitter.emit("x = ")
        emitter.emit_line("1;")
        emitter.output  # '#include <stdio.h>\\nx = 1;\\n'
    """

    def __init__(self):
        self._header: list[str] = []
        self._body: list[str] = []

    # =========================================================================
    # Appending
    # =========================================================================

    def emit(self, code: str) -> None:
        """Append raw text to the body."""
        self._body.append(code)

    def emit_line(self, code: str = "") -> None:
        """Append text plus a line break to the body."""
        self._body.append(f"{code}\n")

    def header_line(self, code: str) -> None:
        """Append a line to the header."""
        self._header.append(f"{code}\n")

    # Names used by the compiler driver contract
    append_body = emit
    append_header_line = header_line

    # =========================================================================
    # Output
    # =========================================================================

    @property
    def header(self) -> str:
        return "".join(self._header)

    @property
    def body(self) -> str:
        return "".join(self._body)

    @property
    def output(self) -> str:
        """The complete generated text: header, then body."""
        return self.header + self.body

    def flush(self, sink: TextSink) -> int:
        """
        Write the complete generated text to ``sink``.

        The buffers are left untouched, so repeated calls write the same
        text again.

        Returns:
            Number of characters written
        """
        text = self.output
        sink.write(text)
        return len(text)

    def write_file(self, path: str | Path) -> int:
        """Write the generated text to ``path`` as UTF-8."""
        with open(path, "w", encoding="utf-8") as sink:
            return self.flush(sink)
