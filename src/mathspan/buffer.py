"""Read-only line buffers consumed by the block scanner.

The block scanner never sees the host's parser state directly. It reads
through the ``LineBuffer`` protocol, which markdown-it-py's ``StateBlock``
is adapted to in ``mathspan.plugin`` and which ``TextBuffer`` implements
for plain text.

Thread Safety:
TextBuffer is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

TAB_WIDTH = 4


class LineBuffer(Protocol):
    """Protocol for line-oriented views of a source document.

    Line indices are 0-based. Offsets index into ``src``.

    """

    @property
    def src(self) -> str:
        """Raw source text."""
        ...

    @property
    def line_count(self) -> int:
        """Number of lines in the buffer."""
        ...

    @property
    def block_indent(self) -> int:
        """Indentation width of the enclosing structural block."""
        ...

    def line_end(self, line: int) -> int:
        """Offset just past the last character of the line (before the newline)."""
        ...

    def content_start(self, line: int) -> int:
        """Offset of the first non-whitespace character (line_end if blank)."""
        ...

    def indent(self, line: int) -> int:
        """Width of the leading whitespace, tabs expanded."""
        ...

    def get_lines(self, begin: int, end: int, indent: int) -> str:
        """Text of lines [begin, end) with up to ``indent`` columns stripped."""
        ...


def _measure_indent(src: str, start: int, end: int) -> tuple[int, int]:
    """Return (offset of first non-whitespace char, indentation width)."""
    pos = start
    width = 0
    while pos < end:
        ch = src[pos]
        if ch == " ":
            width += 1
        elif ch == "\t":
            width += TAB_WIDTH - width % TAB_WIDTH
        else:
            break
        pos += 1
    return pos, width


def _strip_indent(line: str, indent: int) -> str:
    """Remove up to ``indent`` columns of leading whitespace from a line."""
    pos = 0
    width = 0
    while pos < len(line) and width < indent:
        ch = line[pos]
        if ch == " ":
            width += 1
        elif ch == "\t":
            width += TAB_WIDTH - width % TAB_WIDTH
        else:
            break
        pos += 1
    return line[pos:]


@dataclass(frozen=True, slots=True)
class TextBuffer:
    """LineBuffer over plain text.

    Line tables are computed once in ``from_text``; every query is O(1).

    Attributes:
        src: Raw source text
        starts: Start offset of each line
        ends: End offset of each line (newline excluded)
        content_starts: Offset of the first non-whitespace char of each line
        indents: Leading indentation width of each line
        block_indent: Structural indent level the scan runs under

    Example:
        >>> buf = TextBuffer.from_text("$$\\nx + y\\n$$")
        >>> buf.line_count
        3
        >>> buf.get_lines(1, 2, 0)
        'x + y\\n'

    """

    src: str
    starts: tuple[int, ...]
    ends: tuple[int, ...]
    content_starts: tuple[int, ...]
    indents: tuple[int, ...]
    block_indent: int = 0

    @classmethod
    def from_text(cls, text: str, block_indent: int = 0) -> TextBuffer:
        """Build line tables for ``text``.

        A trailing newline does not open an extra empty line.
        """
        starts: list[int] = []
        ends: list[int] = []
        content_starts: list[int] = []
        indents: list[int] = []

        pos = 0
        length = len(text)
        while pos < length:
            end = text.find("\n", pos)
            if end == -1:
                end = length
            first, width = _measure_indent(text, pos, end)
            starts.append(pos)
            ends.append(end)
            content_starts.append(first)
            indents.append(width)
            pos = end + 1

        return cls(
            src=text,
            starts=tuple(starts),
            ends=tuple(ends),
            content_starts=tuple(content_starts),
            indents=tuple(indents),
            block_indent=block_indent,
        )

    @property
    def line_count(self) -> int:
        return len(self.starts)

    def line_end(self, line: int) -> int:
        return self.ends[line]

    def content_start(self, line: int) -> int:
        return self.content_starts[line]

    def indent(self, line: int) -> int:
        return self.indents[line]

    def get_lines(self, begin: int, end: int, indent: int) -> str:
        parts = []
        for line in range(begin, min(end, self.line_count)):
            text = self.src[self.starts[line] : self.ends[line]]
            parts.append(_strip_indent(text, indent) + "\n")
        return "".join(parts)


__all__ = ["LineBuffer", "TAB_WIDTH", "TextBuffer"]
