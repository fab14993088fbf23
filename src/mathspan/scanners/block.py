"""Fenced math block scanner.

Recognizes a block opened by a line holding exactly ``$$`` and closed by a
later line holding a run of at least two delimiters and nothing else::

    $$
    \\frac{a}{b}
    $$

Closing-line rules follow fenced code blocks: a candidate indented 4+
columns past the block indent is content, and a line dedented below the
block indent ends the search without a match.

Thread Safety:
BlockScanner holds only its delimiter. Scans read the buffer and never
write to it.

"""

from __future__ import annotations

from mathspan.buffer import LineBuffer
from mathspan.config import DEFAULT_DELIMITER, validate_delimiter
from mathspan.tokens import ScanResult, SpanKind, SpanToken
from mathspan.utils.text import collapse_whitespace

FENCE_LENGTH = 2

# Indentation (relative to the block) at which a fence becomes literal content
CODE_INDENT = 4


def _skip_spaces(src: str, pos: int, end: int) -> int:
    while pos < end and src[pos] in " \t":
        pos += 1
    return pos


def _run_end(src: str, pos: int, end: int, char: str) -> int:
    while pos < end and src[pos] == char:
        pos += 1
    return pos


class BlockScanner:
    """Scanner for ``$$`` fenced math blocks.

    Example:
        >>> from mathspan.buffer import TextBuffer
        >>> buf = TextBuffer.from_text("$$\\nx + y\\n$$\\n")
        >>> result = BlockScanner().scan(buf, 0, buf.line_count)
        >>> result.token.content, result.end
        ('x + y', 3)

    """

    __slots__ = ("_delimiter",)

    def __init__(self, delimiter: str = DEFAULT_DELIMITER) -> None:
        """Initialize scanner.

        Raises:
            DelimiterError: If delimiter is not exactly one character
        """
        self._delimiter = validate_delimiter(delimiter)

    @property
    def delimiter(self) -> str:
        return self._delimiter

    def is_opening_line(self, buffer: LineBuffer, line: int) -> bool:
        """Check if a line is exactly a two-character fence."""
        src = buffer.src
        pos = buffer.content_start(line)
        line_end = buffer.line_end(line)

        run_end = _run_end(src, pos, line_end, self._delimiter)
        if run_end - pos != FENCE_LENGTH:
            return False
        return _skip_spaces(src, run_end, line_end) >= line_end

    def is_closing_line(self, buffer: LineBuffer, line: int) -> bool:
        """Check if a line closes the block.

        Args:
            buffer: Line buffer
            line: Candidate line index

        Returns:
            True for a run of 2+ delimiters followed only by whitespace,
            indented less than 4 columns past the block indent.
        """
        src = buffer.src
        pos = buffer.content_start(line)
        line_end = buffer.line_end(line)

        if pos >= line_end or src[pos] != self._delimiter:
            return False
        if buffer.indent(line) - buffer.block_indent >= CODE_INDENT:
            return False

        run_end = _run_end(src, pos, line_end, self._delimiter)
        if run_end - pos < FENCE_LENGTH:
            return False
        return _skip_spaces(src, run_end, line_end) >= line_end

    def scan(
        self,
        buffer: LineBuffer,
        start_line: int,
        end_line: int,
        *,
        validate_only: bool = False,
    ) -> ScanResult | None:
        """Try to recognize a fenced block opening at ``start_line``.

        Args:
            buffer: Line buffer to read
            start_line: Index of the candidate opening line
            end_line: Exclusive bound on the lines the block may span
            validate_only: Report matchability without building a token

        Returns:
            ScanResult whose ``end`` is the line after the closing fence, or
            None if the block is not opened or never closed.
        """
        if start_line >= end_line or not self.is_opening_line(buffer, start_line):
            return None

        close_line = self._find_closing_line(buffer, start_line, end_line)
        if close_line is None:
            return None

        end = close_line + 1
        if validate_only:
            return ScanResult(end=end)

        # Strip the opening fence's indentation from the block body
        body = buffer.get_lines(start_line + 1, close_line, buffer.indent(start_line))
        token = SpanToken(
            kind=SpanKind.BLOCK,
            content=collapse_whitespace(body),
            start=start_line,
            end=end,
        )
        return ScanResult(end=end, token=token)

    def matches(self, buffer: LineBuffer, start_line: int, end_line: int) -> bool:
        """Return True if a complete block opens at ``start_line``."""
        return self.scan(buffer, start_line, end_line, validate_only=True) is not None

    def _find_closing_line(
        self, buffer: LineBuffer, start_line: int, end_line: int
    ) -> int | None:
        """Return the index of the closing fence line, or None."""
        block_indent = buffer.block_indent

        for line in range(start_line + 1, end_line):
            blank = buffer.content_start(line) >= buffer.line_end(line)
            if not blank and buffer.indent(line) < block_indent:
                # Dedent ends the enclosing container; the block is unterminated
                return None
            if self.is_closing_line(buffer, line):
                return line

        return None


def scan_block(
    buffer: LineBuffer,
    start_line: int,
    end_line: int,
    delimiter: str = DEFAULT_DELIMITER,
    *,
    validate_only: bool = False,
) -> ScanResult | None:
    """Functional shortcut for ``BlockScanner(delimiter).scan(...)``."""
    return BlockScanner(delimiter).scan(
        buffer, start_line, end_line, validate_only=validate_only
    )
