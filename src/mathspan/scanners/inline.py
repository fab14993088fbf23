"""Inline math scanner.

Recognizes ``$...$`` and ``$$...$$`` spans inside a run of inline text.
The delimiter character is configurable.

Brace depth lets the delimiter appear inside ``{...}`` groups, so
``$\\colorbox{aqua}{$F=ma$}$`` is one span rather than two.

Thread Safety:
InlineScanner holds only its delimiter. Scans are pure functions of their
arguments and safe to run concurrently.

"""

from __future__ import annotations

from mathspan.config import DEFAULT_DELIMITER, validate_delimiter
from mathspan.tokens import ScanResult, SpanKind, SpanToken
from mathspan.utils.text import collapse_whitespace

BACKSLASH = "\\"

# Longest opening marker accepted inline ($$ is display math)
MAX_MARKER_LENGTH = 2


def _run_end(src: str, pos: int, pos_max: int, char: str) -> int:
    """Return the offset just past a run of ``char`` starting at ``pos``."""
    while pos < pos_max and src[pos] == char:
        pos += 1
    return pos


class InlineScanner:
    """Scanner for delimiter-enclosed math inside inline text.

    Example:
        >>> scanner = InlineScanner()
        >>> result = scanner.scan("Equation $x + y$.", 9)
        >>> result.token.content, result.end
        ('x + y', 16)

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

    def scan(
        self,
        src: str,
        pos: int,
        pos_max: int | None = None,
        *,
        validate_only: bool = False,
    ) -> ScanResult | None:
        """Try to recognize a math span starting at ``pos``.

        Args:
            src: Source text
            pos: Offset of the candidate opening marker
            pos_max: Exclusive end of the scannable range (default: len(src))
            validate_only: Report matchability without building a token

        Returns:
            ScanResult whose ``end`` is just past the closing marker, or None
            if there is no match. ``token`` is None when validate_only is set.
        """
        delimiter = self._delimiter
        if pos_max is None:
            pos_max = len(src)

        if pos >= pos_max or src[pos] != delimiter:
            return None

        span_start = _run_end(src, pos, pos_max, delimiter)
        marker_length = span_start - pos
        if marker_length > MAX_MARKER_LENGTH:
            return None

        depth = 0
        cursor = span_start
        while cursor < pos_max:
            char = src[cursor]
            escaped = cursor > 0 and src[cursor - 1] == BACKSLASH

            if char == "{" and not escaped:
                depth += 1
            elif char == "}" and not escaped:
                depth -= 1
                if depth < 0:
                    return None
            elif char == delimiter and depth == 0:
                run_end = _run_end(src, cursor, pos_max, delimiter)
                if run_end - cursor == marker_length:
                    return self._success(
                        src, pos, span_start, cursor, run_end, marker_length, validate_only
                    )
                # Wrong-length run is plain text; resume after it
                cursor = run_end
                continue

            cursor += 1

        return None

    def matches(self, src: str, pos: int, pos_max: int | None = None) -> bool:
        """Return True if a span starts at ``pos``; never builds a token."""
        return self.scan(src, pos, pos_max, validate_only=True) is not None

    @staticmethod
    def _success(
        src: str,
        start: int,
        content_start: int,
        content_end: int,
        end: int,
        marker_length: int,
        validate_only: bool,
    ) -> ScanResult:
        if validate_only:
            return ScanResult(end=end)

        kind = SpanKind.BLOCK if marker_length == MAX_MARKER_LENGTH else SpanKind.INLINE
        token = SpanToken(
            kind=kind,
            content=collapse_whitespace(src[content_start:content_end]),
            start=start,
            end=end,
        )
        return ScanResult(end=end, token=token)


def scan_inline(
    src: str,
    pos: int,
    delimiter: str = DEFAULT_DELIMITER,
    pos_max: int | None = None,
    *,
    validate_only: bool = False,
) -> ScanResult | None:
    """Functional shortcut for ``InlineScanner(delimiter).scan(...)``."""
    return InlineScanner(delimiter).scan(src, pos, pos_max, validate_only=validate_only)
