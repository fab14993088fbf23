"""Span token definitions for the math scanners.

A scanner produces at most one SpanToken per successful match. The host
engine takes ownership and later hands ``token.content`` to the renderer.

Thread Safety:
SpanToken and ScanResult are frozen (immutable) and safe to share across
threads. SpanKind is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum, auto


class SpanKind(Enum):
    """Rendering mode of a recognized math span."""

    INLINE = auto()  # $...$
    BLOCK = auto()  # $$...$$, inline or fenced


@dataclass(frozen=True, slots=True)
class SpanToken:
    """A recognized math span.

    Attributes:
        kind: INLINE or BLOCK
        content: Math source between the markers, whitespace-normalized
        start: Start of the source range (character offset for inline
            spans, line index for fenced blocks)
        end: End of the source range, exclusive

    """

    kind: SpanKind
    content: str
    start: int
    end: int

    @property
    def display(self) -> bool:
        """True when the span should be typeset in display mode."""
        return self.kind is SpanKind.BLOCK

    def __repr__(self) -> str:
        return f"SpanToken({self.kind.name}, {self.content!r}, {self.start}:{self.end})"


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of a successful scan.

    Attributes:
        end: New cursor (character offset or line index) just past the span
        token: The recognized span, or None for validation-only scans

    """

    end: int
    token: SpanToken | None = None


__all__ = ["ScanResult", "SpanKind", "SpanToken"]
