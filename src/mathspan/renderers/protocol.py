"""MathRenderer protocol: the typesetting delegate interface.

Anything with ``render(content, display_mode) -> str`` can typeset math
for the plugin. ``MathMLRenderer`` is the built-in implementation.

Example:
    from mathspan.renderers.protocol import MathRenderer

    class PlainRenderer:
        def render(self, content: str, display_mode: bool) -> str:
            return f"<code>{content}</code>"

"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class MathRenderer(Protocol):
    """Protocol for math typesetting delegates.

    Implementations must tolerate malformed math source: return best-effort
    markup rather than failing the whole document.

    """

    def render(self, content: str, display_mode: bool) -> str:
        """Typeset math source to an HTML fragment.

        Args:
            content: Whitespace-normalized math source
            display_mode: True for block (display) math

        Returns:
            HTML markup for the span.

        """
        ...
