"""MathML renderer built on latex2mathml.

Produces markup shaped like KaTeX's ``htmlAndMathml`` output: a MathML
rendering for browsers and assistive technology, plus an ``aria-hidden``
visual fallback holding the escaped source. The normalizer later hides the
fallback from sight.

Inline::

    <span class="katex"><span class="katex-mathml"><math>...</math></span>
    <span class="katex-html" aria-hidden="true">x + y</span></span>

Display mode wraps the same structure in ``<span class="katex-display">``.

"""

from __future__ import annotations

from collections.abc import Callable

from latex2mathml.converter import convert as latex2mathml_convert

from mathspan.errors import RenderError
from mathspan.utils.logger import get_logger
from mathspan.utils.text import escape_html

logger = get_logger(__name__)

Converter = Callable[..., str]


class MathMLRenderer:
    """Typeset LaTeX to MathML-backed HTML.

    Tolerant by default: conversion failures become a ``katex-error`` span
    containing the escaped source, mirroring KaTeX with ``throwOnError``
    disabled.

    Example:
        >>> renderer = MathMLRenderer()
        >>> html = renderer.render("x^2", display_mode=False)
        >>> html.startswith('<span class="katex">')
        True

    """

    __slots__ = ("_converter", "_throw_on_error")

    def __init__(
        self,
        *,
        throw_on_error: bool = False,
        converter: Converter | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            throw_on_error: Raise RenderError instead of emitting error markup
            converter: LaTeX-to-MathML callable taking ``(latex, display=...)``
                (defaults to latex2mathml's converter)
        """
        self._throw_on_error = throw_on_error
        self._converter = converter or latex2mathml_convert

    def render(self, content: str, display_mode: bool) -> str:
        """Render math source to HTML.

        Raises:
            RenderError: Only when throw_on_error is set and conversion fails
        """
        try:
            mathml = self._converter(content, display="block" if display_mode else "inline")
        except Exception as e:
            if self._throw_on_error:
                raise RenderError(content, str(e)) from e
            logger.debug("MathML conversion failed for %r", content, exc_info=True)
            return self._render_error(content, e)

        source = escape_html(content)
        html = (
            '<span class="katex">'
            f'<span class="katex-mathml">{mathml}</span>'
            f'<span class="katex-html" aria-hidden="true">{source}</span>'
            "</span>"
        )
        if display_mode:
            return f'<span class="katex-display">{html}</span>'
        return html

    @staticmethod
    def _render_error(content: str, error: Exception) -> str:
        title = escape_html(f"{type(error).__name__}: {error}")
        return (
            f'<span class="katex-error" title="{title}" style="color:#cc0000">'
            f"{escape_html(content)}</span>"
        )
