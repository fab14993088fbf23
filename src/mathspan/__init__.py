"""
mathspan: delimiter-aware math spans for Markdown

Recognizes ``$inline$`` and ``$$display$$`` math in Markdown, typesets it
through a pluggable renderer (MathML via latex2mathml by default) and
hides the renderer's ``aria-hidden`` visual fallback from sight.

Quick Start:
    >>> from mathspan import render
    >>> html = render("Equation $x + y$.")
    >>> html.startswith("<p>Equation <span class=\\"katex\\">")
    True

    >>> # Or use the high-level Markdown class
    >>> from mathspan import Markdown
    >>> md = Markdown(delimiter="@")
    >>> html = md("Block: @@x + y@@")

markdown-it-py plugin:
    >>> from markdown_it import MarkdownIt
    >>> from mathspan import math_plugin
    >>> md = MarkdownIt().use(math_plugin)

Scanners on their own:
    >>> from mathspan import InlineScanner
    >>> InlineScanner().scan("a $b$ c", 2).token.content
    'b'

Installation:
    pip install mathspan
"""

from markdown_it import MarkdownIt
from markdown_it.token import Token

from mathspan.buffer import LineBuffer, TextBuffer
from mathspan.config import DEFAULT_DELIMITER, HidePolicy, MathConfig
from mathspan.errors import ConfigError, DelimiterError, MathspanError, RenderError
from mathspan.normalize import normalize_hidden
from mathspan.plugin import math_plugin, typeset
from mathspan.renderers import MathMLRenderer, MathRenderer
from mathspan.scanners import BlockScanner, InlineScanner, scan_block, scan_inline
from mathspan.tokens import ScanResult, SpanKind, SpanToken

__version__ = "0.1.0"


class Markdown:
    """Markdown processor with math support.

    Usage:
        >>> md = Markdown()
        >>> html = md("Equation $x + y$.")

        >>> # Tokens instead of HTML
        >>> tokens = md.parse("$$\\nx\\n$$")
        >>> tokens[0].type
        'math_block'

        >>> # Utility-class hiding (e.g. Tailwind's ``hidden``)
        >>> md = Markdown(hide_policy=HidePolicy.UTILITY_CLASS)

    Thread Safety:
        Configuration is immutable and the plugin rules keep no per-document
        state. Instances can render documents from several threads.

    """

    __slots__ = ("_config", "_md")

    def __init__(
        self,
        *,
        delimiter: str = DEFAULT_DELIMITER,
        hide_policy: HidePolicy = HidePolicy.STYLE,
        renderer: MathRenderer | None = None,
        config: MathConfig | None = None,
        preset: str = "commonmark",
    ) -> None:
        """Initialize Markdown processor.

        Args:
            delimiter: Math marker character
            hide_policy: Normalizer rewrite policy
            renderer: Typesetting delegate (defaults to MathMLRenderer)
            config: Complete configuration; overrides delimiter and hide_policy
            preset: markdown-it-py preset name

        Raises:
            DelimiterError: If the delimiter is not exactly one character
        """
        self._config = config or MathConfig(delimiter=delimiter, hide_policy=hide_policy)
        self._md = MarkdownIt(preset).use(math_plugin, config=self._config, renderer=renderer)

    @property
    def config(self) -> MathConfig:
        return self._config

    @property
    def markdown_it(self) -> MarkdownIt:
        """The underlying MarkdownIt instance."""
        return self._md

    def __call__(self, source: str) -> str:
        """Parse and render Markdown in one call."""
        return self._md.render(source)

    def parse(self, source: str) -> list[Token]:
        """Parse Markdown source into markdown-it tokens."""
        return self._md.parse(source)


def render(source: str, **options: object) -> str:
    """Render Markdown with math to HTML.

    Args:
        source: Markdown source text
        **options: MathConfig fields, parsed with MathConfig.from_dict

    Returns:
        HTML string
    """
    return Markdown(config=MathConfig.from_dict(options))(source)


__all__ = [
    "BlockScanner",
    "ConfigError",
    "DEFAULT_DELIMITER",
    "DelimiterError",
    "HidePolicy",
    "InlineScanner",
    "LineBuffer",
    "Markdown",
    "MathConfig",
    "MathMLRenderer",
    "MathRenderer",
    "MathspanError",
    "RenderError",
    "ScanResult",
    "SpanKind",
    "SpanToken",
    "TextBuffer",
    "__version__",
    "math_plugin",
    "normalize_hidden",
    "render",
    "scan_block",
    "scan_inline",
    "typeset",
]
