"""markdown-it-py integration.

Installs the math scanners as markdown-it-py rules and the renderer plus
normalizer as render rules::

    from markdown_it import MarkdownIt
    from mathspan.plugin import math_plugin

    md = MarkdownIt().use(math_plugin, delimiter="@")
    md.render("Equation @x + y@.")

Rules added:

- ``math_inline`` (inline ruler, last): ``$x$`` produces a ``math_inline``
  token, ``$$x$$`` a ``math_inline_double`` token
- ``math_block`` (block ruler, before ``fence``): ``$$`` fenced blocks
  produce a ``math_block`` token; may interrupt paragraphs, blockquotes and
  lists
- ``text`` is replaced by a copy that also stops at the delimiter when the
  delimiter is not already one of markdown-it-py's text terminators

A rule that does not match leaves ``state.pos`` / ``state.line`` alone, so
markdown-it falls through to its other rules and finally to plain text.

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from mathspan.config import MathConfig
from mathspan.normalize import normalize_hidden
from mathspan.renderers.mathml import MathMLRenderer
from mathspan.scanners.block import BlockScanner
from mathspan.scanners.inline import InlineScanner
from mathspan.tokens import SpanKind
from mathspan.utils.logger import get_logger

if TYPE_CHECKING:
    from markdown_it import MarkdownIt
    from markdown_it.rules_block import StateBlock
    from markdown_it.rules_inline import StateInline
    from markdown_it.token import Token

    from mathspan.renderers.protocol import MathRenderer

logger = get_logger(__name__)

INLINE_TOKEN_TYPES = {
    SpanKind.INLINE: "math_inline",
    SpanKind.BLOCK: "math_inline_double",
}
BLOCK_TOKEN_TYPE = "math_block"

# Characters where markdown-it-py's own text rule already stops
TEXT_TERMINATORS = frozenset("\n!#$%&*+-:<=>@[\\]^_`{}~")


class StateBlockBuffer:
    """LineBuffer view over a markdown-it-py StateBlock.

    Reads the state's line tables in place; nothing is copied or written.

    """

    __slots__ = ("_state",)

    def __init__(self, state: StateBlock) -> None:
        self._state = state

    @property
    def src(self) -> str:
        return self._state.src

    @property
    def line_count(self) -> int:
        return self._state.lineMax

    @property
    def block_indent(self) -> int:
        return self._state.blkIndent

    def line_end(self, line: int) -> int:
        return self._state.eMarks[line]

    def content_start(self, line: int) -> int:
        return self._state.bMarks[line] + self._state.tShift[line]

    def indent(self, line: int) -> int:
        return self._state.sCount[line]

    def get_lines(self, begin: int, end: int, indent: int) -> str:
        return self._state.getLines(begin, end, indent, True)


def make_text_rule(delimiter: str) -> Callable[[StateInline, bool], bool]:
    """Build a ``text`` rule that also stops at ``delimiter``.

    The stock rule swallows every character outside TEXT_TERMINATORS, so
    inline math with any other delimiter would never be tried.
    """

    def text(state: StateInline, silent: bool) -> bool:
        src = state.src
        pos = state.pos
        pos_max = state.posMax
        while pos < pos_max and src[pos] not in TEXT_TERMINATORS and src[pos] != delimiter:
            pos += 1
        if pos == state.pos:
            return False

        if not silent:
            state.pending += src[state.pos : pos]
        state.pos = pos
        return True

    return text


def typeset(content: str, display: bool, renderer: MathRenderer, config: MathConfig) -> str:
    """Render math source and normalize the resulting markup."""
    return normalize_hidden(renderer.render(content, display), config)


def math_plugin(
    md: MarkdownIt,
    *,
    config: MathConfig | None = None,
    renderer: MathRenderer | None = None,
    **options: Any,
) -> None:
    """Add ``$`` math support to a MarkdownIt instance.

    Args:
        md: MarkdownIt instance to extend
        config: Complete configuration; when given, ``options`` are ignored
        renderer: Typesetting delegate (defaults to MathMLRenderer)
        **options: MathConfig fields (``delimiter``, ``hide_policy``, ...),
            parsed with MathConfig.from_dict

    Raises:
        DelimiterError: If the delimiter is not exactly one character
    """
    if config is None:
        config = MathConfig.from_dict(options)
    if renderer is None:
        renderer = MathMLRenderer(throw_on_error=config.throw_on_error)

    inline_scanner = InlineScanner(config.delimiter)
    block_scanner = BlockScanner(config.delimiter)
    delimiter = config.delimiter

    def math_inline(state: StateInline, silent: bool) -> bool:
        result = inline_scanner.scan(state.src, state.pos, state.posMax, validate_only=silent)
        if result is None:
            return False

        if not silent:
            span = result.token
            token = state.push(INLINE_TOKEN_TYPES[span.kind], "math", 0)
            token.content = span.content
            token.markup = delimiter * (2 if span.display else 1)
            token.meta = {"display": span.display}

        state.pos = result.end
        return True

    def math_block(state: StateBlock, start_line: int, end_line: int, silent: bool) -> bool:
        buffer = StateBlockBuffer(state)
        result = block_scanner.scan(buffer, start_line, end_line, validate_only=silent)
        if result is None:
            return False
        if silent:
            return True

        span = result.token
        token = state.push(BLOCK_TOKEN_TYPE, "math", 0)
        token.block = True
        token.content = span.content
        token.markup = delimiter * 2
        token.map = [span.start, span.end]
        token.meta = {"display": True}

        state.line = result.end
        return True

    def render_math_inline(
        self: Any, tokens: Sequence[Token], idx: int, options: Any, env: Any
    ) -> str:
        token = tokens[idx]
        return typeset(token.content, token.meta.get("display", False), renderer, config)

    def render_math_block(
        self: Any, tokens: Sequence[Token], idx: int, options: Any, env: Any
    ) -> str:
        return typeset(tokens[idx].content, True, renderer, config) + "\n"

    render_math_inline.delimiter = delimiter  # type: ignore[attr-defined]
    render_math_inline.config = config  # type: ignore[attr-defined]

    if delimiter not in TEXT_TERMINATORS:
        md.inline.ruler.at("text", make_text_rule(delimiter))
    md.inline.ruler.push("math_inline", math_inline)
    md.block.ruler.before(
        "fence",
        "math_block",
        math_block,
        {"alt": ["paragraph", "reference", "blockquote", "list"]},
    )
    for token_type in INLINE_TOKEN_TYPES.values():
        md.add_render_rule(token_type, render_math_inline)
    md.add_render_rule(BLOCK_TOKEN_TYPE, render_math_block)

    logger.debug(
        "Installed math plugin (delimiter=%r, hide_policy=%s)",
        delimiter,
        config.hide_policy.value,
    )


__all__ = [
    "BLOCK_TOKEN_TYPE",
    "INLINE_TOKEN_TYPES",
    "StateBlockBuffer",
    "TEXT_TERMINATORS",
    "make_text_rule",
    "math_plugin",
    "typeset",
]
