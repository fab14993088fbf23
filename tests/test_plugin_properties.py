"""Property-based tests for the math scanners and normalizer using Hypothesis.

These tests verify invariants that should hold for any input:
1. Text without the delimiter never produces a span
2. A successful inline scan ends on the delimiter, inside the range
3. Validation-only scans agree with full scans
4. Block scans end after their opening line and within the bound
5. Normalizing twice gives the same markup as normalizing once
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from mathspan import HidePolicy, Markdown, MathConfig, TextBuffer, normalize_hidden
from mathspan.scanners import BlockScanner, InlineScanner

# Small alphabet so delimiters, braces and escapes collide often
math_alphabet = st.sampled_from(list("$@{}\\ \nabx+=^_"))
math_text = st.text(alphabet=math_alphabet, max_size=40)
delimiters = st.sampled_from(["$", "@", "%", "#"])

ATTRIBUTES = [
    'aria-hidden="true"',
    "aria-hidden='true'",
    "aria-hidden=true",
    'ARIA-HIDDEN="TRUE"',
    'class="inline"',
    'class="inline katex-html"',
    'class="katex-html"',
    "class=''",
    'style="color:red"',
    'style="color:red;"',
    'style=""',
    'style="display: none"',
    'data-class="inline"',
    'id="x"',
]
attribute_fragments = st.sampled_from(ATTRIBUTES)
tags = st.builds(
    lambda name, attrs, closing: f"<{name} {' '.join(attrs)}{closing}",
    st.sampled_from(["span", "div", "math"]),
    st.lists(attribute_fragments, min_size=1, max_size=4, unique=True),
    st.sampled_from([">", "/>"]),
)
plain_fragments = [f for f in ATTRIBUTES if "aria-hidden" not in f.lower()]
hidden_tags = st.builds(
    lambda name, aria, attrs, closing: f"<{name} {' '.join([*attrs, aria])}{closing}",
    st.sampled_from(["span", "div", "math"]),
    st.sampled_from([f for f in ATTRIBUTES if "aria-hidden" in f.lower()]),
    st.lists(st.sampled_from(plain_fragments), max_size=3, unique=True),
    st.sampled_from([">", "/>"]),
)
hidden_markup = st.lists(st.one_of(hidden_tags, st.sampled_from(["text", "</span>"])), max_size=6).map(
    "".join
)
markup = st.lists(st.one_of(tags, st.sampled_from(["text", "</span>", "x < y"])), max_size=6).map(
    "".join
)


class TestInlineScannerProperties:
    """Properties of InlineScanner over arbitrary text."""

    @given(text=st.text(max_size=50), delimiter=delimiters, pos=st.integers(0, 50))
    @settings(max_examples=200)
    def test_text_without_delimiter_never_matches(self, text: str, delimiter: str, pos: int) -> None:
        """No delimiter in the source means no span at any position."""
        text = text.replace(delimiter, "")
        assert InlineScanner(delimiter).scan(text, pos) is None

    @given(text=math_text, pos=st.integers(0, 40))
    @settings(max_examples=300)
    def test_success_ends_on_closing_delimiter(self, text: str, pos: int) -> None:
        """A match ends inside the range, just past a delimiter."""
        result = InlineScanner().scan(text, pos)
        if result is None:
            return

        assert pos < result.end <= len(text)
        assert text[result.end - 1] == "$"
        assert result.token.start == pos
        assert result.token.end == result.end

    @given(text=math_text, pos=st.integers(0, 40))
    @settings(max_examples=300)
    def test_content_is_normalized(self, text: str, pos: int) -> None:
        """Span content has no newlines, no doubled spaces, no outer spaces."""
        result = InlineScanner().scan(text, pos)
        if result is None:
            return

        content = result.token.content
        assert "\n" not in content
        assert "  " not in content
        assert content == content.strip()

    @given(text=math_text, pos=st.integers(0, 40))
    @settings(max_examples=300)
    def test_validation_only_agrees_with_full_scan(self, text: str, pos: int) -> None:
        """Validation-only mode reports the same outcome and end offset."""
        scanner = InlineScanner()
        full = scanner.scan(text, pos)
        check = scanner.scan(text, pos, validate_only=True)

        if full is None:
            assert check is None
        else:
            assert check is not None
            assert check.end == full.end
            assert check.token is None

    @given(text=math_text, pos=st.integers(0, 40), cut=st.integers(0, 40))
    @settings(max_examples=200)
    def test_range_limit_is_respected(self, text: str, pos: int, cut: int) -> None:
        """Nothing past pos_max takes part in a match."""
        pos_max = min(cut, len(text))
        result = InlineScanner().scan(text, pos, pos_max)
        if result is not None:
            assert result.end <= pos_max
            assert InlineScanner().scan(text[:pos_max], pos) == result


class TestBlockScannerProperties:
    """Properties of BlockScanner over arbitrary line sequences."""

    @given(
        lines=st.lists(st.text(alphabet=st.sampled_from(list("ab $\t{}")), max_size=8), max_size=8),
        delimiter=st.sampled_from(["@", "%"]),
    )
    @settings(max_examples=200)
    def test_text_without_delimiter_never_matches(self, lines: list[str], delimiter: str) -> None:
        """Lines without the delimiter never open a block."""
        buffer = TextBuffer.from_text("\n".join(lines))
        scanner = BlockScanner(delimiter)
        for line in range(buffer.line_count):
            assert scanner.scan(buffer, line, buffer.line_count) is None

    @given(
        lines=st.lists(
            st.sampled_from(["$$", "  $$", "$$ ", "$$$", "x", "    $$", "", "$$x", "a $$"]),
            max_size=10,
        ),
        start=st.integers(0, 9),
    )
    @settings(max_examples=300)
    def test_end_within_bounds(self, lines: list[str], start: int) -> None:
        """A block spans at least opener and closer and never passes the bound."""
        buffer = TextBuffer.from_text("\n".join(lines))
        if start >= buffer.line_count:
            return

        scanner = BlockScanner()
        result = scanner.scan(buffer, start, buffer.line_count)
        check = scanner.scan(buffer, start, buffer.line_count, validate_only=True)

        if result is None:
            assert check is None
            return
        assert start + 2 <= result.end <= buffer.line_count
        assert (result.token.start, result.token.end) == (start, result.end)
        assert check is not None and check.end == result.end


class TestNormalizerProperties:
    """Properties of normalize_hidden over generated markup."""

    @given(html=markup, policy=st.sampled_from(list(HidePolicy)))
    @settings(max_examples=300)
    def test_idempotent(self, html: str, policy: HidePolicy) -> None:
        """A second pass changes nothing."""
        config = MathConfig(hide_policy=policy)
        once = normalize_hidden(html, config)
        assert normalize_hidden(once, config) == once

    @given(html=st.text(alphabet=st.sampled_from(list("<>span =\"'/x")), max_size=40))
    @settings(max_examples=200)
    def test_markup_without_aria_hidden_unchanged(self, html: str) -> None:
        """Only aria-hidden tags are rewritten."""
        assert normalize_hidden(html) == html

    @given(html=hidden_markup)
    @settings(max_examples=200)
    def test_every_hidden_tag_hidden(self, html: str) -> None:
        """Each aria-hidden tag carries display:none after the style pass."""
        result = normalize_hidden(html)
        hidden_tags = result.lower().count("aria-hidden")
        hidden_styles = result.count("display:none") + result.count("display: none")
        assert hidden_styles >= hidden_tags


class TestRenderingProperties:
    """End-to-end properties through markdown-it-py."""

    @given(text=st.text(alphabet=st.sampled_from(list("abc ,.!\n")), max_size=60))
    @settings(max_examples=50, deadline=None)
    def test_math_free_documents_render_like_plain_markdown(self, text: str) -> None:
        """Without delimiters the plugin leaves output untouched."""
        from markdown_it import MarkdownIt

        assert Markdown()(text) == MarkdownIt("commonmark").render(text)
