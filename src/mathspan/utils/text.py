"""Text helpers shared by the scanners and the default renderer."""

from __future__ import annotations

import html as html_module
import re

# Spaces and newlines only; tabs inside math source are left alone.
_WHITESPACE_RUN_RE = re.compile(r"[ \n]+")


def collapse_whitespace(text: str) -> str:
    """Collapse runs of spaces/newlines to one space and trim the ends.

    Examples:
        >>> collapse_whitespace("\\n x  +\\n y \\n")
        'x + y'
    """
    return _WHITESPACE_RUN_RE.sub(" ", text).strip()


def escape_html(text: str) -> str:
    """Escape HTML special characters for safe use in text and attributes.

    Converts special characters to HTML entities:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;
    - ' becomes &#x27;

    Args:
        text: Text to escape

    Returns:
        HTML-escaped text

    Examples:
        >>> escape_html("a < b")
        'a &lt; b'
    """
    if not text:
        return ""

    return html_module.escape(text, quote=True)
