"""Post-render normalization of accessibility-hidden markup.

Typesetting engines emit a visual rendering marked ``aria-hidden="true"``
next to a MathML rendering for assistive technology. When the page relies
on native MathML, the visual copy must also be hidden from sight. The
normalizer finds every opening tag carrying ``aria-hidden="true"`` and
rewrites it according to the configured HidePolicy:

- STYLE: drop the inline marker class, ensure ``display:none`` in the
  style attribute
- UTILITY_CLASS: drop the inline marker class, ensure the utility class
  (``hidden`` by default) in the class attribute

Only the matched opening tags change. Normalizing twice gives the same
result as normalizing once.

Example:
    >>> normalize_hidden('<span class="inline foo" aria-hidden="true">x</span>')
    '<span class="foo" aria-hidden="true" style="display:none">x</span>'

"""

from __future__ import annotations

import re
from collections.abc import Callable

from mathspan.config import HidePolicy, MathConfig

# Opening tag with aria-hidden set to true, in any attribute position
_ARIA_HIDDEN_TAG_RE = re.compile(
    r"""<[a-zA-Z][a-zA-Z0-9-]*\s[^>]*?(?<![\w-])aria-hidden\s*=\s*(?:"true"|'true'|true(?![\w-]))[^>]*>""",
    re.IGNORECASE,
)

_CLASS_ATTR_RE = re.compile(r"""(\s*)(?<![\w-])class\s*=\s*(?:"([^"]*)"|'([^']*)')""", re.IGNORECASE)
_STYLE_ATTR_RE = re.compile(r"""(?<![\w-])style\s*=\s*(?:"([^"]*)"|'([^']*)')""", re.IGNORECASE)

_HIDE_DECLARATION = "display:none"
_HIDE_DECLARATIONS = ("display:none", "display: none")


def _attr_value(match: re.Match[str], first_group: int) -> str:
    """Value of a quoted attribute match, whichever quote style was used."""
    value = match.group(first_group)
    if value is None:
        value = match.group(first_group + 1)
    return value


def _attr_quote(match: re.Match[str], first_group: int) -> str:
    """Quote character the matched attribute was written with."""
    return '"' if match.group(first_group) is not None else "'"


def _add_attribute(tag: str, attribute: str) -> str:
    """Insert ``attribute`` before the end of an opening tag."""
    if tag.endswith("/>"):
        return f"{tag[:-2].rstrip()} {attribute} />"
    return f"{tag[:-1]} {attribute}>"


def _without_class(classes: str, inline_class: str) -> str:
    return " ".join(c for c in classes.split() if c != inline_class)


def _strip_inline_class(tag: str, inline_class: str) -> str:
    """Remove the inline marker class; drop the attribute if it empties."""
    match = _CLASS_ATTR_RE.search(tag)
    if match is None:
        return tag

    existing = _attr_value(match, 2)
    filtered = _without_class(existing, inline_class)
    if filtered == existing:
        return tag

    if filtered:
        quote = _attr_quote(match, 2)
        replacement = f"{match.group(1)}class={quote}{filtered}{quote}"
    else:
        replacement = ""
    return tag[: match.start()] + replacement + tag[match.end() :]


def _hide_with_style(tag: str, config: MathConfig) -> str:
    """STYLE policy: remove inline class, add ``display:none``."""
    tag = _strip_inline_class(tag, config.inline_class)

    match = _STYLE_ATTR_RE.search(tag)
    if match is None:
        return _add_attribute(tag, f'style="{_HIDE_DECLARATION}"')

    existing = _attr_value(match, 1)
    if any(declaration in existing for declaration in _HIDE_DECLARATIONS):
        return tag

    stripped = existing.rstrip()
    if not stripped:
        style = _HIDE_DECLARATION
    elif stripped.endswith(";"):
        style = f"{stripped} {_HIDE_DECLARATION}"
    else:
        style = f"{stripped}; {_HIDE_DECLARATION}"
    quote = _attr_quote(match, 1)
    return tag[: match.start()] + f"style={quote}{style}{quote}" + tag[match.end() :]


def _hide_with_utility_class(tag: str, config: MathConfig) -> str:
    """UTILITY_CLASS policy: swap the inline class for the utility class."""
    match = _CLASS_ATTR_RE.search(tag)
    if match is None:
        return _add_attribute(tag, f'class="{config.hidden_class}"')

    existing = _attr_value(match, 2)
    classes = _without_class(existing, config.inline_class).split()
    if config.hidden_class not in classes:
        classes.append(config.hidden_class)

    quote = _attr_quote(match, 2)
    replacement = f"{match.group(1)}class={quote}{' '.join(classes)}{quote}"
    return tag[: match.start()] + replacement + tag[match.end() :]


NORMALIZERS: dict[HidePolicy, Callable[[str, MathConfig], str]] = {
    HidePolicy.STYLE: _hide_with_style,
    HidePolicy.UTILITY_CLASS: _hide_with_utility_class,
}

_DEFAULT_CONFIG = MathConfig()


def normalize_hidden(markup: str, config: MathConfig | None = None) -> str:
    """Hide every ``aria-hidden="true"`` element from visual rendering.

    Args:
        markup: HTML fragment produced by the typesetting renderer
        config: Configuration selecting the HidePolicy (defaults to STYLE)

    Returns:
        Markup with matching opening tags rewritten. Non-string or empty
        input is returned unchanged.
    """
    if not markup or not isinstance(markup, str):
        return markup

    config = config or _DEFAULT_CONFIG
    rewrite = NORMALIZERS[config.hide_policy]
    return _ARIA_HIDDEN_TAG_RE.sub(lambda m: rewrite(m.group(0), config), markup)


__all__ = ["NORMALIZERS", "normalize_hidden"]
