"""Inline and display math, with both hide policies."""

from markdown_it import MarkdownIt

from mathspan import HidePolicy, Markdown, math_plugin

source = """
Inline math: $E = mc^2$, and a price that is not math: $20,000.

Block math:

$$
\\sum_{i=1}^{n} i = \\frac{n(n+1)}{2}
$$
"""

md = Markdown()
print(md(source))

# Utility-class hiding for stylesheets that ship a `hidden` class
md = Markdown(hide_policy=HidePolicy.UTILITY_CLASS)
print(md("Inline: $a^2 + b^2 = c^2$"))

# As a plugin on an existing MarkdownIt instance, with a custom delimiter
md_it = MarkdownIt("commonmark").use(math_plugin, delimiter="@")
print(md_it.render("Custom delimiter: @x + y@ and @@\\frac{1}{2}@@"))
