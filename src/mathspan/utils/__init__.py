"""Utility modules for mathspan.

Provides:
- text: collapse_whitespace, escape_html
- logger: get_logger for logging
"""

from mathspan.utils.logger import get_logger
from mathspan.utils.text import collapse_whitespace, escape_html

__all__ = [
    "collapse_whitespace",
    "escape_html",
    "get_logger",
]
