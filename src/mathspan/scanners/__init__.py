"""Delimiter-aware math scanners.

Both scanners return a ``ScanResult`` on success and ``None`` otherwise.
A ``None`` result means nothing was consumed: the caller's cursor is
untouched and the text stays available to other rules.

- InlineScanner: ``$...$`` and ``$$...$$`` within inline text
- BlockScanner: ``$$`` fenced blocks spanning whole lines

"""

from mathspan.scanners.block import BlockScanner, scan_block
from mathspan.scanners.inline import InlineScanner, scan_inline

__all__ = [
    "BlockScanner",
    "InlineScanner",
    "scan_block",
    "scan_inline",
]
