"""Typesetting delegates for mathspan.

- MathRenderer: protocol any delegate satisfies
- MathMLRenderer: default delegate backed by latex2mathml
"""

from mathspan.renderers.mathml import MathMLRenderer
from mathspan.renderers.protocol import MathRenderer

__all__ = ["MathMLRenderer", "MathRenderer"]
