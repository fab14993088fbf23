"""Exception classes for mathspan.

A failed scan is not an error: scanners return ``None`` and leave the
buffer untouched. Exceptions are reserved for setup mistakes and for
typesetting failures when the caller asked for them to be raised.
"""

from __future__ import annotations

from typing import Any


class MathspanError(Exception):
    """Base exception for all mathspan errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(MathspanError):
    """Invalid configuration value.

    Raised at setup time, before any scanning happens.
    """

    def __init__(self, option: str, value: Any, message: str) -> None:
        """Initialize configuration error.

        Args:
            option: Name of the offending option (e.g., "delimiter")
            value: The rejected value
            message: Description of what is wrong
        """
        self.option = option
        self.value = value
        super().__init__(f"Invalid {option} {value!r}: {message}")


class DelimiterError(ConfigError):
    """Delimiter is not exactly one character."""

    def __init__(self, value: Any) -> None:
        super().__init__("delimiter", value, "must be exactly one character")


class RenderError(MathspanError):
    """Typesetting failed and the renderer was told to raise.

    Only produced when ``throw_on_error`` is enabled; the default renderer
    emits error markup instead.
    """

    def __init__(self, source: str, message: str) -> None:
        """Initialize render error.

        Args:
            source: Math source that failed to render
            message: Description from the underlying converter
        """
        self.source = source
        super().__init__(f"Cannot render {source!r}: {message}")
