"""Immutable configuration for mathspan.

One ``MathConfig`` is built per plugin installation (or per ``Markdown``
instance) and read by the scanners, the renderer and the normalizer.

Thread Safety:
    MathConfig is a frozen dataclass. Safe to share across threads.

Usage:
    config = MathConfig(delimiter="@")

    # From plugin options (framework integration)
    config = MathConfig.from_dict({"delimiter": "@", "use_tailwind": True})

"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from mathspan.errors import ConfigError, DelimiterError

DEFAULT_DELIMITER = "$"


class HidePolicy(Enum):
    """How the normalizer hides ``aria-hidden`` elements from sight.

    STYLE adds an inline ``display:none`` declaration. UTILITY_CLASS adds a
    CSS utility class instead (e.g. Tailwind's ``hidden``) and leaves the
    style attribute alone.

    """

    STYLE = "style"
    UTILITY_CLASS = "utility-class"


def validate_delimiter(delimiter: Any) -> str:
    """Return the delimiter if it is a single character.

    Raises:
        DelimiterError: If the value is not a one-character string.
    """
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise DelimiterError(delimiter)
    return delimiter


@dataclass(frozen=True, slots=True)
class MathConfig:
    """Immutable math configuration.

    Attributes:
        delimiter: Marker character; used once for inline math, doubled for
            block math
        hide_policy: Rewrite strategy applied by the normalizer
        inline_class: Class token the normalizer strips from hidden elements
        hidden_class: Utility class added under HidePolicy.UTILITY_CLASS
        throw_on_error: Make the default renderer raise RenderError instead of
            emitting error markup

    """

    delimiter: str = DEFAULT_DELIMITER
    hide_policy: HidePolicy = HidePolicy.STYLE
    inline_class: str = "inline"
    hidden_class: str = "hidden"
    throw_on_error: bool = False

    def __post_init__(self) -> None:
        validate_delimiter(self.delimiter)
        if not isinstance(self.hide_policy, HidePolicy):
            raise ConfigError("hide_policy", self.hide_policy, "must be a HidePolicy")
        if not self.hidden_class or any(c.isspace() for c in self.hidden_class):
            raise ConfigError("hidden_class", self.hidden_class, "must be a single class token")

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "MathConfig":
        """Create MathConfig from a plugin options mapping.

        Unknown keys are silently ignored. A falsy ``delimiter`` falls back to
        the default ``$``. The legacy ``use_tailwind`` (or ``useTailwind``)
        flag selects HidePolicy.UTILITY_CLASS when ``hide_policy`` is absent.
        ``hide_policy`` may be a HidePolicy or its string value.

        Args:
            options: Option values keyed by MathConfig attribute names

        Returns:
            New MathConfig instance

        Raises:
            ConfigError: If a value is invalid (DelimiterError for the
                delimiter)

        Example:
            >>> MathConfig.from_dict({"delimiter": "", "useTailwind": True})
            MathConfig(delimiter='$', hide_policy=<HidePolicy.UTILITY_CLASS: 'utility-class'>, ...)

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in options.items() if k in valid_fields}

        if not filtered.get("delimiter"):
            filtered["delimiter"] = DEFAULT_DELIMITER

        if "hide_policy" in filtered:
            policy = filtered["hide_policy"]
            if not isinstance(policy, HidePolicy):
                try:
                    filtered["hide_policy"] = HidePolicy(policy)
                except ValueError as e:
                    raise ConfigError("hide_policy", policy, "unknown policy") from e
        elif options.get("use_tailwind") or options.get("useTailwind"):
            filtered["hide_policy"] = HidePolicy.UTILITY_CLASS

        return cls(**filtered)


__all__ = [
    "DEFAULT_DELIMITER",
    "HidePolicy",
    "MathConfig",
    "validate_delimiter",
]
