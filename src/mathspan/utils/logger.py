"""Loggers namespaced under ``mathspan``; no handlers are configured."""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return the standard library logger for ``name`` under "mathspan."."""
    if not (name == "mathspan" or name.startswith("mathspan.")):
        name = f"mathspan.{name}"
    return logging.getLogger(name)
