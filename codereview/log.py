"""Logging setup built on Loguru.

Modules log through :func:`get_logger`; the CLI calls
:func:`configure_logging` once. The package is disabled on import; configuring
logging enables it, drops Loguru's default stderr sink and replaces only the
sink added here, so sinks installed by tests or host applications stay
untouched.
"""

from __future__ import annotations

import sys
from contextlib import suppress
from typing import Any, Optional

from loguru import logger

DEFAULT_FORMAT = "<level>{level: <8}</level> | {name} - {message}"

_HANDLER_ID: Optional[int] = None
_DEFAULT_HANDLER_ID = 0


def configure_logging(level: str = "WARNING", sink: Any = None) -> None:
    """Route review logs at ``level`` and above to ``sink`` (stderr by default)."""

    global _HANDLER_ID
    for handler_id in (_DEFAULT_HANDLER_ID, _HANDLER_ID):
        if handler_id is not None:
            with suppress(ValueError):
                logger.remove(handler_id)
    logger.enable("codereview")
    _HANDLER_ID = logger.add(
        sink if sink is not None else sys.stderr,
        level=level.upper(),
        format=DEFAULT_FORMAT,
        colorize=False if sink is not None else None,
    )


def get_logger(name: str) -> Any:
    """Return a logger bound to a component name."""

    return logger.bind(component=name)
