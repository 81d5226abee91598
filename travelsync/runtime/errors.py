"""Shared exception policy for surface calls."""

from __future__ import annotations

import logging
from typing import TypeAlias

# Failures tolerated when driving renderer and list surfaces; the view simply
# does not follow.
RecoverableRuntimeErrors: TypeAlias = tuple[type[BaseException], ...]
RECOVERABLE_RUNTIME_ERRORS: RecoverableRuntimeErrors = (
    RuntimeError,
    OSError,
    ValueError,
    TypeError,
    AttributeError,
)


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.DEBUG,
) -> None:
    """Log a tolerated exception with traceback."""
    logger.log(level, message, exc_info=True)
