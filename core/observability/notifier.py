"""
Observability sinks for route-level signals.

Routes receive a notifier instead of reaching for a module logger, so the
deprecation signal can be captured, counted, or redirected per app.
"""
from __future__ import annotations

import logging
from typing import Any, Protocol


class DeprecationNotifier(Protocol):
    def warn(self, message: str, **fields: Any) -> None:
        ...


class LoggingNotifier:
    """Writes each warning as a WARNING record on a named logger."""

    def __init__(self, logger_name: str = 'stars.api'):
        self.logger = logging.getLogger(logger_name)

    def warn(self, message: str, **fields: Any) -> None:
        self.logger.warning(message, extra={'fields': fields})
