"""
core.observability: route-level observability sinks.

Public API:
    DeprecationNotifier: protocol with warn(message, **fields)
    LoggingNotifier: writes warnings to a named logger
"""

from core.observability.notifier import DeprecationNotifier, LoggingNotifier

__all__ = ['DeprecationNotifier', 'LoggingNotifier']
