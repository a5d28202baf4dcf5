"""Shared utilities (logging)."""

from .logging_utils import (
    configure_logging,
    QueueLogHandler,
    attach_queue_handler,
    detach_queue_handler,
)

__all__ = [
    "configure_logging",
    "QueueLogHandler",
    "attach_queue_handler",
    "detach_queue_handler",
]
