"""Application ports - interfaces for external adapters."""

from grantsync.application.ports.transport import Transport

__all__ = [
    "Transport",
]
