"""grantsync - permission grant and role assignment reconciliation."""

__version__ = "0.1.0"
