"""
Error taxonomy for the signal core.
"""
from typing import Dict, List


class SignalMonitorError(Exception):
    """Base class for signal monitor errors."""


class ValidationError(SignalMonitorError):
    """
    Malformed or missing input, raised before anything is persisted.

    Args:
        errors: List of {"field": ..., "message": ...} entries
    """

    def __init__(self, errors: List[Dict[str, str]]):
        self.errors = errors
        super().__init__(
            "Invalid fields: " + ", ".join(self.fields) if errors else "Invalid input"
        )

    @property
    def fields(self) -> List[str]:
        return [error["field"] for error in self.errors]


class StorageError(SignalMonitorError):
    """Signal store unavailable or a read/write failed."""


class NotificationError(SignalMonitorError):
    """Notification delivery failed. Never surfaced to submitters."""


class SignalNotFoundError(SignalMonitorError):
    """No signal with the requested id."""

    def __init__(self, signal_id: int):
        self.signal_id = signal_id
        super().__init__(f"Signal {signal_id} not found")
