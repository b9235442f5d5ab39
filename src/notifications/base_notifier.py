"""
Abstract notification channel.
"""
from abc import ABC, abstractmethod
from typing import Optional

class BaseNotifier(ABC):
    """
    Delivers a (title, content) message to the owner.
    Implementations raise NotificationError when delivery fails.
    """

    # Metric outcome once notify() returns; queued backends report delivery later
    accepted_outcome = "sent"

    @abstractmethod
    def notify(self, title: str, content: str, recipient: Optional[str] = None) -> bool:
        """Send a notification. Returns True once accepted for delivery."""
        pass
