"""Notifier that only writes to the log."""
from typing import Optional
from src.notifications.base_notifier import BaseNotifier
from src.utils.logging import get_logger

logger = get_logger(__name__)

class LogNotifier(BaseNotifier):
    """Used when no delivery backend is configured."""

    def notify(self, title: str, content: str, recipient: Optional[str] = None) -> bool:
        logger.info("Notification", title=title, content=content, recipient=recipient)
        return True
