"""
HTTP webhook notifier.
"""
from typing import Optional
import requests
from src.core.exceptions import NotificationError
from src.notifications.base_notifier import BaseNotifier
from src.utils.logging import get_logger

logger = get_logger(__name__)

class WebhookNotifier(BaseNotifier):
    """
    Posts {"title", "content", "recipient"} as JSON to a webhook URL.

    Args:
        url: Webhook endpoint
        timeout: Request timeout in seconds
        session: Optional requests session (for connection reuse)
    """

    def __init__(self, url: str, timeout: float = 5.0, session: Optional[requests.Session] = None):
        if not url:
            raise ValueError("Webhook notifier requires a URL")
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def notify(self, title: str, content: str, recipient: Optional[str] = None) -> bool:
        payload = {"title": title, "content": content, "recipient": recipient}
        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NotificationError(f"Webhook delivery failed: {e}") from e

        logger.info("Notification delivered", url=self.url, status_code=response.status_code)
        return True
