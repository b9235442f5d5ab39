"""Notifier that hands delivery to a Celery worker."""
from typing import Optional
from src.core.exceptions import NotificationError
from src.notifications.base_notifier import BaseNotifier
from src.utils.logging import get_logger

logger = get_logger(__name__)

class CeleryNotifier(BaseNotifier):
    """
    Queues a deliver_notification task and returns immediately.
    Only enqueue failures (broker unreachable) are reported here; the
    worker records the delivery outcome.
    """

    accepted_outcome = "queued"

    def notify(self, title: str, content: str, recipient: Optional[str] = None) -> bool:
        from src.scheduler.tasks import deliver_notification

        try:
            result = deliver_notification.delay(title, content, recipient)
        except Exception as e:
            raise NotificationError(f"Could not queue notification: {e}") from e

        logger.info("Notification queued", task_id=result.id)
        return True
