"""
Celery background tasks.
"""
from src.scheduler.celery_app import app, settings
from src.core.exceptions import NotificationError
from src.notifications.webhook_notifier import WebhookNotifier
from src.utils.logging import get_logger
from src.utils.metrics import record_notification

logger = get_logger(__name__)


@app.task(
    bind=True,
    autoretry_for=(NotificationError,),
    retry_backoff=True,
    max_retries=3,
)
def deliver_notification(self, title: str, content: str, recipient=None):
    """
    Deliver a queued high-confidence notification through the webhook.
    Transport failures are retried with backoff, then dropped.
    """
    logger.info("Delivering notification", title=title, attempt=self.request.retries + 1)

    notifier = WebhookNotifier(
        settings.NOTIFICATION_WEBHOOK_URL,
        timeout=settings.NOTIFICATION_TIMEOUT
    )

    try:
        notifier.notify(title, content, recipient)
    except NotificationError as e:
        logger.error(f"Notification delivery failed: {e}")
        # Count once, after the last retry
        if self.request.retries >= self.max_retries:
            record_notification("failed")
        raise

    record_notification("sent")
    return True
