"""Notifier selection from settings."""
from config.settings import Settings
from src.notifications.base_notifier import BaseNotifier
from src.notifications.celery_notifier import CeleryNotifier
from src.notifications.log_notifier import LogNotifier
from src.notifications.webhook_notifier import WebhookNotifier

def build_notifier(settings: Settings) -> BaseNotifier:
    """Build the notifier named by NOTIFICATION_BACKEND."""
    backend = settings.NOTIFICATION_BACKEND.lower()

    if backend == "webhook":
        return WebhookNotifier(
            settings.NOTIFICATION_WEBHOOK_URL,
            timeout=settings.NOTIFICATION_TIMEOUT
        )
    if backend == "celery":
        return CeleryNotifier()
    if backend == "log":
        return LogNotifier()

    raise ValueError(f"Unknown notification backend: {settings.NOTIFICATION_BACKEND}")
