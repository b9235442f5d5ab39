# tests/test_notifiers.py
from unittest.mock import MagicMock, patch

import pytest
import requests

from config.settings import Settings
from src.core.exceptions import NotificationError
from src.notifications.celery_notifier import CeleryNotifier
from src.notifications.factory import build_notifier
from src.notifications.log_notifier import LogNotifier
from src.notifications.webhook_notifier import WebhookNotifier


@pytest.fixture
def http_session():
    session = MagicMock(spec=requests.Session)
    session.post.return_value.status_code = 200
    return session


def test_webhook_posts_title_content_and_recipient(http_session):
    notifier = WebhookNotifier("https://hooks.example.com/owner", timeout=3, session=http_session)

    assert notifier.notify("title", "content", recipient="owner-1") is True

    http_session.post.assert_called_once_with(
        "https://hooks.example.com/owner",
        json={"title": "title", "content": "content", "recipient": "owner-1"},
        timeout=3,
    )


def test_webhook_transport_error_becomes_notification_error(http_session):
    http_session.post.side_effect = requests.ConnectionError("refused")
    notifier = WebhookNotifier("https://hooks.example.com/owner", session=http_session)

    with pytest.raises(NotificationError):
        notifier.notify("title", "content")


def test_webhook_http_error_becomes_notification_error(http_session):
    http_session.post.return_value.raise_for_status.side_effect = requests.HTTPError("500")
    notifier = WebhookNotifier("https://hooks.example.com/owner", session=http_session)

    with pytest.raises(NotificationError):
        notifier.notify("title", "content")


def test_webhook_requires_url():
    with pytest.raises(ValueError):
        WebhookNotifier("")


def test_log_notifier_accepts_everything():
    assert LogNotifier().notify("title", "content") is True


def test_celery_notifier_queues_task():
    with patch("src.scheduler.tasks.deliver_notification") as task:
        task.delay.return_value.id = "task-1"

        assert CeleryNotifier().notify("title", "content", recipient="owner-1") is True

    task.delay.assert_called_once_with("title", "content", "owner-1")


def test_celery_notifier_reports_broker_failure():
    with patch("src.scheduler.tasks.deliver_notification") as task:
        task.delay.side_effect = ConnectionError("redis unreachable")

        with pytest.raises(NotificationError):
            CeleryNotifier().notify("title", "content")


@pytest.mark.parametrize("backend, expected", [
    ("log", LogNotifier),
    ("LOG", LogNotifier),
    ("webhook", WebhookNotifier),
    ("celery", CeleryNotifier),
])
def test_build_notifier(backend, expected):
    settings = Settings(NOTIFICATION_BACKEND=backend, NOTIFICATION_WEBHOOK_URL="https://hooks.example.com/x")

    assert isinstance(build_notifier(settings), expected)


def test_build_notifier_rejects_unknown_backend():
    with pytest.raises(ValueError):
        build_notifier(Settings(NOTIFICATION_BACKEND="carrier-pigeon"))
