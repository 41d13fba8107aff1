"""Notification collaborator: the engine-facing notifier plus channel dispatchers."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx
from django.conf import settings
from django.core.mail import send_mail
from django.db.models import F
from django.utils import timezone
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .models import Notification

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationMessage:
    type: str
    title: str
    message: str
    action_link: str = ""


class Notifier(Protocol):
    def notify(self, user_id, message: NotificationMessage) -> None:
        ...


class CeleryNotifier:
    """Fire-and-forget: enqueue ``create_notification`` on the notifications queue."""

    def __init__(self, channel: str | None = None):
        self.channel = channel or settings.NOTIFICATIONS_DEFAULT_CHANNEL

    def notify(self, user_id, message: NotificationMessage) -> None:
        from .tasks import create_notification

        create_notification.delay(
            user_id=user_id,
            notification_type=message.type,
            title=message.title,
            message=message.message,
            action_link=message.action_link,
            channel=self.channel,
        )


def _mark_sent(notification: Notification) -> None:
    notification.delivery_status = Notification.DeliveryStatus.SENT
    notification.sent_at = timezone.now()
    notification.save(update_fields=["delivery_status", "sent_at", "updated_at"])


def _mark_failed(notification: Notification, exc: Exception) -> None:
    notification.delivery_status = Notification.DeliveryStatus.FAILED
    notification.error_message = str(exc)[:500]
    notification.save(update_fields=["delivery_status", "error_message", "updated_at"])


def send_email_notification(notification: Notification) -> bool:
    """Send an email notification."""
    recipient = notification.recipient or notification.user.email
    if not recipient:
        logger.warning("No recipient for notification %s", notification.id)
        return False
    try:
        body = notification.message
        if notification.action_link:
            body += f"\n\n{settings.SITE_URL.rstrip('/')}{notification.action_link}"
        send_mail(
            subject=notification.title,
            message=body,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient],
            fail_silently=False,
        )
        _mark_sent(notification)
        return True
    except Exception as exc:
        _mark_failed(notification, exc)
        logger.exception("Email notification failed: %s", notification.id)
        return False


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((httpx.TransportError, httpx.HTTPStatusError)),
    reraise=True,
)
def _post_webhook(url: str, payload: dict) -> None:
    resp = httpx.post(url, json=payload, timeout=10)
    resp.raise_for_status()


def send_webhook_notification(notification: Notification) -> bool:
    """Post JSON to a webhook URL."""
    url = notification.recipient or settings.WEBHOOK_URL
    if not url:
        logger.warning("No webhook URL for notification %s", notification.id)
        return False
    try:
        _post_webhook(url, {
            "event": notification.notification_type,
            "user_id": notification.user_id,
            "title": notification.title,
            "message": notification.message,
            "action_link": notification.action_link,
            "payload": notification.payload,
            "timestamp": notification.created_at.isoformat(),
        })
        _mark_sent(notification)
        return True
    except Exception as exc:
        _mark_failed(notification, exc)
        logger.exception("Webhook notification failed: %s", notification.id)
        return False


def _count_attempt(notification: Notification) -> None:
    Notification.objects.filter(pk=notification.pk).update(
        delivery_attempts=F("delivery_attempts") + 1
    )
    notification.delivery_attempts += 1


def dispatch_notification(notification: Notification) -> bool:
    """Route notification to the correct channel."""
    if notification.channel != Notification.Channel.INTERNAL:
        _count_attempt(notification)
    if notification.channel == Notification.Channel.EMAIL:
        return send_email_notification(notification)
    elif notification.channel == Notification.Channel.WEBHOOK:
        return send_webhook_notification(notification)
    # INTERNAL = stored in DB, shown in the in-app inbox
    _mark_sent(notification)
    return True

