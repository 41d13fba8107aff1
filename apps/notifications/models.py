"""User notifications and their delivery state."""
from django.conf import settings
from django.db import models

from apps.core.models import TimeStampedModel


class Notification(TimeStampedModel):
    """Message addressed to a business or a creator."""

    class Type(models.TextChoices):
        PROJECT_APPLICATION = "project_application", "New application"
        PROJECT_ACCEPTED = "project_accepted", "Application accepted"
        PROJECT_REJECTED = "project_rejected", "Application rejected"
        NEW_OPPORTUNITY = "new_opportunity", "New opportunity"

    class Channel(models.TextChoices):
        EMAIL = "email", "E-mail"
        WEBHOOK = "webhook", "Webhook"
        INTERNAL = "internal", "In-app"

    class DeliveryStatus(models.TextChoices):
        PENDING = "pending", "Pending"
        SENT = "sent", "Sent"
        FAILED = "failed", "Failed"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notifications"
    )
    notification_type = models.CharField(
        "Type", max_length=30, choices=Type.choices, db_index=True
    )
    channel = models.CharField(
        "Channel", max_length=20, choices=Channel.choices, default=Channel.INTERNAL
    )
    recipient = models.CharField("Recipient", max_length=300, blank=True)
    title = models.CharField("Title", max_length=300)
    message = models.TextField("Message")
    action_link = models.CharField("Action link", max_length=500, blank=True)
    payload = models.JSONField("Extra payload", default=dict, blank=True)
    delivery_status = models.CharField(
        "Delivery status", max_length=20,
        choices=DeliveryStatus.choices,
        default=DeliveryStatus.PENDING,
    )
    sent_at = models.DateTimeField("Sent at", null=True, blank=True)
    delivery_attempts = models.PositiveSmallIntegerField("Delivery attempts", default=0)
    error_message = models.TextField("Error", blank=True)

    class Meta:
        verbose_name = "Notification"
        verbose_name_plural = "Notifications"
        ordering = ["-created_at"]

    def __str__(self):
        return f"[{self.get_notification_type_display()}] {self.title}"
