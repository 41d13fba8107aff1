"""Applications of creators to opportunity roles, with their audit trail."""
from django.db import models
from django.utils import timezone

from apps.core.models import TimeStampedModel
from apps.creators.models import CreatorProfile
from apps.opportunities.models import Opportunity, Role


class Application(TimeStampedModel):
    """A creator's request to fill one role. Never deleted, only transitioned."""

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        ACCEPTED = "accepted", "Accepted"
        REJECTED = "rejected", "Rejected"
        WITHDRAWN = "withdrawn", "Withdrawn"

    ACTIVE_STATUSES = (Status.PENDING, Status.ACCEPTED)

    opportunity = models.ForeignKey(
        Opportunity, on_delete=models.PROTECT, related_name="applications"
    )
    role = models.ForeignKey(Role, on_delete=models.PROTECT, related_name="applications")
    role_title = models.CharField(
        "Role title", max_length=200,
        help_text="Snapshot of the role title at submission time",
    )
    creator = models.ForeignKey(
        CreatorProfile, on_delete=models.PROTECT, related_name="applications"
    )

    cover_message = models.TextField("Cover message", blank=True)
    proposed_rate = models.DecimalField(
        "Proposed rate", max_digits=12, decimal_places=2, null=True, blank=True
    )
    available_from = models.DateField("Available from", null=True, blank=True)
    available_until = models.DateField("Available until", null=True, blank=True)

    status = models.CharField(
        "Status", max_length=10, choices=Status.choices, default=Status.PENDING, db_index=True
    )
    submitted_at = models.DateTimeField("Submitted at", default=timezone.now)
    response_message = models.TextField("Business response", blank=True)
    responded_at = models.DateTimeField("Responded at", null=True, blank=True)

    class Meta:
        verbose_name = "Application"
        verbose_name_plural = "Applications"
        ordering = ["-submitted_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["opportunity", "role", "creator"],
                condition=models.Q(status__in=["pending", "accepted"]),
                name="uniq_active_application",
            ),
        ]
        indexes = [
            models.Index(fields=["creator", "status"], name="idx_app_creator_status"),
            models.Index(fields=["opportunity", "status"], name="idx_app_opp_status"),
        ]

    def __str__(self):
        return f"{self.creator} → {self.role_title} ({self.get_status_display()})"


class ApplicationStatusChange(TimeStampedModel):
    """One row per status transition."""

    application = models.ForeignKey(
        Application, on_delete=models.CASCADE, related_name="status_changes"
    )
    from_status = models.CharField("From", max_length=10, blank=True)
    to_status = models.CharField("To", max_length=10, choices=Application.Status.choices)
    message = models.TextField("Message", blank=True)

    class Meta:
        verbose_name = "Status change"
        verbose_name_plural = "Status changes"
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.from_status or '∅'} → {self.to_status}"
