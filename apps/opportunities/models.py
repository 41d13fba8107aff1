"""Opportunity domain models — collaboration projects and their roles."""
from django.conf import settings
from django.db import models

from apps.core.models import TimeStampedModel


class Opportunity(TimeStampedModel):
    """Collaboration project posted by a business."""

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="opportunities",
        verbose_name="Business",
    )
    title = models.CharField("Title", max_length=300)
    description = models.TextField("Description", blank=True, default="")

    # Location
    city = models.CharField("City", max_length=200, blank=True, db_index=True)
    is_remote = models.BooleanField("Remote", default=False)
    latitude = models.FloatField("Latitude", null=True, blank=True)
    longitude = models.FloatField("Longitude", null=True, blank=True)

    deadline = models.DateTimeField(
        "Deadline", null=True, blank=True, db_index=True,
        help_text="Last day creators can apply",
    )

    class Meta:
        verbose_name = "Opportunity"
        verbose_name_plural = "Opportunities"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["city", "deadline"], name="idx_opp_city_deadline"),
        ]

    def __str__(self):
        return self.title[:80]


class Role(TimeStampedModel):
    """Hireable slot within an opportunity. Creators apply to roles."""

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        OPEN = "open", "Open"
        FILLED = "filled", "Filled"

    opportunity = models.ForeignKey(
        Opportunity, on_delete=models.CASCADE, related_name="roles"
    )
    title = models.CharField("Title", max_length=200)
    description = models.TextField("Description", blank=True, default="")
    budget = models.DecimalField(
        "Budget", max_digits=12, decimal_places=2, null=True, blank=True
    )
    status = models.CharField(
        "Status", max_length=10, choices=Status.choices, default=Status.OPEN, db_index=True
    )
    applicant_count = models.PositiveIntegerField("Applicants", default=0)

    # Capacity: accepting an application claims one slot.
    capacity = models.PositiveSmallIntegerField("Slots", default=1)
    filled_count = models.PositiveSmallIntegerField("Filled slots", default=0)

    class Meta:
        verbose_name = "Role"
        verbose_name_plural = "Roles"
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(filled_count__lte=models.F("capacity")),
                name="role_filled_within_capacity",
            ),
        ]

    def __str__(self):
        return f"{self.title} — {self.opportunity.title[:50]}"

    @property
    def remaining_slots(self) -> int:
        return max(self.capacity - self.filled_count, 0)
