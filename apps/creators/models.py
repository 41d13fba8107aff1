"""Creator profiles and saved opportunities."""
from django.conf import settings
from django.db import models

from apps.core.models import TimeStampedModel
from apps.opportunities.models import Opportunity


class CreatorProfile(TimeStampedModel):
    """Freelance talent looking for roles."""

    class Plan(models.TextChoices):
        FREE = "free", "Free"
        PLUS = "plus", "Creator Plus"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="creator_profile"
    )
    display_name = models.CharField("Display name", max_length=200)

    # Matching profile
    tags = models.JSONField(
        "Roles / skills",
        default=list,
        blank=True,
        help_text='Free text, e.g. ["photographer", "content creator"]',
    )
    city = models.CharField("Home city", max_length=200, blank=True)
    radius_km = models.PositiveIntegerField(
        "Search radius (km)", null=True, blank=True,
        help_text="Defaults to 50 km when empty",
    )
    latitude = models.FloatField("Latitude", null=True, blank=True)
    longitude = models.FloatField("Longitude", null=True, blank=True)
    preferred_rate = models.DecimalField(
        "Preferred rate", max_digits=12, decimal_places=2, null=True, blank=True
    )

    # Written by billing; read-only here.
    plan = models.CharField("Plan", max_length=10, choices=Plan.choices, default=Plan.FREE)
    plan_expires_at = models.DateTimeField("Plan expires at", null=True, blank=True)

    class Meta:
        verbose_name = "Creator"
        verbose_name_plural = "Creators"
        ordering = ["display_name"]

    def __str__(self):
        return self.display_name


class SavedOpportunity(TimeStampedModel):
    """Opportunity a creator bookmarked for later."""

    creator = models.ForeignKey(
        CreatorProfile, on_delete=models.CASCADE, related_name="saved_opportunities"
    )
    opportunity = models.ForeignKey(
        Opportunity, on_delete=models.CASCADE, related_name="saved_by"
    )

    class Meta:
        verbose_name = "Saved opportunity"
        verbose_name_plural = "Saved opportunities"
        unique_together = [("creator", "opportunity")]

    def __str__(self):
        return f"{self.creator} ★ {self.opportunity}"
