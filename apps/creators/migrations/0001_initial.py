import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("opportunities", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="CreatorProfile",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("display_name", models.CharField(max_length=200, verbose_name="Display name")),
                ("tags", models.JSONField(blank=True, default=list, help_text='Free text, e.g. ["photographer", "content creator"]', verbose_name="Roles / skills")),
                ("city", models.CharField(blank=True, max_length=200, verbose_name="Home city")),
                ("radius_km", models.PositiveIntegerField(blank=True, help_text="Defaults to 50 km when empty", null=True, verbose_name="Search radius (km)")),
                ("latitude", models.FloatField(blank=True, null=True, verbose_name="Latitude")),
                ("longitude", models.FloatField(blank=True, null=True, verbose_name="Longitude")),
                ("preferred_rate", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name="Preferred rate")),
                ("plan", models.CharField(choices=[("free", "Free"), ("plus", "Creator Plus")], default="free", max_length=10, verbose_name="Plan")),
                ("plan_expires_at", models.DateTimeField(blank=True, null=True, verbose_name="Plan expires at")),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="creator_profile", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Creator",
                "verbose_name_plural": "Creators",
                "ordering": ["display_name"],
            },
        ),
        migrations.CreateModel(
            name="SavedOpportunity",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("creator", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="saved_opportunities", to="creators.creatorprofile")),
                ("opportunity", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="saved_by", to="opportunities.opportunity")),
            ],
            options={
                "verbose_name": "Saved opportunity",
                "verbose_name_plural": "Saved opportunities",
                "unique_together": {("creator", "opportunity")},
            },
        ),
    ]
