import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Opportunity",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("title", models.CharField(max_length=300, verbose_name="Title")),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                ("city", models.CharField(blank=True, db_index=True, max_length=200, verbose_name="City")),
                ("is_remote", models.BooleanField(default=False, verbose_name="Remote")),
                ("latitude", models.FloatField(blank=True, null=True, verbose_name="Latitude")),
                ("longitude", models.FloatField(blank=True, null=True, verbose_name="Longitude")),
                ("deadline", models.DateTimeField(blank=True, db_index=True, help_text="Last day creators can apply", null=True, verbose_name="Deadline")),
                ("owner", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="opportunities", to=settings.AUTH_USER_MODEL, verbose_name="Business")),
            ],
            options={
                "verbose_name": "Opportunity",
                "verbose_name_plural": "Opportunities",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["city", "deadline"], name="idx_opp_city_deadline")],
            },
        ),
        migrations.CreateModel(
            name="Role",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("title", models.CharField(max_length=200, verbose_name="Title")),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                ("budget", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name="Budget")),
                ("status", models.CharField(choices=[("draft", "Draft"), ("open", "Open"), ("filled", "Filled")], db_index=True, default="open", max_length=10, verbose_name="Status")),
                ("applicant_count", models.PositiveIntegerField(default=0, verbose_name="Applicants")),
                ("capacity", models.PositiveSmallIntegerField(default=1, verbose_name="Slots")),
                ("filled_count", models.PositiveSmallIntegerField(default=0, verbose_name="Filled slots")),
                ("opportunity", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="roles", to="opportunities.opportunity")),
            ],
            options={
                "verbose_name": "Role",
                "verbose_name_plural": "Roles",
                "ordering": ["created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("filled_count__lte", models.F("capacity"))),
                        name="role_filled_within_capacity",
                    ),
                ],
            },
        ),
    ]
