import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("creators", "0001_initial"),
        ("opportunities", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Application",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("role_title", models.CharField(help_text="Snapshot of the role title at submission time", max_length=200, verbose_name="Role title")),
                ("cover_message", models.TextField(blank=True, verbose_name="Cover message")),
                ("proposed_rate", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name="Proposed rate")),
                ("available_from", models.DateField(blank=True, null=True, verbose_name="Available from")),
                ("available_until", models.DateField(blank=True, null=True, verbose_name="Available until")),
                ("status", models.CharField(choices=[("pending", "Pending"), ("accepted", "Accepted"), ("rejected", "Rejected"), ("withdrawn", "Withdrawn")], db_index=True, default="pending", max_length=10, verbose_name="Status")),
                ("submitted_at", models.DateTimeField(default=django.utils.timezone.now, verbose_name="Submitted at")),
                ("response_message", models.TextField(blank=True, verbose_name="Business response")),
                ("responded_at", models.DateTimeField(blank=True, null=True, verbose_name="Responded at")),
                ("creator", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="applications", to="creators.creatorprofile")),
                ("opportunity", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="applications", to="opportunities.opportunity")),
                ("role", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="applications", to="opportunities.role")),
            ],
            options={
                "verbose_name": "Application",
                "verbose_name_plural": "Applications",
                "ordering": ["-submitted_at"],
                "indexes": [
                    models.Index(fields=["creator", "status"], name="idx_app_creator_status"),
                    models.Index(fields=["opportunity", "status"], name="idx_app_opp_status"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status__in", ["pending", "accepted"])),
                        fields=("opportunity", "role", "creator"),
                        name="uniq_active_application",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ApplicationStatusChange",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("from_status", models.CharField(blank=True, max_length=10, verbose_name="From")),
                ("to_status", models.CharField(choices=[("pending", "Pending"), ("accepted", "Accepted"), ("rejected", "Rejected"), ("withdrawn", "Withdrawn")], max_length=10, verbose_name="To")),
                ("message", models.TextField(blank=True, verbose_name="Message")),
                ("application", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="status_changes", to="applications.application")),
            ],
            options={
                "verbose_name": "Status change",
                "verbose_name_plural": "Status changes",
                "ordering": ["created_at"],
            },
        ),
    ]
