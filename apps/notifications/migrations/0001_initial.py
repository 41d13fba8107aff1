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
            name="Notification",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("notification_type", models.CharField(choices=[("project_application", "New application"), ("project_accepted", "Application accepted"), ("project_rejected", "Application rejected"), ("new_opportunity", "New opportunity")], db_index=True, max_length=30, verbose_name="Type")),
                ("channel", models.CharField(choices=[("email", "E-mail"), ("webhook", "Webhook"), ("internal", "In-app")], default="internal", max_length=20, verbose_name="Channel")),
                ("recipient", models.CharField(blank=True, max_length=300, verbose_name="Recipient")),
                ("title", models.CharField(max_length=300, verbose_name="Title")),
                ("message", models.TextField(verbose_name="Message")),
                ("action_link", models.CharField(blank=True, max_length=500, verbose_name="Action link")),
                ("payload", models.JSONField(blank=True, default=dict, verbose_name="Extra payload")),
                ("delivery_status", models.CharField(choices=[("pending", "Pending"), ("sent", "Sent"), ("failed", "Failed")], default="pending", max_length=20, verbose_name="Delivery status")),
                ("sent_at", models.DateTimeField(blank=True, null=True, verbose_name="Sent at")),
                ("error_message", models.TextField(blank=True, verbose_name="Error")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Notification",
                "verbose_name_plural": "Notifications",
                "ordering": ["-created_at"],
            },
        ),
    ]
