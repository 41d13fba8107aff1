"""Celery configuration for CreatorMatch."""
import os

from celery import Celery
from celery.schedules import crontab

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.development")

app = Celery("creatormatch")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()

# ── Named queues ────────────────────────────────────────
app.conf.task_routes = {
    "apps.notifications.tasks.*": {"queue": "notifications"},
}

# ── Beat schedule (periodic tasks) ─────────────────────
app.conf.beat_schedule = {
    # Retry e-mail/webhook notifications that failed or never left
    "dispatch-pending-notifications": {
        "task": "apps.notifications.tasks.dispatch_pending_notifications",
        "schedule": crontab(minute="*/15"),
        "options": {"queue": "notifications"},
    },
}
