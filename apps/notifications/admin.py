from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = [
        "notification_type", "user", "channel", "title",
        "delivery_status", "delivery_attempts", "created_at",
    ]
    list_filter = ["notification_type", "channel", "delivery_status"]
    search_fields = ["title", "message"]
    readonly_fields = ["created_at", "sent_at"]
