from django.contrib import admin

from .models import Application, ApplicationStatusChange


class StatusChangeInline(admin.TabularInline):
    model = ApplicationStatusChange
    extra = 0
    fields = ["from_status", "to_status", "message", "created_at"]
    readonly_fields = fields
    can_delete = False


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    list_display = ["creator", "role_title", "opportunity", "status", "submitted_at", "responded_at"]
    list_filter = ["status"]
    search_fields = ["role_title", "creator__display_name", "opportunity__title"]
    # Status only moves through the lifecycle, never by hand.
    readonly_fields = ["status", "submitted_at", "responded_at"]
    inlines = [StatusChangeInline]
