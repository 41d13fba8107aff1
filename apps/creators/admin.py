from django.contrib import admin

from .models import CreatorProfile, SavedOpportunity


@admin.register(CreatorProfile)
class CreatorProfileAdmin(admin.ModelAdmin):
    list_display = ["display_name", "user", "city", "radius_km", "plan", "plan_expires_at"]
    list_filter = ["plan"]
    search_fields = ["display_name", "city", "user__email"]


@admin.register(SavedOpportunity)
class SavedOpportunityAdmin(admin.ModelAdmin):
    list_display = ["creator", "opportunity", "created_at"]
