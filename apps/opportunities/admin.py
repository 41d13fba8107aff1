from django.contrib import admin

from .models import Opportunity, Role


class RoleInline(admin.TabularInline):
    model = Role
    extra = 0
    fields = ["title", "budget", "status", "capacity", "filled_count", "applicant_count"]
    readonly_fields = ["applicant_count"]


@admin.register(Opportunity)
class OpportunityAdmin(admin.ModelAdmin):
    list_display = ["title_short", "owner", "city", "is_remote", "deadline", "created_at"]
    list_filter = ["is_remote", "city"]
    search_fields = ["title", "description", "city"]
    inlines = [RoleInline]
    date_hierarchy = "created_at"

    @admin.display(description="Title")
    def title_short(self, obj):
        return obj.title[:100] + "..." if len(obj.title) > 100 else obj.title


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ["title", "opportunity", "status", "filled_count", "capacity", "applicant_count"]
    list_filter = ["status"]
    search_fields = ["title", "opportunity__title"]
