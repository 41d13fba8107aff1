"""DRF serializers."""
from rest_framework import serializers

from apps.applications.models import Application
from apps.opportunities.models import Opportunity, Role


class RoleSerializer(serializers.ModelSerializer):
    class Meta:
        model = Role
        fields = [
            "id", "title", "description", "budget", "status",
            "applicant_count", "capacity", "filled_count",
        ]


class OpportunitySerializer(serializers.ModelSerializer):
    roles = RoleSerializer(many=True, read_only=True)

    class Meta:
        model = Opportunity
        fields = [
            "id", "owner", "title", "description", "city", "is_remote",
            "latitude", "longitude", "deadline", "roles", "created_at",
        ]


class ApplicationSerializer(serializers.ModelSerializer):
    creator_name = serializers.CharField(source="creator.display_name", read_only=True)

    class Meta:
        model = Application
        fields = [
            "id", "opportunity", "role", "role_title", "creator", "creator_name",
            "cover_message", "proposed_rate", "available_from", "available_until",
            "status", "submitted_at", "response_message", "responded_at",
        ]
        read_only_fields = fields


class ApplicationSubmitSerializer(serializers.Serializer):
    opportunity = serializers.UUIDField()
    role = serializers.UUIDField()
    cover_message = serializers.CharField(required=False, allow_blank=True, default="")
    proposed_rate = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True, min_value=0
    )
    available_from = serializers.DateField(required=False, allow_null=True)
    available_until = serializers.DateField(required=False, allow_null=True)

    def validate(self, attrs):
        start, end = attrs.get("available_from"), attrs.get("available_until")
        if end and not start:
            raise serializers.ValidationError({"available_from": "Required when available_until is set."})
        if start and end and end < start:
            raise serializers.ValidationError({"available_until": "Must not be before available_from."})
        return attrs


class DecisionSerializer(serializers.Serializer):
    response_message = serializers.CharField(required=False, allow_blank=True, default="")


class MatchResultSerializer(serializers.Serializer):
    """Read-only view of a ranked feed entry."""

    opportunity_id = serializers.CharField(source="opportunity.id")
    opportunity_title = serializers.CharField(source="opportunity.title")
    city = serializers.CharField(source="opportunity.city")
    is_remote = serializers.BooleanField(source="opportunity.is_remote")
    deadline = serializers.DateTimeField(source="opportunity.deadline", allow_null=True)
    role_id = serializers.CharField(source="role.id")
    role_title = serializers.CharField(source="role.title")
    budget = serializers.DecimalField(
        source="role.budget", max_digits=12, decimal_places=2, allow_null=True
    )
    score = serializers.IntegerField()
    is_great_match = serializers.BooleanField()
    is_priority_match = serializers.BooleanField()
    matched_tags = serializers.ListField(child=serializers.CharField())
    reason = serializers.CharField()
    distance_km = serializers.FloatField(allow_null=True)
