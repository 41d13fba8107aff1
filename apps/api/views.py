"""DRF viewsets: opportunities, applications and the creator feed."""
from django.db.models import Q
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.applications.lifecycle import ApplicationLifecycle, parse_availability
from apps.applications.models import Application
from apps.matching.engine import build_feed
from apps.matching.ranking import RankingMode
from apps.opportunities.models import Opportunity

from .serializers import (
    ApplicationSerializer,
    ApplicationSubmitSerializer,
    DecisionSerializer,
    MatchResultSerializer,
    OpportunitySerializer,
)

MAX_FEED_LIMIT = 100


def _creator_profile(user):
    profile = getattr(user, "creator_profile", None)
    if profile is None:
        raise PermissionDenied("A creator profile is required.")
    return profile


class OpportunityViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Opportunity.objects.prefetch_related("roles")
    serializer_class = OpportunitySerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["title", "description"]
    filterset_fields = ["city", "is_remote"]
    ordering_fields = ["created_at", "deadline"]
    ordering = ["-created_at"]

    @action(detail=True, methods=["post"])
    def notify_creators(self, request, pk=None):
        """POST /api/opportunities/{id}/notify_creators/"""
        from apps.notifications.tasks import notify_matching_creators

        opportunity = self.get_object()
        if opportunity.owner_id != request.user.pk:
            raise PermissionDenied("Only the owner can announce this opportunity.")
        notify_matching_creators.delay(str(opportunity.pk))
        return Response({"status": "enqueued"})


class ApplicationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = ApplicationSerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ["opportunity", "role", "creator", "status"]
    ordering_fields = ["submitted_at", "responded_at"]
    ordering = ["-submitted_at"]

    def get_queryset(self):
        user = self.request.user
        return (
            Application.objects.select_related("creator", "opportunity")
            .filter(Q(creator__user=user) | Q(opportunity__owner=user))
        )

    def get_lifecycle(self) -> ApplicationLifecycle:
        return ApplicationLifecycle()

    def create(self, request, *args, **kwargs):
        profile = _creator_profile(request.user)
        form = ApplicationSubmitSerializer(data=request.data)
        form.is_valid(raise_exception=True)
        data = form.validated_data

        snapshot = self.get_lifecycle().submit(
            creator_id=profile.pk,
            opportunity_id=data["opportunity"],
            role_id=data["role"],
            cover_message=data["cover_message"],
            proposed_rate=data.get("proposed_rate"),
            availability=parse_availability(
                data.get("available_from"), data.get("available_until")
            ),
        )
        application = Application.objects.get(pk=snapshot.id)
        return Response(self.get_serializer(application).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def accept(self, request, pk=None):
        """POST /api/applications/{id}/accept/ {"response_message": "..."}"""
        return self._decide(request, self.get_lifecycle().accept)

    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):
        """POST /api/applications/{id}/reject/ {"response_message": "..."}"""
        return self._decide(request, self.get_lifecycle().reject)

    @action(detail=True, methods=["post"])
    def withdraw(self, request, pk=None):
        application = self.get_object()
        if application.creator.user_id != request.user.pk:
            raise PermissionDenied("Only the applicant can withdraw an application.")
        self.get_lifecycle().withdraw(application.pk)
        application.refresh_from_db()
        return Response(self.get_serializer(application).data)

    def _decide(self, request, transition):
        application = self.get_object()
        if application.opportunity.owner_id != request.user.pk:
            raise PermissionDenied("Only the opportunity owner can respond to applications.")
        form = DecisionSerializer(data=request.data)
        form.is_valid(raise_exception=True)
        transition(application.pk, form.validated_data["response_message"] or None)
        application.refresh_from_db()
        return Response(self.get_serializer(application).data)


class FeedView(APIView):
    """GET /api/feed/?mode=priority&limit=10"""

    def get(self, request):
        profile = _creator_profile(request.user)

        mode = request.query_params.get("mode")
        if mode:
            try:
                mode = RankingMode(mode)
            except ValueError:
                raise ValidationError({"mode": f"Unknown ranking mode: {mode}"}) from None

        limit = request.query_params.get("limit")
        if limit is not None:
            try:
                limit = int(limit)
            except ValueError:
                raise ValidationError({"limit": "Must be an integer."}) from None
            if limit < 1:
                raise ValidationError({"limit": "Must be positive."})
            limit = min(limit, MAX_FEED_LIMIT)

        results = build_feed(profile.pk, mode=mode, limit=limit)
        return Response(MatchResultSerializer(results, many=True).data)
