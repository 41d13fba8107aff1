"""API URL configuration."""
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

app_name = "api"

router = DefaultRouter()
router.register("opportunities", views.OpportunityViewSet)
router.register("applications", views.ApplicationViewSet, basename="application")

urlpatterns = [
    path("feed/", views.FeedView.as_view(), name="feed"),
    path("", include(router.urls)),
]

# ── Example payloads ───────────────────────────────────
#
# GET /api/feed/?mode=priority&limit=10
# Response:
# [
#   {
#     "opportunity_id": "uuid",
#     "opportunity_title": "Summer Campaign",
#     "role_title": "Lead Photographer",
#     "score": 82,
#     "is_great_match": true,
#     "is_priority_match": true,
#     "matched_tags": ["photography"],
#     "reason": "Perfect skill match (1 skills) • Same city • Priority member",
#     "distance_km": 0.0,
#     ...
#   }
# ]
#
# POST /api/applications/
# {"opportunity": "uuid", "role": "uuid", "cover_message": "...", "proposed_rate": "450.00"}
# Response 201: application; 409 {"error": "duplicate_application", ...}
#
# POST /api/applications/{uuid}/accept/  {"response_message": "Welcome aboard"}
# Response 200: application; 409 {"error": "invalid_transition", ...}
