"""Shared fixtures for tests."""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from apps.creators.models import CreatorProfile
from apps.matching.types import CreatorSnapshot, RoleSnapshot
from apps.opportunities.models import Opportunity, Role

from .doubles import MUNICH, InMemoryStore, RecordingNotifier, make_opportunity


# ── Snapshots (no database) ────────────────────────────
@pytest.fixture
def photographer():
    return CreatorSnapshot(
        id="creator-1",
        user_id=10,
        display_name="Lena",
        tags=("photographer",),
        city="Munich",
        coordinate=MUNICH,
    )


@pytest.fixture
def shoot():
    """München photo shoot with a single open photographer role."""
    return make_opportunity(
        "shoot",
        roles=(
            RoleSnapshot(
                id="shoot-photo", opportunity_id="shoot",
                title="Lead Photographer", budget=Decimal("500"), capacity=1,
            ),
        ),
        title="Summer Campaign",
        city="München",
        coordinate=MUNICH,
    )


@pytest.fixture
def store(photographer, shoot):
    return InMemoryStore(opportunities=[shoot], creators=[photographer])


@pytest.fixture
def notifier():
    return RecordingNotifier()


# ── Database rows ──────────────────────────────────────
@pytest.fixture
def business_user(db, django_user_model):
    return django_user_model.objects.create_user(
        username="brand", password="testpass123", email="brand@example.com"
    )


@pytest.fixture
def creator_user(db, django_user_model):
    return django_user_model.objects.create_user(
        username="lena", password="testpass123", email="lena@example.com"
    )


@pytest.fixture
def creator_profile(creator_user):
    return CreatorProfile.objects.create(
        user=creator_user,
        display_name="Lena",
        tags=["photographer"],
        city="Munich",
        latitude=MUNICH.latitude,
        longitude=MUNICH.longitude,
        preferred_rate=Decimal("500.00"),
    )


@pytest.fixture
def opportunity(business_user):
    return Opportunity.objects.create(
        owner=business_user,
        title="Summer Campaign",
        description="Outdoor shoot for the new collection",
        city="München",
        latitude=MUNICH.latitude,
        longitude=MUNICH.longitude,
        deadline=timezone.now() + timedelta(days=14),
    )


@pytest.fixture
def photo_role(opportunity):
    return Role.objects.create(
        opportunity=opportunity, title="Lead Photographer", budget=Decimal("500.00")
    )


@pytest.fixture
def video_role(opportunity):
    return Role.objects.create(
        opportunity=opportunity, title="Videographer", budget=Decimal("800.00")
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def creator_client(api_client, creator_profile):
    api_client.force_authenticate(user=creator_profile.user)
    return api_client


@pytest.fixture
def business_client(business_user):
    client = APIClient()
    client.force_authenticate(user=business_user)
    return client
