"""ORM store: snapshots, constraints, compare-and-set transitions."""
from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import OperationalError
from django.utils import timezone

from apps.applications.models import Application, ApplicationStatusChange
from apps.applications.store import DjangoMarketplaceStore
from apps.core.exceptions import (
    CollaboratorUnavailableError,
    DuplicateApplicationError,
    InvalidTransitionError,
    NotFoundError,
)
from apps.creators.models import CreatorProfile, SavedOpportunity
from apps.creators.subscriptions import is_priority_member
from apps.matching.types import NewApplication
from apps.opportunities.models import Role


@pytest.fixture
def db_store():
    return DjangoMarketplaceStore()


def _new_application(role, creator):
    return NewApplication(
        opportunity_id=str(role.opportunity_id),
        role_id=str(role.pk),
        role_title=role.title,
        creator_id=str(creator.pk),
        cover_message="Hi!",
        proposed_rate=Decimal("450.00"),
    )


@pytest.mark.django_db
class TestSnapshots:
    def test_opportunity_snapshot(self, db_store, opportunity, photo_role, video_role):
        snap = db_store.get_opportunity(opportunity.pk)

        assert snap.id == str(opportunity.pk)
        assert snap.owner_id == opportunity.owner_id
        assert snap.city == "München"
        assert snap.coordinate.latitude == pytest.approx(48.1351)
        assert {r.title for r in snap.roles} == {"Lead Photographer", "Videographer"}
        assert all(r.opportunity_id == snap.id for r in snap.roles)

    def test_creator_snapshot(self, db_store, creator_profile):
        snap = db_store.get_creator(creator_profile.pk)

        assert snap.tags == ("photographer",)
        assert snap.user_id == creator_profile.user_id
        assert snap.preferred_rate == Decimal("500.00")

    def test_missing_rows(self, db_store):
        with pytest.raises(NotFoundError):
            db_store.get_opportunity("00000000-0000-0000-0000-000000000000")
        with pytest.raises(NotFoundError):
            db_store.get_creator("not-a-uuid")
        with pytest.raises(NotFoundError):
            db_store.get_application("not-a-uuid")

    def test_saved_opportunity_ids(self, db_store, creator_profile, opportunity):
        SavedOpportunity.objects.create(creator=creator_profile, opportunity=opportunity)
        assert db_store.saved_opportunity_ids(creator_profile.pk) == {str(opportunity.pk)}


@pytest.mark.django_db
class TestPriorityMember:
    def test_free_plan(self, creator_profile):
        assert not is_priority_member(creator_profile)

    def test_plus_plan(self, creator_profile):
        creator_profile.plan = CreatorProfile.Plan.PLUS
        assert is_priority_member(creator_profile)

        creator_profile.plan_expires_at = timezone.now() - timedelta(days=1)
        assert not is_priority_member(creator_profile)

        creator_profile.plan_expires_at = timezone.now() + timedelta(days=1)
        assert is_priority_member(creator_profile)


@pytest.mark.django_db
class TestCreateApplication:
    def test_creates_row_counter_and_audit(self, db_store, photo_role, creator_profile):
        snap = db_store.create_application(_new_application(photo_role, creator_profile))

        app = Application.objects.get(pk=snap.id)
        assert app.status == Application.Status.PENDING
        assert app.proposed_rate == Decimal("450.00")
        photo_role.refresh_from_db()
        assert photo_role.applicant_count == 1
        change = app.status_changes.get()
        assert (change.from_status, change.to_status) == ("", "pending")

    def test_database_rejects_second_active_application(self, db_store, photo_role, creator_profile):
        db_store.create_application(_new_application(photo_role, creator_profile))
        with pytest.raises(DuplicateApplicationError):
            db_store.create_application(_new_application(photo_role, creator_profile))

        assert Application.objects.count() == 1
        photo_role.refresh_from_db()
        assert photo_role.applicant_count == 1

    def test_closed_application_frees_the_slot(self, db_store, photo_role, creator_profile):
        first = db_store.create_application(_new_application(photo_role, creator_profile))
        db_store.update_application_status(first.id, Application.Status.WITHDRAWN)

        second = db_store.create_application(_new_application(photo_role, creator_profile))
        assert second.id != first.id


@pytest.mark.django_db
class TestUpdateStatus:
    def test_accept_claims_slot_and_fills_role(self, db_store, photo_role, creator_profile):
        app = db_store.create_application(_new_application(photo_role, creator_profile))
        accepted = db_store.update_application_status(app.id, "accepted", "See you Monday")

        assert accepted.status == "accepted"
        assert accepted.response_message == "See you Monday"
        assert accepted.responded_at is not None
        photo_role.refresh_from_db()
        assert photo_role.filled_count == 1
        assert photo_role.status == Role.Status.FILLED
        assert set(
            ApplicationStatusChange.objects.filter(application_id=app.id)
            .values_list("from_status", "to_status")
        ) == {("", "pending"), ("pending", "accepted")}

    def test_second_transition_is_rejected(self, db_store, photo_role, creator_profile):
        app = db_store.create_application(_new_application(photo_role, creator_profile))
        db_store.update_application_status(app.id, "rejected")

        with pytest.raises(InvalidTransitionError) as exc_info:
            db_store.update_application_status(app.id, "accepted")
        assert exc_info.value.context["current_status"] == "rejected"
        assert Application.objects.get(pk=app.id).status == "rejected"

    def test_full_role_rolls_back_accept(
        self, db_store, photo_role, creator_profile, django_user_model
    ):
        other = CreatorProfile.objects.create(
            user=django_user_model.objects.create_user(username="max", password="x"),
            display_name="Max",
            tags=["photography"],
        )
        first = db_store.create_application(_new_application(photo_role, creator_profile))
        second = db_store.create_application(_new_application(photo_role, other))
        db_store.update_application_status(first.id, "accepted")

        with pytest.raises(InvalidTransitionError):
            db_store.update_application_status(second.id, "accepted")

        assert Application.objects.get(pk=second.id).status == "pending"
        assert not ApplicationStatusChange.objects.filter(
            application_id=second.id, to_status="accepted"
        ).exists()
        photo_role.refresh_from_db()
        assert photo_role.filled_count == 1

    def test_rejecting_when_full_is_allowed(self, db_store, photo_role, creator_profile):
        photo_role.filled_count = 1
        photo_role.save()
        app = db_store.create_application(_new_application(photo_role, creator_profile))

        assert db_store.update_application_status(app.id, "rejected").status == "rejected"


class TestDatabaseOutage:
    def test_maps_database_errors(self):
        with patch("apps.applications.store.Opportunity") as opportunity_model:
            opportunity_model.objects.prefetch_related.side_effect = OperationalError("down")
            with pytest.raises(CollaboratorUnavailableError):
                DjangoMarketplaceStore().list_opportunities()
