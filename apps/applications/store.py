"""ORM-backed persistence for the matching and application engines.

The engines only see snapshots (``apps.matching.types``); this module is the
one place that turns rows into snapshots and snapshots into writes.
"""
from __future__ import annotations

import functools
import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from apps.core.exceptions import (
    CollaboratorUnavailableError,
    DuplicateApplicationError,
    InvalidTransitionError,
    NotFoundError,
)
from apps.creators.models import CreatorProfile, SavedOpportunity
from apps.creators.subscriptions import is_priority_member
from apps.matching.types import (
    ApplicationSnapshot,
    Coordinate,
    CreatorSnapshot,
    NewApplication,
    OpportunitySnapshot,
    RoleSnapshot,
)
from apps.opportunities.models import Opportunity, Role

from .models import Application, ApplicationStatusChange

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Row -> snapshot
# ---------------------------------------------------------------------------
def _coordinate(obj) -> Coordinate | None:
    if obj.latitude is None or obj.longitude is None:
        return None
    return Coordinate(latitude=obj.latitude, longitude=obj.longitude)


def role_snapshot(role: Role) -> RoleSnapshot:
    return RoleSnapshot(
        id=str(role.pk),
        opportunity_id=str(role.opportunity_id),
        title=role.title,
        budget=role.budget,
        status=role.status,
        applicant_count=role.applicant_count,
        capacity=role.capacity,
        filled_count=role.filled_count,
    )


def opportunity_snapshot(opp: Opportunity) -> OpportunitySnapshot:
    return OpportunitySnapshot(
        id=str(opp.pk),
        owner_id=opp.owner_id,
        title=opp.title,
        description=opp.description,
        city=opp.city,
        is_remote=opp.is_remote,
        deadline=opp.deadline,
        created_at=opp.created_at,
        coordinate=_coordinate(opp),
        roles=tuple(role_snapshot(r) for r in opp.roles.all()),
    )


def creator_snapshot(profile: CreatorProfile) -> CreatorSnapshot:
    tags = profile.tags if isinstance(profile.tags, list) else []
    return CreatorSnapshot(
        id=str(profile.pk),
        user_id=profile.user_id,
        display_name=profile.display_name,
        tags=tuple(str(t) for t in tags if t),
        city=profile.city,
        radius_km=profile.radius_km,
        coordinate=_coordinate(profile),
        preferred_rate=profile.preferred_rate,
    )


def application_snapshot(app: Application) -> ApplicationSnapshot:
    return ApplicationSnapshot(
        id=str(app.pk),
        opportunity_id=str(app.opportunity_id),
        role_id=str(app.role_id) if app.role_id else None,
        role_title=app.role_title,
        creator_id=str(app.creator_id),
        status=app.status,
        cover_message=app.cover_message,
        proposed_rate=app.proposed_rate,
        available_from=app.available_from,
        available_until=app.available_until,
        submitted_at=app.submitted_at,
        response_message=app.response_message,
        responded_at=app.responded_at,
    )


def _database_call(func):
    """Surface database outages as CollaboratorUnavailableError."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as exc:
            logger.exception("Store call %s failed", func.__name__)
            raise CollaboratorUnavailableError(f"Database unavailable: {exc}") from exc

    return wrapper


class DjangoMarketplaceStore:
    """Persistence collaborator backed by the Django ORM."""

    # -- reads -------------------------------------------------------------
    @_database_call
    def list_opportunities(self) -> list[OpportunitySnapshot]:
        qs = Opportunity.objects.prefetch_related("roles").order_by("-created_at")
        return [opportunity_snapshot(o) for o in qs]

    @_database_call
    def get_opportunity(self, opportunity_id) -> OpportunitySnapshot:
        try:
            opp = Opportunity.objects.prefetch_related("roles").get(pk=opportunity_id)
        except (Opportunity.DoesNotExist, ValidationError):
            raise NotFoundError(f"Opportunity {opportunity_id} not found") from None
        return opportunity_snapshot(opp)

    @_database_call
    def get_creator(self, creator_id) -> CreatorSnapshot:
        return creator_snapshot(self._get_profile(creator_id))

    @_database_call
    def is_priority_member(self, creator_id) -> bool:
        return is_priority_member(self._get_profile(creator_id))

    @_database_call
    def saved_opportunity_ids(self, creator_id) -> set[str]:
        ids = SavedOpportunity.objects.filter(creator_id=creator_id).values_list(
            "opportunity_id", flat=True
        )
        return {str(i) for i in ids}

    @_database_call
    def list_applications(
        self,
        opportunity_id=None,
        creator_id=None,
        role_id=None,
        status_in=None,
    ) -> list[ApplicationSnapshot]:
        qs = Application.objects.all()
        if opportunity_id is not None:
            qs = qs.filter(opportunity_id=opportunity_id)
        if creator_id is not None:
            qs = qs.filter(creator_id=creator_id)
        if role_id is not None:
            qs = qs.filter(role_id=role_id)
        if status_in is not None:
            qs = qs.filter(status__in=list(status_in))
        return [application_snapshot(a) for a in qs]

    @_database_call
    def get_application(self, application_id) -> ApplicationSnapshot:
        return application_snapshot(self._get_application(application_id))

    # -- writes ------------------------------------------------------------
    @_database_call
    def create_application(self, data: NewApplication) -> ApplicationSnapshot:
        try:
            with transaction.atomic():
                app = Application.objects.create(
                    opportunity_id=data.opportunity_id,
                    role_id=data.role_id,
                    role_title=data.role_title,
                    creator_id=data.creator_id,
                    cover_message=data.cover_message,
                    proposed_rate=data.proposed_rate,
                    available_from=data.available_from,
                    available_until=data.available_until,
                    status=Application.Status.PENDING,
                )
                Role.objects.filter(pk=data.role_id).update(
                    applicant_count=F("applicant_count") + 1,
                    updated_at=timezone.now(),
                )
                ApplicationStatusChange.objects.create(
                    application=app, from_status="", to_status=Application.Status.PENDING
                )
        except IntegrityError:
            # The conditional unique constraint caught a concurrent submission.
            raise DuplicateApplicationError(
                "You have already applied for this role",
                opportunity_id=data.opportunity_id,
                role_id=data.role_id,
                creator_id=data.creator_id,
            ) from None
        return application_snapshot(app)

    @_database_call
    def update_application_status(
        self, application_id, status: str, response_message: str | None = None
    ) -> ApplicationSnapshot:
        """Move a PENDING application to ``status``.

        The update is a compare-and-set on PENDING; accepting also claims a
        role slot in the same transaction.
        """
        now = timezone.now()
        changes = {"status": status, "updated_at": now}
        if status in (Application.Status.ACCEPTED, Application.Status.REJECTED):
            changes["response_message"] = response_message or ""
            changes["responded_at"] = now

        with transaction.atomic():
            try:
                updated = Application.objects.filter(
                    pk=application_id, status=Application.Status.PENDING
                ).update(**changes)
            except ValidationError:
                raise NotFoundError(f"Application {application_id} not found") from None

            app = self._get_application(application_id)
            if not updated:
                raise InvalidTransitionError(
                    f"Application {application_id} is {app.status}, not pending",
                    application_id=str(application_id),
                    current_status=app.status,
                    requested_status=status,
                )

            if status == Application.Status.ACCEPTED:
                self._claim_role_slot(app.role_id, now)

            ApplicationStatusChange.objects.create(
                application=app,
                from_status=Application.Status.PENDING,
                to_status=status,
                message=response_message or "",
            )

        logger.info("Application %s: pending -> %s", application_id, status)
        return application_snapshot(app)

    # -- helpers -----------------------------------------------------------
    def _get_profile(self, creator_id) -> CreatorProfile:
        try:
            return CreatorProfile.objects.get(pk=creator_id)
        except (CreatorProfile.DoesNotExist, ValidationError):
            raise NotFoundError(f"Creator {creator_id} not found") from None

    def _get_application(self, application_id) -> Application:
        try:
            return Application.objects.get(pk=application_id)
        except (Application.DoesNotExist, ValidationError):
            raise NotFoundError(f"Application {application_id} not found") from None

    def _claim_role_slot(self, role_id, now) -> None:
        claimed = Role.objects.filter(
            pk=role_id, filled_count__lt=F("capacity")
        ).update(filled_count=F("filled_count") + 1, updated_at=now)
        if not claimed:
            raise InvalidTransitionError(
                "Role has no remaining slots", role_id=str(role_id)
            )
        Role.objects.filter(pk=role_id, filled_count__gte=F("capacity")).update(
            status=Role.Status.FILLED, updated_at=now
        )
