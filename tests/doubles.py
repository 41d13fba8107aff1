"""In-memory collaborators for engine and lifecycle tests."""
from __future__ import annotations

import dataclasses
import itertools

from django.utils import timezone

from apps.core.exceptions import (
    CollaboratorUnavailableError,
    DuplicateApplicationError,
    InvalidTransitionError,
    NotFoundError,
)
from apps.matching.types import (
    ApplicationSnapshot,
    Coordinate,
    NewApplication,
    OpportunitySnapshot,
    RoleSnapshot,
)

MUNICH = Coordinate(48.1351, 11.5820)
AUGSBURG = Coordinate(48.3705, 10.8978)
BERLIN = Coordinate(52.5200, 13.4050)


def make_opportunity(opp_id="opp-1", *role_titles, **kwargs) -> OpportunitySnapshot:
    """Opportunity snapshot with one open role per title (default: Photographer)."""
    roles = kwargs.pop("roles", None)
    if roles is None:
        roles = tuple(
            RoleSnapshot(id=f"{opp_id}-role-{i}", opportunity_id=opp_id, title=title)
            for i, title in enumerate(role_titles or ("Photographer",), start=1)
        )
    kwargs.setdefault("title", f"Project {opp_id}")
    kwargs.setdefault("owner_id", 1)
    return OpportunitySnapshot(id=opp_id, roles=tuple(roles), **kwargs)


class InMemoryStore:
    """Store double with the same contract as DjangoMarketplaceStore.

    Names listed in ``failing`` raise CollaboratorUnavailableError.
    """

    def __init__(self, opportunities=(), creators=(), priority=(), saved=None, failing=()):
        self.opportunities = {o.id: o for o in opportunities}
        self.creators = {c.id: c for c in creators}
        self.priority = set(priority)
        self.saved = saved or {}
        self.failing = set(failing)
        self.applications: dict[str, ApplicationSnapshot] = {}
        self.history: list[tuple[str, str, str]] = []
        self._ids = itertools.count(1)

    def _check(self, name):
        if name in self.failing:
            raise CollaboratorUnavailableError(f"{name} unavailable")

    # -- reads -------------------------------------------------------------
    def list_opportunities(self):
        self._check("list_opportunities")
        return list(self.opportunities.values())

    def get_opportunity(self, opportunity_id):
        self._check("get_opportunity")
        try:
            return self.opportunities[str(opportunity_id)]
        except KeyError:
            raise NotFoundError(f"Opportunity {opportunity_id} not found") from None

    def get_creator(self, creator_id):
        self._check("get_creator")
        try:
            return self.creators[str(creator_id)]
        except KeyError:
            raise NotFoundError(f"Creator {creator_id} not found") from None

    def is_priority_member(self, creator_id):
        self._check("is_priority_member")
        return str(creator_id) in self.priority

    def saved_opportunity_ids(self, creator_id):
        self._check("saved_opportunity_ids")
        return set(self.saved.get(str(creator_id), ()))

    def list_applications(self, opportunity_id=None, creator_id=None, role_id=None, status_in=None):
        self._check("list_applications")
        return [
            a for a in self.applications.values()
            if (opportunity_id is None or a.opportunity_id == str(opportunity_id))
            and (creator_id is None or a.creator_id == str(creator_id))
            and (role_id is None or a.role_id == str(role_id))
            and (status_in is None or a.status in status_in)
        ]

    def get_application(self, application_id):
        try:
            return self.applications[str(application_id)]
        except KeyError:
            raise NotFoundError(f"Application {application_id} not found") from None

    # -- writes ------------------------------------------------------------
    def create_application(self, data: NewApplication):
        self._check("create_application")
        for app in self.applications.values():
            if (
                app.is_active
                and app.opportunity_id == data.opportunity_id
                and app.role_id == data.role_id
                and app.creator_id == data.creator_id
            ):
                raise DuplicateApplicationError("You have already applied for this role")

        app = ApplicationSnapshot(
            id=f"app-{next(self._ids)}",
            status="pending",
            submitted_at=timezone.now(),
            **dataclasses.asdict(data),
        )
        self.applications[app.id] = app
        self._update_role(data.opportunity_id, data.role_id, applicant_delta=1)
        self.history.append((app.id, "", "pending"))
        return app

    def update_application_status(self, application_id, status, response_message=None):
        self._check("update_application_status")
        app = self.get_application(application_id)
        if app.status != "pending":
            raise InvalidTransitionError(
                f"Application {application_id} is {app.status}, not pending",
                current_status=app.status,
            )
        if status == "accepted":
            role = self._role(app.opportunity_id, app.role_id)
            if role.filled_count >= role.capacity:
                raise InvalidTransitionError("Role has no remaining slots")
            self._update_role(app.opportunity_id, app.role_id, filled_delta=1)

        changes = {"status": status}
        if status in ("accepted", "rejected"):
            changes.update(response_message=response_message or "", responded_at=timezone.now())
        app = dataclasses.replace(app, **changes)
        self.applications[app.id] = app
        self.history.append((app.id, "pending", status))
        return app

    # -- helpers -----------------------------------------------------------
    def _role(self, opportunity_id, role_id):
        for role in self.opportunities[opportunity_id].roles:
            if role.id == role_id:
                return role
        raise NotFoundError(role_id)

    def _update_role(self, opportunity_id, role_id, applicant_delta=0, filled_delta=0):
        opp = self.opportunities[opportunity_id]
        roles = []
        for role in opp.roles:
            if role.id == role_id:
                filled = role.filled_count + filled_delta
                role = dataclasses.replace(
                    role,
                    applicant_count=role.applicant_count + applicant_delta,
                    filled_count=filled,
                    status="filled" if filled >= role.capacity else role.status,
                )
            roles.append(role)
        self.opportunities[opportunity_id] = dataclasses.replace(opp, roles=tuple(roles))


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def notify(self, user_id, message):
        self.sent.append((user_id, message))


class FailingNotifier:
    def notify(self, user_id, message):
        raise RuntimeError("notification backend down")
