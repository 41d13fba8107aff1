"""Application lifecycle: submit, accept, reject, withdraw.

States: PENDING -> ACCEPTED | REJECTED | WITHDRAWN. Only PENDING has
outgoing transitions. A retried call on an already-transitioned application
raises InvalidTransitionError, which callers treat as a no-op.

Notifications are advisory. They are sent after the write succeeded and a
failure is logged, never raised and never rolled back against the record.
"""
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from django.utils import timezone

from apps.core.exceptions import DuplicateApplicationError, NotFoundError
from apps.core.utils import truncate
from apps.matching.types import (
    ACTIVE_APPLICATION_STATUSES,
    ApplicationSnapshot,
    Availability,
    NewApplication,
    OpportunitySnapshot,
    RoleSnapshot,
)
from apps.notifications.models import Notification
from apps.notifications.notifiers import CeleryNotifier, NotificationMessage, Notifier

from .models import Application
from .store import DjangoMarketplaceStore

logger = logging.getLogger(__name__)


class ApplicationLifecycle:
    def __init__(self, store=None, notifier: Notifier | None = None):
        self.store = store or DjangoMarketplaceStore()
        self.notifier = notifier or CeleryNotifier()

    # -- queries -----------------------------------------------------------
    def active_application_for(
        self, creator_id, opportunity_id, role: RoleSnapshot
    ) -> ApplicationSnapshot | None:
        existing = self.store.list_applications(
            opportunity_id=opportunity_id,
            creator_id=creator_id,
            status_in=ACTIVE_APPLICATION_STATUSES,
        )
        for app in existing:
            if app.is_active and app.targets(str(opportunity_id), role):
                return app
        return None

    def has_active_application(self, creator_id, opportunity_id, role_id) -> bool:
        opportunity = self.store.get_opportunity(opportunity_id)
        role = _find_role(opportunity, role_id)
        return self.active_application_for(creator_id, opportunity.id, role) is not None

    # -- transitions -------------------------------------------------------
    def submit(
        self,
        creator_id,
        opportunity_id,
        role_id,
        cover_message: str = "",
        proposed_rate: Decimal | None = None,
        availability: Availability | None = None,
    ) -> ApplicationSnapshot:
        creator = self.store.get_creator(creator_id)
        opportunity = self.store.get_opportunity(opportunity_id)
        role = _find_role(opportunity, role_id)

        if self.active_application_for(creator.id, opportunity.id, role) is not None:
            raise DuplicateApplicationError(
                "You have already applied for this role",
                opportunity_id=opportunity.id,
                role_id=role.id,
                creator_id=creator.id,
            )

        availability = availability or Availability(start=timezone.localdate())
        application = self.store.create_application(NewApplication(
            opportunity_id=opportunity.id,
            role_id=role.id,
            role_title=role.title,
            creator_id=creator.id,
            cover_message=cover_message or "",
            proposed_rate=proposed_rate,
            available_from=availability.start,
            available_until=availability.end,
        ))
        logger.info(
            "Application %s submitted: creator=%s role=%s (%s)",
            application.id, creator.id, role.id, opportunity.title[:50],
        )

        self._notify(opportunity.owner_id, NotificationMessage(
            type=Notification.Type.PROJECT_APPLICATION,
            title="New Project Application",
            message=(
                f"{creator.display_name or 'A creator'} applied for {role.title} "
                f"in {opportunity.title}"
            ),
            action_link=f"/projects/{opportunity.id}?tab=applications",
        ))
        return application

    def accept(self, application_id, response_message: str | None = None) -> ApplicationSnapshot:
        application = self.store.update_application_status(
            application_id, Application.Status.ACCEPTED, response_message
        )
        self._notify_creator(application, lambda opp: NotificationMessage(
            type=Notification.Type.PROJECT_ACCEPTED,
            title="Application Accepted!",
            message=(
                f"Congratulations! Your application for {application.role_title} "
                f"in {opp.title} has been accepted."
            ),
            action_link=f"/projects/{opp.id}",
        ))
        return application

    def reject(self, application_id, response_message: str | None = None) -> ApplicationSnapshot:
        application = self.store.update_application_status(
            application_id, Application.Status.REJECTED, response_message
        )
        follow_up = response_message or "Keep exploring other opportunities!"
        self._notify_creator(application, lambda opp: NotificationMessage(
            type=Notification.Type.PROJECT_REJECTED,
            title="Application Update",
            message=truncate(
                f"Your application for {application.role_title} in {opp.title} "
                f"was not selected. {follow_up}",
                1000,
            ),
            action_link="/creator/opportunities",
        ))
        return application

    def withdraw(self, application_id) -> ApplicationSnapshot:
        application = self.store.update_application_status(
            application_id, Application.Status.WITHDRAWN
        )
        logger.info("Application %s withdrawn", application.id)
        return application

    # -- side effects ------------------------------------------------------
    def _notify(self, user_id, message: NotificationMessage) -> None:
        if user_id is None:
            logger.warning("No recipient for %s notification", message.type)
            return
        try:
            self.notifier.notify(user_id, message)
        except Exception:
            logger.exception("Failed to send %s notification to user %s", message.type, user_id)

    def _notify_creator(self, application: ApplicationSnapshot, build) -> None:
        try:
            creator = self.store.get_creator(application.creator_id)
            opportunity = self.store.get_opportunity(application.opportunity_id)
            message = build(opportunity)
        except Exception:
            logger.exception("Could not prepare notification for application %s", application.id)
            return
        self._notify(creator.user_id, message)


def _find_role(opportunity: OpportunitySnapshot, role_id) -> RoleSnapshot:
    for role in opportunity.roles:
        if role.id == str(role_id):
            return role
    raise NotFoundError(f"Role {role_id} not found in opportunity {opportunity.id}")


def parse_availability(start: date | None, end: date | None = None) -> Availability | None:
    if start is None:
        return None
    return Availability(start=start, end=end)
