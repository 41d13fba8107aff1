"""Celery tasks — notifications and new-opportunity alerts."""
import logging

from celery import shared_task
from django.conf import settings

from apps.creators.models import CreatorProfile
from apps.matching.roles import roles_match
from apps.opportunities.models import Opportunity, Role

from .models import Notification
from .notifiers import dispatch_notification

logger = logging.getLogger(__name__)


@shared_task(queue="notifications")
def create_notification(
    user_id,
    notification_type: str,
    title: str,
    message: str,
    action_link: str = "",
    channel: str = "internal",
    recipient: str = "",
    payload: dict | None = None,
):
    """Create and dispatch a notification."""
    notif = Notification.objects.create(
        user_id=user_id,
        notification_type=notification_type,
        channel=channel,
        recipient=recipient,
        title=title,
        message=message,
        action_link=action_link,
        payload=payload or {},
    )
    dispatch_notification(notif)
    return str(notif.pk)


@shared_task(queue="notifications")
def notify_matching_creators(opportunity_id: str):
    """Tell creators about a newly posted opportunity.

    Creators with a tag matching one of the open roles are notified, and so
    are creators without any tags (they see every open role anyway).
    """
    try:
        opp = Opportunity.objects.get(pk=opportunity_id)
    except Opportunity.DoesNotExist:
        logger.error("Opportunity %s not found", opportunity_id)
        return {"notified": 0}

    titles = list(
        opp.roles.filter(status=Role.Status.OPEN).values_list("title", flat=True)
    )
    if not titles:
        logger.info("Opportunity %s has no open roles, nobody to notify", opportunity_id)
        return {"notified": 0}

    roles_list = ", ".join(titles)
    notified = 0
    for creator in CreatorProfile.objects.exclude(user_id=opp.owner_id).iterator():
        tags = creator.tags if isinstance(creator.tags, list) else []
        relevant = not tags or any(
            roles_match(tag, title) for tag in tags for title in titles
        )
        if not relevant:
            continue
        create_notification.delay(
            user_id=creator.user_id,
            notification_type=Notification.Type.NEW_OPPORTUNITY,
            title="New Collaboration Opportunity",
            message=f"{opp.title} is looking for: {roles_list}",
            action_link=f"/creator/opportunities?project={opp.pk}",
        )
        notified += 1

    logger.info("Opportunity %s: notified %d creators", opportunity_id, notified)
    return {"notified": notified}


@shared_task(queue="notifications")
def dispatch_pending_notifications():
    """Retry notifications that were never delivered, up to the attempt cap."""
    pending = Notification.objects.filter(
        delivery_status__in=[
            Notification.DeliveryStatus.PENDING,
            Notification.DeliveryStatus.FAILED,
        ],
        delivery_attempts__lt=settings.NOTIFICATIONS_MAX_ATTEMPTS,
    ).exclude(
        channel=Notification.Channel.INTERNAL
    ).select_related("user")[:50]

    sent = 0
    for notif in pending:
        if dispatch_notification(notif):
            sent += 1
    logger.info("Pending notifications: %d re-dispatched", sent)
    return {"sent": sent}
