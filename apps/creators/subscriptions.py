"""Priority-member resolution.

Billing owns the plan fields; ranking only ever receives the resolved flag.
"""
from django.utils import timezone

from .models import CreatorProfile


def is_priority_member(creator: CreatorProfile, now=None) -> bool:
    if creator.plan != CreatorProfile.Plan.PLUS:
        return False
    if creator.plan_expires_at is None:
        return True
    return creator.plan_expires_at > (now or timezone.now())
