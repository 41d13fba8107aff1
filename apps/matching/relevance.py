"""Which open roles a creator gets to see."""
from __future__ import annotations

from collections.abc import Iterable

from .roles import roles_match
from .types import ApplicationSnapshot, CreatorSnapshot, OpportunitySnapshot, RoleSnapshot

RolePair = tuple[OpportunitySnapshot, RoleSnapshot]


def relevant_roles(
    creator: CreatorSnapshot,
    opportunities: Iterable[OpportunitySnapshot],
    applications: Iterable[ApplicationSnapshot] = (),
) -> list[RolePair]:
    """Return the (opportunity, role) pairs visible to ``creator``.

    Only OPEN roles qualify. Creators without tags see every open role;
    otherwise a role needs at least one tag that matches its title. Roles the
    creator already holds a pending or accepted application for are hidden.
    """
    tags = [t for t in creator.tags if t and t.strip()]
    active = [a for a in applications if a.is_active and a.creator_id == creator.id]

    pairs: list[RolePair] = []
    for opp in opportunities:
        for role in opp.roles:
            if not role.is_open:
                continue
            if tags and not any(roles_match(tag, role.title) for tag in tags):
                continue
            if any(app.targets(opp.id, role) for app in active):
                continue
            pairs.append((opp, role))
    return pairs
