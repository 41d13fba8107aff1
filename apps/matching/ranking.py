"""Ranking of relevant roles: deterministic ordering and scored matching."""
from __future__ import annotations

import enum
import math
from collections.abc import Iterable, Sequence
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation

from .geo import cities_match, resolve_distance
from .relevance import RolePair
from .roles import matched_tags, roles_match
from .types import (
    GREAT_MATCH_SCORE,
    CreatorSnapshot,
    MatchResult,
    OpportunitySnapshot,
    RoleSnapshot,
)

DEFAULT_RADIUS_KM = 50.0
GOOD_MATCH_SCORE = 60

SKILL_WEIGHT = 0.60
PROXIMITY_WEIGHT = 0.25
RATE_WEIGHT = 0.15
NEUTRAL_RATE_SCORE = 70

# (max relative difference, score), checked in order.
RATE_FIT_BUCKETS = (
    (0.10, 100),
    (0.20, 85),
    (0.30, 70),
    (0.50, 50),
)
RATE_FIT_FLOOR = 30


class RankingMode(str, enum.Enum):
    DETERMINISTIC = "deterministic"
    PRIORITY = "priority"


# ---------------------------------------------------------------------------
# Deterministic ordering
# ---------------------------------------------------------------------------
def _deadline_key(deadline) -> float:
    if isinstance(deadline, date) and not isinstance(deadline, datetime):
        deadline = datetime.combine(deadline, time.max)
    if isinstance(deadline, datetime):
        try:
            return deadline.timestamp()
        except (OverflowError, OSError, ValueError):
            return math.inf
    return math.inf


def role_match_count(creator: CreatorSnapshot, opportunity: OpportunitySnapshot) -> int:
    """Number of creator tags matching any role of the opportunity."""
    titles = [r.title for r in opportunity.roles]
    tags = {t.strip().lower() for t in creator.tags if t and t.strip()}
    return sum(1 for tag in tags if any(roles_match(tag, title) for title in titles))


def deterministic_key(
    creator: CreatorSnapshot,
    opportunity: OpportunitySnapshot,
    saved_opportunity_ids: frozenset | set = frozenset(),
) -> tuple:
    """Sort key: saved, same city, role-match count, deadline, local before remote."""
    return (
        opportunity.id not in saved_opportunity_ids,
        not cities_match(creator.city, opportunity.city),
        -role_match_count(creator, opportunity),
        _deadline_key(opportunity.deadline),
        bool(opportunity.is_remote),
    )


def order_deterministic(
    creator: CreatorSnapshot,
    pairs: Iterable[RolePair],
    saved_opportunity_ids: Iterable = (),
) -> list[RolePair]:
    saved = frozenset(saved_opportunity_ids)
    keys: dict[str, tuple] = {}

    def key(pair: RolePair) -> tuple:
        opp = pair[0]
        if opp.id not in keys:
            keys[opp.id] = deterministic_key(creator, opp, saved)
        return keys[opp.id]

    return sorted(pairs, key=key)


# ---------------------------------------------------------------------------
# Scored matching
# ---------------------------------------------------------------------------
def _to_decimal(value) -> Decimal | None:
    if value is None:
        return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def skill_score(creator: CreatorSnapshot, role: RoleSnapshot) -> tuple[float, list[str]]:
    tags = [t for t in creator.tags if t and t.strip()]
    if not tags:
        return 0.0, []
    matches = matched_tags(tags, [role.title])
    return len(matches) / len(tags) * 100, matches


def proximity_score(distance: float, radius_km: float | None) -> float:
    """100 at distance 0, falling linearly to 0 at the radius; 0 beyond it."""
    radius = radius_km if radius_km and radius_km > 0 else DEFAULT_RADIUS_KM
    if distance <= 0:
        return 100.0
    if math.isinf(distance) or math.isnan(distance) or distance >= radius:
        return 0.0
    return 100.0 * (1 - distance / radius)


def rate_fit_score(preferred_rate, budget) -> float:
    rate = _to_decimal(preferred_rate)
    budget = _to_decimal(budget)
    if rate is None or rate <= 0 or budget is None or budget <= 0:
        return float(NEUTRAL_RATE_SCORE)
    difference = abs(budget - rate) / max(budget, rate)
    for limit, score in RATE_FIT_BUCKETS:
        if difference <= Decimal(str(limit)):
            return float(score)
    return float(RATE_FIT_FLOOR)


def _reason(skill: float, matched: Sequence[str], proximity: float, rate: float,
            rate_known: bool, is_priority_member: bool) -> str:
    reasons: list[str] = []
    if skill >= 80:
        reasons.append(f"Perfect skill match ({len(matched)} skills)")
    elif skill >= 60:
        reasons.append(f"Strong skill match ({len(matched)} skills)")
    elif skill >= 40:
        reasons.append(f"Good skill match ({len(matched)} skills)")

    if proximity >= 100:
        reasons.append("Same city")
    elif proximity > 0:
        reasons.append("Nearby location")

    if rate_known and rate >= 85:
        reasons.append("Perfect rate match")
    elif rate_known and rate >= 70:
        reasons.append("Compatible budget")

    if is_priority_member and reasons:
        reasons.append("Priority member")

    return " • ".join(reasons) if reasons else "Open role you can apply for"


def score_match(
    creator: CreatorSnapshot,
    opportunity: OpportunitySnapshot,
    role: RoleSnapshot,
    *,
    is_priority_member: bool = False,
    preferred_rate=None,
) -> MatchResult:
    """Score one (creator, role) pair on a 0-100 scale."""
    if preferred_rate is None:
        preferred_rate = creator.preferred_rate

    skill, matches = skill_score(creator, role)
    distance = resolve_distance(opportunity, creator)
    proximity = proximity_score(distance, creator.radius_km)
    rate = rate_fit_score(preferred_rate, role.budget)
    rate_value = _to_decimal(preferred_rate)
    budget = _to_decimal(role.budget)
    rate_known = bool(rate_value and rate_value > 0 and budget and budget > 0)

    raw = skill * SKILL_WEIGHT + proximity * PROXIMITY_WEIGHT + rate * RATE_WEIGHT
    score = int(min(100, max(0, round(raw))))

    return MatchResult(
        opportunity=opportunity,
        role=role,
        score=score,
        is_priority_match=is_priority_member and score >= GREAT_MATCH_SCORE,
        matched_tags=tuple(matches),
        reason=_reason(skill, matches, proximity, rate, rate_known, is_priority_member),
        distance_km=None if math.isinf(distance) else round(distance, 1),
    )


def rank_scored(
    creator: CreatorSnapshot,
    pairs: Iterable[RolePair],
    *,
    is_priority_member: bool = False,
    saved_opportunity_ids: Iterable = (),
    preferred_rate=None,
) -> list[MatchResult]:
    """Highest score first; priority matches win score ties, then the deterministic order."""
    ordered = order_deterministic(creator, pairs, saved_opportunity_ids)
    results = [
        score_match(
            creator, opp, role,
            is_priority_member=is_priority_member,
            preferred_rate=preferred_rate,
        )
        for opp, role in ordered
    ]
    # sorted() is stable, so the deterministic order survives full ties.
    return sorted(results, key=lambda r: (-r.score, not r.is_priority_match))


def rank_opportunities(
    creator: CreatorSnapshot,
    pairs: Iterable[RolePair],
    *,
    is_priority_member: bool = False,
    saved_opportunity_ids: Iterable = (),
    preferred_rate=None,
    mode: RankingMode | str | None = None,
) -> list[MatchResult]:
    """Rank relevant roles for display.

    Scores are computed for everyone; ``mode`` only decides the order.
    Priority members default to the scored order, others to the
    deterministic one.
    """
    if mode is None:
        mode = RankingMode.PRIORITY if is_priority_member else RankingMode.DETERMINISTIC
    mode = RankingMode(mode)
    saved = frozenset(saved_opportunity_ids)

    if mode is RankingMode.PRIORITY:
        return rank_scored(
            creator, pairs,
            is_priority_member=is_priority_member,
            saved_opportunity_ids=saved,
            preferred_rate=preferred_rate,
        )

    return [
        score_match(
            creator, opp, role,
            is_priority_member=is_priority_member,
            preferred_rate=preferred_rate,
        )
        for opp, role in order_deterministic(creator, pairs, saved)
    ]


def top_matches(
    creator: CreatorSnapshot,
    pairs: Iterable[RolePair],
    limit: int = 10,
    **kwargs,
) -> list[MatchResult]:
    return rank_opportunities(creator, pairs, **kwargs)[:limit]


def is_good_match(result: MatchResult) -> bool:
    """Worth a badge in listings."""
    return result.score >= GOOD_MATCH_SCORE
