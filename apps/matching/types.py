"""Read-only snapshots the matching engine works on.

Every matching and ranking function takes these dataclasses instead of ORM
rows, so the engine stays a pure function of its inputs. The store in
``apps.applications.store`` builds them from the database.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from apps.core.utils import normalize_text

ROLE_OPEN = "open"
ACTIVE_APPLICATION_STATUSES = frozenset({"pending", "accepted"})
GREAT_MATCH_SCORE = 70


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class RoleSnapshot:
    id: str
    opportunity_id: str
    title: str
    budget: Decimal | None = None
    status: str = ROLE_OPEN
    applicant_count: int = 0
    capacity: int = 1
    filled_count: int = 0

    @property
    def is_open(self) -> bool:
        return self.status == ROLE_OPEN


@dataclass(frozen=True)
class OpportunitySnapshot:
    id: str
    title: str
    owner_id: int | str | None = None
    description: str = ""
    city: str = ""
    is_remote: bool = False
    deadline: datetime | None = None
    created_at: datetime | None = None
    coordinate: Coordinate | None = None
    roles: tuple[RoleSnapshot, ...] = ()


@dataclass(frozen=True)
class CreatorSnapshot:
    id: str
    user_id: int | str | None = None
    display_name: str = ""
    tags: tuple[str, ...] = ()
    city: str = ""
    radius_km: float | None = None
    coordinate: Coordinate | None = None
    preferred_rate: Decimal | None = None


@dataclass(frozen=True)
class Availability:
    start: date
    end: date | None = None


@dataclass(frozen=True)
class ApplicationSnapshot:
    id: str
    opportunity_id: str
    role_id: str | None
    role_title: str
    creator_id: str
    status: str
    cover_message: str = ""
    proposed_rate: Decimal | None = None
    available_from: date | None = None
    available_until: date | None = None
    submitted_at: datetime | None = None
    response_message: str = ""
    responded_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_APPLICATION_STATUSES

    def targets(self, opportunity_id: str, role: RoleSnapshot) -> bool:
        """True when this application was made for ``role`` of ``opportunity_id``.

        Falls back to the denormalized role title when no role id was stored.
        """
        if self.opportunity_id != opportunity_id:
            return False
        if self.role_id:
            return self.role_id == role.id
        return normalize_text(self.role_title) == normalize_text(role.title)


@dataclass(frozen=True)
class NewApplication:
    opportunity_id: str
    role_id: str
    role_title: str
    creator_id: str
    cover_message: str = ""
    proposed_rate: Decimal | None = None
    available_from: date | None = None
    available_until: date | None = None


@dataclass(frozen=True)
class MatchResult:
    """A ranked (opportunity, role) pair for one creator. Never persisted."""

    opportunity: OpportunitySnapshot
    role: RoleSnapshot
    score: int
    is_priority_match: bool = False
    matched_tags: tuple[str, ...] = field(default_factory=tuple)
    reason: str = ""
    distance_km: float | None = None

    @property
    def is_great_match(self) -> bool:
        return self.score >= GREAT_MATCH_SCORE
