"""Creator feed — relevance filter plus ranking over the current store state."""
import logging

from apps.core.exceptions import CollaboratorUnavailableError
from apps.core.utils import truncate

from .ranking import RankingMode, rank_opportunities
from .relevance import relevant_roles
from .types import ACTIVE_APPLICATION_STATUSES, MatchResult

logger = logging.getLogger(__name__)


def _default_store():
    from apps.applications.store import DjangoMarketplaceStore

    return DjangoMarketplaceStore()


def build_feed(
    creator_id,
    *,
    store=None,
    mode: RankingMode | str | None = None,
    limit: int | None = None,
) -> list[MatchResult]:
    """Ranked open roles for a creator.

    An unknown creator raises NotFoundError. If the store is unavailable the
    feed is empty rather than an error, so the page still renders.
    """
    store = store or _default_store()

    try:
        creator = store.get_creator(creator_id)
        is_priority = store.is_priority_member(creator.id)
        opportunities = store.list_opportunities()
        applications = store.list_applications(
            creator_id=creator.id, status_in=ACTIVE_APPLICATION_STATUSES
        )
        saved_ids = store.saved_opportunity_ids(creator.id)
    except CollaboratorUnavailableError:
        logger.exception("Feed for creator %s degraded to empty", creator_id)
        return []

    pairs = relevant_roles(creator, opportunities, applications)
    results = rank_opportunities(
        creator,
        pairs,
        is_priority_member=is_priority,
        saved_opportunity_ids=saved_ids,
        mode=mode,
    )
    if limit is not None:
        results = results[:limit]

    logger.info(
        "Feed for %s: %d relevant roles, top score=%s (priority=%s)",
        truncate(creator.display_name or creator.id, 60),
        len(pairs),
        results[0].score if results else None,
        is_priority,
    )
    return results
