"""Feed assembly over the store."""
from decimal import Decimal

import pytest

from apps.core.exceptions import NotFoundError
from apps.matching.engine import build_feed
from apps.matching.ranking import RankingMode
from apps.matching.types import ApplicationSnapshot, CreatorSnapshot

from .doubles import InMemoryStore, make_opportunity


@pytest.fixture
def feed_store(photographer, shoot):
    remote = make_opportunity("remote", "Photographer", is_remote=True)
    casting = make_opportunity("casting", "Model", city="Munich")
    return InMemoryStore(opportunities=[remote, shoot, casting], creators=[photographer])


class TestBuildFeed:
    def test_relevant_roles_ranked(self, feed_store):
        results = build_feed("creator-1", store=feed_store)

        assert [r.role.id for r in results] == ["shoot-photo", "remote-role-1"]
        assert results[0].reason.startswith("Perfect skill match")

    def test_hides_applied_roles(self, feed_store):
        feed_store.applications["a"] = ApplicationSnapshot(
            id="a", opportunity_id="shoot", role_id="shoot-photo",
            role_title="Lead Photographer", creator_id="creator-1", status="pending",
        )
        results = build_feed("creator-1", store=feed_store)
        assert [r.role.id for r in results] == ["remote-role-1"]

    def test_saved_opportunities_first(self, feed_store):
        feed_store.saved["creator-1"] = {"remote"}
        results = build_feed("creator-1", store=feed_store, mode=RankingMode.DETERMINISTIC)
        assert results[0].opportunity.id == "remote"

    def test_priority_member_gets_scored_order(self, feed_store):
        feed_store.priority.add("creator-1")
        feed_store.saved["creator-1"] = {"remote"}
        results = build_feed("creator-1", store=feed_store)

        assert results[0].opportunity.id == "shoot"
        assert results[0].is_priority_match

    def test_limit(self, feed_store):
        assert len(build_feed("creator-1", store=feed_store, limit=1)) == 1

    def test_cold_start(self, feed_store):
        feed_store.creators["newbie"] = CreatorSnapshot(
            id="newbie", city="Munich", preferred_rate=Decimal("500")
        )
        assert len(build_feed("newbie", store=feed_store)) == 3

    def test_unknown_creator(self, feed_store):
        with pytest.raises(NotFoundError):
            build_feed("nobody", store=feed_store)

    @pytest.mark.parametrize("failing", [
        "get_creator",
        "is_priority_member",
        "list_opportunities",
        "list_applications",
        "saved_opportunity_ids",
    ])
    def test_degrades_to_empty_feed(self, photographer, shoot, failing):
        store = InMemoryStore(opportunities=[shoot], creators=[photographer], failing={failing})
        assert build_feed("creator-1", store=store) == []
