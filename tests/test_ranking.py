"""Unit tests for ordering and scoring."""
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from apps.matching.ranking import (
    RankingMode,
    is_good_match,
    order_deterministic,
    proximity_score,
    rank_opportunities,
    rate_fit_score,
    role_match_count,
    score_match,
    top_matches,
)
from apps.matching.types import CreatorSnapshot, RoleSnapshot

from .doubles import make_opportunity

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


def _pairs(*opportunities):
    return [(opp, role) for opp in opportunities for role in opp.roles]


def _ids(items):
    return [item[0].id if isinstance(item, tuple) else item.opportunity.id for item in items]


class TestDeterministicOrder:
    def test_saved_then_same_city(self, photographer):
        far = make_opportunity("far", city="Hamburg", deadline=NOW + timedelta(days=1))
        local = make_opportunity("local", city="München", deadline=NOW + timedelta(days=10))
        saved = make_opportunity("saved", city="Berlin", deadline=NOW + timedelta(days=30))

        ordered = order_deterministic(photographer, _pairs(far, local, saved), {"saved"})
        assert _ids(ordered) == ["saved", "local", "far"]

    def test_more_matching_roles_first(self):
        creator = CreatorSnapshot(id="c", tags=("photographer", "video"))
        single = make_opportunity("single", "Photographer")
        double = make_opportunity("double", "Photographer", "Videographer")

        ordered = order_deterministic(creator, _pairs(single, double))
        assert _ids(ordered) == ["double", "double", "single"]

    def test_duplicate_and_blank_tags_count_once(self):
        creator = CreatorSnapshot(id="c", tags=("Photographer", "photographer ", "", "  "))
        assert role_match_count(creator, make_opportunity("o", "Photographer")) == 1

    def test_duplicate_tags_do_not_inflate_match_count(self):
        creator = CreatorSnapshot(id="c", tags=("photographer", "Photographer", "video", "writer"))
        twice = make_opportunity("twice", "Photographer", deadline=NOW + timedelta(days=5))
        both = make_opportunity("both", "Videographer", "Writer", deadline=NOW + timedelta(days=9))

        ordered = order_deterministic(creator, _pairs(twice, both))
        assert _ids(ordered)[0] == "both"

    def test_earlier_deadline_first_missing_last(self, photographer):
        none = make_opportunity("none")
        late = make_opportunity("late", deadline=date(2026, 7, 1))
        soon = make_opportunity("soon", deadline=NOW)

        ordered = order_deterministic(photographer, _pairs(none, late, soon))
        assert _ids(ordered) == ["soon", "late", "none"]

    def test_local_before_remote(self, photographer):
        remote = make_opportunity("remote", is_remote=True, deadline=NOW)
        onsite = make_opportunity("onsite", deadline=NOW)

        ordered = order_deterministic(photographer, _pairs(remote, onsite))
        assert _ids(ordered) == ["onsite", "remote"]


class TestComponentScores:
    @pytest.mark.parametrize("distance,radius,expected", [
        (0, None, 100),
        (25, None, 50),
        (50, None, 0),
        (80, None, 0),
        (25, 100, 75),
        (float("inf"), 100, 0),
    ])
    def test_proximity(self, distance, radius, expected):
        assert proximity_score(distance, radius) == pytest.approx(expected)

    @pytest.mark.parametrize("budget,expected", [
        ("500", 100),
        ("450", 100),
        ("420", 85),
        ("360", 70),
        ("260", 50),
        ("100", 30),
    ])
    def test_rate_fit(self, budget, expected):
        assert rate_fit_score(Decimal("500"), Decimal(budget)) == expected

    def test_rate_fit_is_neutral_when_unknown(self):
        assert rate_fit_score(None, Decimal("500")) == 70
        assert rate_fit_score(Decimal("500"), None) == 70
        assert rate_fit_score(Decimal("0"), Decimal("500")) == 70

    def test_rate_fit_ignores_non_finite_values(self):
        assert rate_fit_score(float("nan"), Decimal("500")) == 70
        assert rate_fit_score(Decimal("500"), Decimal("-Infinity")) == 70
        assert rate_fit_score(float("inf"), float("inf")) == 70


class TestScoreMatch:
    def test_munich_munchen_perfect_match(self, photographer, shoot):
        creator = CreatorSnapshot(
            id="c", tags=("photographer",), city="Munich", preferred_rate=Decimal("500")
        )
        result = score_match(creator, shoot, shoot.roles[0])

        assert result.score == 100
        assert result.distance_km == 0.0
        assert result.matched_tags == ("photographer",)
        assert result.is_great_match
        assert not result.is_priority_match
        assert result.reason == (
            "Perfect skill match (1 skills) • Same city • Perfect rate match"
        )

    def test_explicit_rate_overrides_profile(self, shoot):
        creator = CreatorSnapshot(
            id="c", tags=("photographer",), city="Munich", preferred_rate=Decimal("100")
        )
        result = score_match(creator, shoot, shoot.roles[0], preferred_rate=Decimal("500"))
        assert result.score == 100

    def test_fallback_reason(self):
        creator = CreatorSnapshot(id="c", city="Hamburg")
        opp = make_opportunity("o", "Model", city="Rome")
        result = score_match(creator, opp, opp.roles[0])

        assert result.reason == "Open role you can apply for"
        assert result.distance_km is None
        assert 0 <= result.score < 20

    def test_priority_flag_needs_great_score(self, shoot):
        creator = CreatorSnapshot(id="c", tags=("photographer",), city="Munich")
        great = score_match(creator, shoot, shoot.roles[0], is_priority_member=True)
        assert great.is_priority_match
        assert great.reason.endswith("Priority member")

        weak_creator = CreatorSnapshot(id="c", city="Hamburg")
        weak = score_match(weak_creator, shoot, shoot.roles[0], is_priority_member=True)
        assert not weak.is_priority_match

    @pytest.mark.parametrize("tags,city,rate", [
        ((), "", None),
        (("photographer",), "Munich", Decimal("1")),
        (("photographer", "model", "writer"), "Rome", Decimal("100000")),
        (("drone",), "München", Decimal("500")),
        (("photographer",), "Munich", float("nan")),
        (("photographer",), "Munich", Decimal("Infinity")),
    ])
    def test_score_bounds(self, shoot, tags, city, rate):
        creator = CreatorSnapshot(id="c", tags=tags, city=city, preferred_rate=rate)
        assert 0 <= score_match(creator, shoot, shoot.roles[0]).score <= 100


class TestRankOpportunities:
    @pytest.fixture
    def creator(self):
        return CreatorSnapshot(
            id="c", tags=("photographer", "video"), city="Munich", preferred_rate=Decimal("100")
        )

    @pytest.fixture
    def pairs(self):
        # near: 50 skill, same city -> 70; far: 100 skill, unknown distance -> 75
        near = make_opportunity("near", roles=(
            RoleSnapshot(id="near-1", opportunity_id="near", title="Photographer", budget=Decimal("100")),
        ), city="München")
        far = make_opportunity("far", roles=(
            RoleSnapshot(id="far-1", opportunity_id="far", title="Photo & Video Producer", budget=Decimal("100")),
        ), city="Hamburg")
        return _pairs(far, near)

    def test_non_member_defaults_to_deterministic(self, creator, pairs):
        results = rank_opportunities(creator, pairs)
        assert _ids(results) == ["near", "far"]
        assert [r.score for r in results] == [70, 75]
        assert not any(r.is_priority_match for r in results)

    def test_member_defaults_to_priority(self, creator, pairs):
        results = rank_opportunities(creator, pairs, is_priority_member=True)
        assert _ids(results) == ["far", "near"]
        assert all(r.is_priority_match for r in results)

    def test_mode_overrides_default(self, creator, pairs):
        assert _ids(rank_opportunities(creator, pairs, mode="priority")) == ["far", "near"]
        assert _ids(rank_opportunities(
            creator, pairs, is_priority_member=True, mode=RankingMode.DETERMINISTIC
        )) == ["near", "far"]

    def test_unknown_mode(self, creator, pairs):
        with pytest.raises(ValueError):
            rank_opportunities(creator, pairs, mode="random")

    def test_score_ties_keep_deterministic_order(self, photographer):
        late = make_opportunity("late", deadline=NOW + timedelta(days=5))
        soon = make_opportunity("soon", deadline=NOW)
        results = rank_opportunities(photographer, _pairs(late, soon), mode="priority")

        assert results[0].score == results[1].score
        assert _ids(results) == ["soon", "late"]

    def test_top_matches_limit(self, creator, pairs):
        assert len(top_matches(creator, pairs, limit=1)) == 1

    def test_is_good_match(self, creator, pairs):
        assert all(is_good_match(r) for r in rank_opportunities(creator, pairs))
