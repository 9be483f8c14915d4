"""Tests for matching data models."""

from __future__ import annotations

import math

import pytest


class TestRoundScore:
    """Test half-up score rounding."""

    def test_round_score_rounds_half_up(self):
        from jobmate.matching.models import round_score

        assert round_score(70.5) == 71
        assert round_score(70.49) == 70
        assert round_score(0.5) == 1
        assert round_score(100.0) == 100


class TestPremiumTier:
    """Test PremiumTier factors and parsing."""

    def test_boost_factors(self):
        from jobmate.matching.models import PremiumTier

        assert PremiumTier.NONE.boost_factor == 1.0
        assert PremiumTier.BASIC.boost_factor == 1.1
        assert PremiumTier.PRO.boost_factor == 1.2
        assert PremiumTier.ELITE.boost_factor == 1.3

    def test_only_elite_gets_priority_matching(self):
        from jobmate.matching.models import PremiumTier

        assert [t.priority_matching for t in PremiumTier] == [False, False, False, True]

    def test_parse_is_lenient(self):
        from jobmate.matching.models import PremiumTier

        assert PremiumTier.parse("Elite") is PremiumTier.ELITE
        assert PremiumTier.parse(" pro ") is PremiumTier.PRO
        assert PremiumTier.parse(None) is PremiumTier.NONE
        assert PremiumTier.parse("platinum") is PremiumTier.NONE
        assert PremiumTier.parse(PremiumTier.BASIC) is PremiumTier.BASIC


class TestGeoModels:
    """Test strict validation of control geo models."""

    def test_geo_point_rejects_out_of_range(self):
        from pydantic import ValidationError

        from jobmate.matching.models import GeoPoint

        with pytest.raises(ValidationError):
            GeoPoint(latitude=91, longitude=0)
        with pytest.raises(ValidationError):
            GeoPoint(latitude=0, longitude=-181)
        with pytest.raises(ValidationError):
            GeoPoint(latitude=math.nan, longitude=0)

    def test_distance_filter_rejects_negative_radius(self):
        from pydantic import ValidationError

        from jobmate.matching.models import DistanceFilter, GeoPoint

        with pytest.raises(ValidationError):
            DistanceFilter(center=GeoPoint(latitude=0, longitude=0), radius_km=-1)

    def test_valid_position_returns_none_for_bad_coordinates(self):
        from jobmate.matching.models import valid_position

        assert valid_position(None, 10) is None
        assert valid_position(95, 10) is None
        assert valid_position("abc", 10) is None
        point = valid_position("37.5", -122)
        assert point is not None
        assert point.latitude == 37.5


class TestRequesterCriteria:
    """Test RequesterCriteria coercion of business data."""

    def test_malformed_budget_becomes_missing(self):
        from jobmate.matching.models import RequesterCriteria

        criteria = RequesterCriteria(budget_min=-5, budget_max=math.nan)

        assert criteria.budget_min is None
        assert criteria.budget_max is None
        assert criteria.budget_ceiling is None

    def test_budget_ceiling_prefers_max(self):
        from jobmate.matching.models import RequesterCriteria

        assert RequesterCriteria(budget_min=40, budget_max=90).budget_ceiling == 90
        assert RequesterCriteria(budget_min=40).budget_ceiling == 40

    def test_skills_are_cleaned_into_a_set(self):
        from jobmate.matching.models import RequesterCriteria

        criteria = RequesterCriteria(skills=["  Plumbing ", "", None, "Plumbing"])

        assert criteria.skills == frozenset({"Plumbing"})

    def test_non_list_skills_become_empty(self):
        from jobmate.matching.models import RequesterCriteria

        criteria = RequesterCriteria(skills=7, availability={"day": "mon"})

        assert criteria.skills == frozenset()
        assert criteria.availability == frozenset()

    def test_invalid_position_mapping_becomes_none(self):
        from jobmate.matching.models import RequesterCriteria

        criteria = RequesterCriteria(position={"latitude": 200, "longitude": 0})

        assert criteria.position is None

    def test_round_trip_dict(self):
        from jobmate.matching.models import RequesterCriteria

        criteria = RequesterCriteria(
            requester_id="r1",
            skills=["a"],
            position={"latitude": 1.0, "longitude": 2.0},
            budget_max=50,
        )

        restored = RequesterCriteria.from_dict(criteria.to_dict())

        assert restored == criteria


class TestListing:
    """Test Listing validation and coercion."""

    def test_missing_id_raises(self):
        from pydantic import ValidationError

        from jobmate.matching.models import Listing

        with pytest.raises(ValidationError):
            Listing(id="  ")

    def test_numeric_id_is_coerced_to_string(self):
        from jobmate.matching.models import Listing

        assert Listing(id=42).id == "42"

    def test_malformed_numbers_become_missing(self):
        from jobmate.matching.models import Listing

        listing = Listing(
            id="l1",
            price=-10,
            latitude=120,
            longitude="x",
            rating=7,
            completed_jobs=-3,
        )

        assert listing.price is None
        assert listing.latitude is None
        assert listing.longitude is None
        assert listing.rating is None
        assert listing.completed_jobs is None
        assert listing.position is None

    def test_nan_price_becomes_missing(self):
        from jobmate.matching.models import Listing

        assert Listing(id="l1", price=float("nan")).price is None

    def test_tags_keep_order(self):
        from jobmate.matching.models import Listing

        listing = Listing(id="l1", tags=["b", "a", " ", "c"])

        assert listing.tags == ("b", "a", "c")

    def test_non_list_tags_and_schedule_become_empty(self):
        from jobmate.matching.models import Listing

        listing = Listing(id="l1", tags=5, schedule=3)

        assert listing.tags == ()
        assert listing.schedule == frozenset()

    def test_verified_payment_requires_true(self):
        from jobmate.matching.models import Listing

        assert Listing(id="l1").verified_payment is False
        assert Listing(id="l1", verified_payment="yes").verified_payment is False
        assert Listing(id="l1", verified_payment=True).verified_payment is True

    def test_position_requires_both_coordinates(self):
        from jobmate.matching.models import Listing

        assert Listing(id="l1", latitude=10).position is None
        point = Listing(id="l1", latitude=10, longitude=20).position
        assert point is not None
        assert (point.latitude, point.longitude) == (10, 20)


class TestResultModels:
    """Test result dataclass validation."""

    def test_dimension_score_rejects_out_of_range(self):
        from jobmate.matching.models import DimensionScore

        with pytest.raises(ValueError):
            DimensionScore(score=101, weight=0.5, description="x")
        with pytest.raises(ValueError):
            DimensionScore(score=50, weight=1.5, description="x")

    def test_match_result_rejects_out_of_range(self):
        from jobmate.matching.models import MatchResult

        with pytest.raises(ValueError):
            MatchResult(score=-1, primary_reason="x")

    def test_weighted_average_without_weight_is_neutral(self):
        from jobmate.matching.models import DimensionScore, MatchResult

        result = MatchResult(
            score=50,
            primary_reason="x",
            breakdown={"skills": DimensionScore(90, 0.0, "x")},
        )

        assert result.weighted_average() == 50.0

    def test_match_result_from_dict(self):
        from jobmate.matching.models import DimensionScore, MatchResult

        result = MatchResult(
            score=80,
            primary_reason="Within your budget",
            breakdown={"price": DimensionScore(100.0, 0.2, "Within your budget")},
        )

        restored = MatchResult.from_dict(result.to_dict())

        assert restored == result

    def test_ranked_candidate_to_dict(self):
        from jobmate.matching.models import PremiumTier, RankedCandidate

        data = RankedCandidate(
            candidate_id="c1",
            score=90,
            distance_km=1.5,
            priority=True,
            tier=PremiumTier.ELITE,
            boost_note="Premium elite status applied a 30% boost",
            badges=("premium", "verified", "top-rated"),
        ).to_dict()

        assert data == {
            "candidate_id": "c1",
            "score": 90,
            "distance_km": 1.5,
            "priority": True,
            "tier": "elite",
            "match": None,
            "boost_note": "Premium elite status applied a 30% boost",
            "badges": ["premium", "verified", "top-rated"],
        }
