"""Compatibility scoring and geo-aware matching.

This module scores how well a listing or specialist fits a requester,
filters candidates by distance, applies premium boosts and returns
ranked, paginated results.

Public API:
    - CompatibilityScorer: Six-dimension weighted scorer
    - MatchingService: End-to-end search pipeline
    - SearchQuery: Validated search parameters
    - RecordLoader: Load records from YAML/JSON files
    - RequesterCriteria / Listing: Canonical input models
    - MatchResult / RankedCandidate / RankedPage: Result models
    - ClientReputation / client_reputation_score: Client reputation scoring
    - MatchingConfig: Configuration settings
"""

from jobmate.matching.adapters import (
    criteria_from_preferences,
    criteria_from_record,
    criteria_from_user,
    listing_from_record,
)
from jobmate.matching.config import (
    MatchingConfig,
    get_matching_config,
    reset_matching_config,
)
from jobmate.matching.errors import InvalidParameterError
from jobmate.matching.geo import filter_by_distance, haversine_km
from jobmate.matching.loader import RecordLoader
from jobmate.matching.models import (
    DimensionScore,
    DistanceFilter,
    GeoMatch,
    GeoPoint,
    Listing,
    MatchResult,
    Pagination,
    PremiumTier,
    RankedCandidate,
    RankedPage,
    RequesterCriteria,
    ScoredCandidate,
)
from jobmate.matching.premium import (
    ClientReputation,
    apply_boost,
    boost_candidate,
    boost_note,
    can_access_listing,
    client_reputation_score,
    premium_badges,
)
from jobmate.matching.ranking import paginate, rank_candidates
from jobmate.matching.scorer import CompatibilityScorer, rating_reputation
from jobmate.matching.service import MatchingService, SearchQuery

__all__ = [
    "CompatibilityScorer",
    "MatchingService",
    "SearchQuery",
    "RecordLoader",
    "RequesterCriteria",
    "Listing",
    "GeoPoint",
    "DistanceFilter",
    "GeoMatch",
    "ScoredCandidate",
    "DimensionScore",
    "MatchResult",
    "PremiumTier",
    "RankedCandidate",
    "RankedPage",
    "Pagination",
    "InvalidParameterError",
    "MatchingConfig",
    "get_matching_config",
    "reset_matching_config",
    "criteria_from_user",
    "criteria_from_preferences",
    "criteria_from_record",
    "listing_from_record",
    "haversine_km",
    "filter_by_distance",
    "apply_boost",
    "boost_candidate",
    "boost_note",
    "premium_badges",
    "can_access_listing",
    "ClientReputation",
    "client_reputation_score",
    "rank_candidates",
    "paginate",
    "rating_reputation",
]
