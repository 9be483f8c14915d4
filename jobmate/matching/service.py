"""Search pipeline: filter, score, boost, rank and paginate candidates."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from jobmate.matching.adapters import criteria_from_record, listing_from_record
from jobmate.matching.config import MatchingConfig, get_matching_config
from jobmate.matching.errors import InvalidParameterError
from jobmate.matching.geo import filter_by_distance
from jobmate.matching.matchers import normalize_skill
from jobmate.matching.models import (
    DistanceFilter,
    GeoPoint,
    Listing,
    RankedPage,
    RequesterCriteria,
)
from jobmate.matching.premium import boost_candidate, can_access_listing
from jobmate.matching.ranking import paginate, rank_candidates
from jobmate.matching.scorer import CompatibilityScorer

logger = logging.getLogger(__name__)


class SearchQuery(BaseModel):
    """Validated search parameters, mirroring the marketplace query string."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    category_id: str | None = Field(default=None, description="Exact category id")
    min_rating: float | None = Field(
        default=None, ge=0.0, le=5.0, description="Minimum average rating"
    )
    location: str | None = Field(
        default=None, description="Case-insensitive location substring"
    )
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float | None = Field(
        default=None, ge=-180.0, le=180.0, allow_inf_nan=False
    )
    radius_km: float | None = Field(default=None, ge=0.0, allow_inf_nan=False)
    sort_by: Literal["rating", "distance", "price"] = "rating"
    sort_order: Literal["asc", "desc"] | None = None
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1, description="Page size")
    verified_only: bool = Field(
        default=False, description="Only listings with verified payment"
    )

    @field_validator("category_id", "location", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def distance_filter(self) -> DistanceFilter | None:
        """Radius filter, active only when center and radius are all given."""
        if self.latitude is None or self.longitude is None or self.radius_km is None:
            return None
        return DistanceFilter(
            center=GeoPoint(latitude=self.latitude, longitude=self.longitude),
            radius_km=self.radius_km,
        )


class MatchingService:
    """Runs a full marketplace search over in-memory records."""

    def __init__(
        self,
        config: MatchingConfig | None = None,
        scorer: CompatibilityScorer | None = None,
    ) -> None:
        self.config = config or get_matching_config()
        self.scorer = scorer or CompatibilityScorer(config=self.config)

    def adapt_listings(
        self, records: Iterable[Mapping[str, Any] | Listing]
    ) -> list[Listing]:
        """Convert raw records to listings, skipping ones that cannot be read."""
        listings: list[Listing] = []
        for index, record in enumerate(records):
            if not isinstance(record, (Mapping, Listing)):
                logger.warning(f"Skipping record {index}: not a mapping")
                continue
            try:
                listings.append(listing_from_record(record))
            except ValidationError as e:
                logger.warning(
                    f"Skipping record {index}: {e.error_count()} validation error(s)"
                )
        return listings

    def apply_filters(
        self, listings: Iterable[Listing], query: SearchQuery
    ) -> list[Listing]:
        """Apply the category, rating, location text and payment filters."""
        kept: list[Listing] = []
        location_needle = normalize_skill(query.location) if query.location else None
        for listing in listings:
            if query.category_id is not None and listing.category != query.category_id:
                continue
            if query.min_rating is not None and (
                listing.rating is None or listing.rating < query.min_rating
            ):
                continue
            if location_needle is not None and (
                not listing.location
                or location_needle not in normalize_skill(listing.location)
            ):
                continue
            if not can_access_listing(
                verified_only=query.verified_only,
                verified_payment=listing.verified_payment,
            ):
                continue
            kept.append(listing)
        return kept

    def resolve_limit(self, query: SearchQuery) -> int:
        limit = query.limit if query.limit is not None else self.config.default_page_limit
        if limit > self.config.max_page_limit:
            raise InvalidParameterError(
                "limit",
                f"must not exceed {self.config.max_page_limit} (got {limit})",
            )
        return limit

    def resolve_distance_filter(
        self, criteria: RequesterCriteria, query: SearchQuery
    ) -> DistanceFilter | None:
        """Return the radius filter, centred on the requester when no center is given."""
        if query.distance_filter is not None:
            return query.distance_filter
        if (
            query.radius_km is None
            or query.latitude is not None
            or query.longitude is not None
            or criteria.position is None
        ):
            return None
        return DistanceFilter(center=criteria.position, radius_km=query.radius_km)

    def search(
        self,
        criteria: RequesterCriteria | Mapping[str, Any],
        records: Iterable[Mapping[str, Any] | Listing],
        query: SearchQuery | None = None,
        *,
        weights: Mapping[str, float] | None = None,
    ) -> RankedPage:
        """Return one page of ranked candidates for a requester.

        Raises:
            InvalidParameterError: For bad pagination, sort or weight parameters.
        """
        query = query or SearchQuery()
        criteria = criteria_from_record(criteria)
        limit = self.resolve_limit(query)
        # Fail on bad weights before doing any work.
        resolved_weights = self.scorer.resolve_weights(weights)

        listings = self.adapt_listings(records)
        filtered = self.apply_filters(listings, query)
        nearby = filter_by_distance(
            filtered,
            self.resolve_distance_filter(criteria, query),
            earth_radius_km=self.config.earth_radius_km,
        )
        scored = self.scorer.score_batch(criteria, nearby, weights=resolved_weights)
        boosted = [boost_candidate(item) for item in scored]
        ranked = rank_candidates(boosted, query.sort_by, query.sort_order)

        logger.info(
            f"Search matched {len(ranked)} of {len(listings)} listings "
            f"(requester={criteria.requester_id or 'anonymous'})"
        )
        return paginate(ranked, query.page, limit)

    def format_page(self, page: RankedPage) -> str:
        """Format a ranked page for CLI output."""
        info = page.pagination
        lines: list[str] = []
        lines.append(
            f"Page {info.page}/{info.total_pages} "
            f"({info.total_count} result(s), {info.limit} per page)"
        )
        first_position = 1 + (info.page - 1) * info.limit
        for position, item in enumerate(page.items, start=first_position):
            distance = (
                f"{item.distance_km:.2f} km" if item.distance_km is not None else "-"
            )
            flag = " *" if item.priority else ""
            reason = item.match.primary_reason if item.match else ""
            lines.append(
                f"{position:>3}. {item.candidate_id:<16} score={item.score:>3} "
                f"distance={distance:<10} tier={item.tier.value}{flag}  {reason}"
            )
            if item.boost_note:
                lines.append(f"     {item.boost_note}")
        return "\n".join(lines)
