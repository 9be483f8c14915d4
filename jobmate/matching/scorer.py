"""Compatibility scoring between requester criteria and listings."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor

from jobmate.matching.config import MatchingConfig, get_matching_config
from jobmate.matching.errors import InvalidParameterError
from jobmate.matching.matchers import count_tag_matches
from jobmate.matching.models import (
    DIMENSIONS,
    DimensionScore,
    GeoMatch,
    Listing,
    MatchResult,
    RequesterCriteria,
    ScoredCandidate,
    round_score,
)

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50.0
REPUTATION_PLACEHOLDER = 70.0

ReputationLookup = Callable[[Listing], float | None]


def rating_reputation(listing: Listing) -> float | None:
    """Reputation (0-100) from a 0-5 rating and completed job count.

    Rating contributes 70% and experience 30%, with experience saturating
    at 20 completed jobs. Returns None when the listing has no rating.
    """
    if listing.rating is None:
        return None
    rating_part = listing.rating / 5.0
    jobs_part = min(1.0, (listing.completed_jobs or 0) / 20.0)
    return 100.0 * (rating_part * 0.7 + jobs_part * 0.3)


class CompatibilityScorer:
    """Computes weighted, explained compatibility scores.

    The scorer holds only configuration and an optional reputation lookup;
    every call is independent, so one instance can be shared across threads.
    """

    def __init__(
        self,
        config: MatchingConfig | None = None,
        reputation_lookup: ReputationLookup | None = None,
    ) -> None:
        self.config = config or get_matching_config()
        self.reputation_lookup = reputation_lookup

    def resolve_weights(
        self, overrides: Mapping[str, float] | None = None
    ) -> dict[str, float]:
        """Merge per-call weight overrides over the configured weights.

        Raises:
            InvalidParameterError: For unknown dimensions or weights outside [0, 1].
        """
        weights = self.config.weights()
        for name, value in (overrides or {}).items():
            if name not in weights:
                raise InvalidParameterError(
                    "weights", f"unknown dimension '{name}' (expected {DIMENSIONS})"
                )
            try:
                number = float(value)
            except (TypeError, ValueError) as e:
                raise InvalidParameterError(
                    "weights", f"weight for '{name}' is not a number: {value!r}"
                ) from e
            if not math.isfinite(number) or not 0.0 <= number <= 1.0:
                raise InvalidParameterError(
                    "weights", f"weight for '{name}' must be within [0, 1] (got {value})"
                )
            weights[name] = number
        return weights

    def score_skills(
        self, criteria: RequesterCriteria, listing: Listing, weight: float
    ) -> DimensionScore:
        if not criteria.skills or not listing.tags:
            return DimensionScore(NEUTRAL_SCORE, weight, "No skill data available")

        match_count = count_tag_matches(listing.tags, criteria.skills)
        score = 100.0 * match_count / max(1, len(listing.tags))
        if match_count:
            description = f"Matched {match_count} of your skills"
        else:
            description = "No skill matches found"
        return DimensionScore(score, weight, description)

    def score_location(
        self, criteria: RequesterCriteria, listing: Listing, weight: float
    ) -> DimensionScore:
        if not criteria.location or not listing.location:
            return DimensionScore(NEUTRAL_SCORE, weight, "Location data incomplete")
        if criteria.location == listing.location:
            return DimensionScore(100.0, weight, "Location is a perfect match")
        return DimensionScore(50.0, weight, "Location is nearby")

    def score_availability(
        self, criteria: RequesterCriteria, listing: Listing, weight: float
    ) -> DimensionScore:
        if not criteria.availability or not listing.schedule:
            return DimensionScore(NEUTRAL_SCORE, weight, "Schedule data incomplete")

        overlap = len(listing.schedule & criteria.availability)
        score = 100.0 * overlap / len(listing.schedule)
        if overlap:
            description = f"Schedule compatibility: {round_score(score)}%"
        else:
            description = "Schedules do not align"
        return DimensionScore(score, weight, description)

    def score_price(
        self, criteria: RequesterCriteria, listing: Listing, weight: float
    ) -> DimensionScore:
        budget = criteria.budget_ceiling
        price = listing.price
        # Zero budgets/prices carry no signal and are treated as absent.
        if not budget or not price:
            return DimensionScore(NEUTRAL_SCORE, weight, "Price data incomplete")

        if price <= budget:
            return DimensionScore(100.0, weight, "Within your budget")
        if price <= budget * 1.2:
            return DimensionScore(70.0, weight, "Slightly above your budget")
        if price <= budget * 1.5:
            return DimensionScore(40.0, weight, "Significantly above your budget")
        return DimensionScore(20.0, weight, "Significantly above your budget")

    def score_category(
        self, criteria: RequesterCriteria, listing: Listing, weight: float
    ) -> DimensionScore:
        if not criteria.preferred_category or not listing.category:
            return DimensionScore(
                NEUTRAL_SCORE, weight, "Category preference data incomplete"
            )
        if criteria.preferred_category == listing.category:
            return DimensionScore(100.0, weight, "Matches your preferred category")
        return DimensionScore(30.0, weight, "Different from your preferred category")

    def score_reputation(
        self, criteria: RequesterCriteria, listing: Listing, weight: float
    ) -> DimensionScore:
        value = None
        if self.reputation_lookup is not None:
            value = self.reputation_lookup(listing)
        if value is None or not math.isfinite(value):
            return DimensionScore(
                REPUTATION_PLACEHOLDER, weight, "Based on creator reputation"
            )
        value = min(100.0, max(0.0, float(value)))
        return DimensionScore(value, weight, "Based on creator rating")

    def score(
        self,
        criteria: RequesterCriteria,
        listing: Listing,
        weights: Mapping[str, float] | None = None,
    ) -> MatchResult:
        """Score one listing against the requester's criteria."""
        return self._score(criteria, listing, self.resolve_weights(weights))

    def _score(
        self,
        criteria: RequesterCriteria,
        listing: Listing,
        weights: dict[str, float],
    ) -> MatchResult:
        scorers = {
            "skills": self.score_skills,
            "location": self.score_location,
            "availability": self.score_availability,
            "price": self.score_price,
            "category": self.score_category,
            "reputation": self.score_reputation,
        }
        breakdown = {
            name: scorers[name](criteria, listing, weights[name]) for name in DIMENSIONS
        }

        total_weight = sum(d.weight for d in breakdown.values())
        if total_weight > 0:
            weighted = sum(d.score * d.weight for d in breakdown.values())
            final = round_score(weighted / total_weight)
        else:
            final = round_score(NEUTRAL_SCORE)
        final = min(100, max(0, final))

        # Strict ">" keeps the earliest dimension on ties.
        primary_name = DIMENSIONS[0]
        best = breakdown[primary_name].score * breakdown[primary_name].weight
        for name in DIMENSIONS[1:]:
            product = breakdown[name].score * breakdown[name].weight
            if product > best:
                best = product
                primary_name = name

        return MatchResult(
            score=final,
            primary_reason=breakdown[primary_name].description,
            breakdown=breakdown,
        )

    def score_batch(
        self,
        criteria: RequesterCriteria,
        candidates: Iterable[GeoMatch | Listing],
        *,
        weights: Mapping[str, float] | None = None,
        max_workers: int | None = None,
    ) -> list[ScoredCandidate]:
        """Score many candidates, preserving input order.

        A candidate whose scoring raises is logged and dropped; the rest of
        the batch is still scored. Invalid weights fail before any scoring.
        """
        resolved = self.resolve_weights(weights)
        matches = [
            c if isinstance(c, GeoMatch) else GeoMatch(candidate=c) for c in candidates
        ]
        workers = max_workers or self.config.max_workers

        def _score_one(match: GeoMatch) -> ScoredCandidate | None:
            try:
                result = self._score(criteria, match.candidate, resolved)
            except Exception as exc:
                logger.exception(
                    "Scoring failed for candidate %s: %s", match.candidate.id, exc
                )
                return None
            return ScoredCandidate(
                listing=match.candidate, match=result, distance_km=match.distance_km
            )

        if workers > 1 and len(matches) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                results = list(executor.map(_score_one, matches))
        else:
            results = [_score_one(match) for match in matches]

        scored = [item for item in results if item is not None]
        if len(scored) != len(matches):
            logger.warning(
                f"Scored {len(scored)} of {len(matches)} candidates; "
                f"{len(matches) - len(scored)} failed"
            )
        return scored

    def format_result(self, result: MatchResult) -> str:
        """Format a MatchResult for CLI output."""
        lines: list[str] = []
        lines.append(f"Compatibility: {result.score}/100")
        lines.append(f"Primary reason: {result.primary_reason}")
        for name, dimension in result.breakdown.items():
            lines.append(
                f"  {name:<12} score={dimension.score:6.2f} "
                f"weight={dimension.weight:.2f}  {dimension.description}"
            )
        return "\n".join(lines)
