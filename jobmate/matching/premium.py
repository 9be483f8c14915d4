"""Premium tier boosts and related specialist perks."""

from __future__ import annotations

from dataclasses import dataclass

from jobmate.matching.models import (
    PremiumTier,
    RankedCandidate,
    ScoredCandidate,
    round_score,
)


def apply_boost(score: int, factor: float) -> int:
    """Multiply a score by a boost factor, capped at 100."""
    if factor == 1.0:
        return score
    return min(100, round_score(score * factor))


def boost_candidate(scored: ScoredCandidate, tier: PremiumTier | None = None) -> RankedCandidate:
    """Apply the owner's premium boost and priority flag to a scored candidate.

    ``tier`` defaults to the listing's own premium tier.
    """
    tier = tier if tier is not None else scored.listing.premium_tier
    return RankedCandidate(
        candidate_id=scored.listing.id,
        score=apply_boost(scored.match.score, tier.boost_factor),
        distance_km=scored.distance_km,
        priority=tier.priority_matching,
        tier=tier,
        match=scored.match,
        boost_note=boost_note(tier),
        badges=tuple(premium_badges(tier)),
    )


def boost_note(tier: PremiumTier) -> str | None:
    """Explain the boost a tier applied, or None when there is no boost."""
    if tier.boost_factor <= 1.0:
        return None
    percent = round_score((tier.boost_factor - 1.0) * 100)
    return f"Premium {tier.value} status applied a {percent}% boost"


def premium_badges(tier: PremiumTier) -> list[str]:
    """Return the profile badges granted by a tier."""
    if tier is PremiumTier.NONE:
        return []
    badges = ["premium"]
    if tier in (PremiumTier.PRO, PremiumTier.ELITE):
        badges.append("verified")
    if tier is PremiumTier.ELITE:
        badges.append("top-rated")
    return badges


def can_access_listing(*, verified_only: bool, verified_payment: bool) -> bool:
    """Specialists with a verified-only setting only see verified-payment listings."""
    return verified_payment or not verified_only


@dataclass(frozen=True)
class ClientReputation:
    """Aggregated 1-5 ratings a client received from specialists."""

    overall_rating: float
    reliability: float
    communication: float
    fair_payment: float
    respectfulness: float
    total_ratings: int

    def __post_init__(self) -> None:
        for name in (
            "overall_rating",
            "reliability",
            "communication",
            "fair_payment",
            "respectfulness",
        ):
            value = getattr(self, name)
            if not (0.0 <= value <= 5.0):
                raise ValueError(f"{name} must be between 0 and 5 (got {value})")
        if self.total_ratings < 0:
            raise ValueError(
                f"total_ratings must be non-negative (got {self.total_ratings})"
            )


_CLIENT_REPUTATION_WEIGHTS: dict[str, float] = {
    "overall_rating": 0.30,
    "reliability": 0.25,
    "communication": 0.20,
    "fair_payment": 0.15,
    "respectfulness": 0.10,
}


def client_reputation_score(reputation: ClientReputation | None) -> float:
    """Score a client's reputation in [0, 1]; 0.5 when unknown.

    Few ratings pull the score toward 0.5; full confidence at 10 ratings.
    """
    if reputation is None:
        return 0.5

    weighted = sum(
        getattr(reputation, name) * weight
        for name, weight in _CLIENT_REPUTATION_WEIGHTS.items()
    ) / 5.0
    confidence = min(1.0, reputation.total_ratings / 10.0)
    return 0.5 + (weighted - 0.5) * confidence
