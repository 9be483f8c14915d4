"""Data models for the matching engine.

Inputs (requester criteria, listings, geo parameters) are frozen pydantic
models; derived results (match results, ranked candidates, pages) are frozen
dataclasses validated in ``__post_init__``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# Evaluation order; also the tie-break order for the primary reason.
DIMENSIONS: tuple[str, ...] = (
    "skills",
    "location",
    "availability",
    "price",
    "category",
    "reputation",
)


def round_score(value: float) -> int:
    """Round a non-negative score half-up (70.5 -> 71)."""
    return int(math.floor(value + 0.5))


def _finite_or_none(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def non_negative_or_none(value: Any) -> float | None:
    number = _finite_or_none(value)
    if number is None or number < 0:
        return None
    return number


def clean_text(value: Any) -> str | None:
    if value is None:
        return None
    text = " ".join(str(value).split())
    return text or None


def clean_string_list(value: Any) -> tuple[str, ...]:
    """Clean a list of strings, keeping order; non-list values count as missing."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set, frozenset)):
        return ()
    cleaned = (clean_text(item) for item in value)
    return tuple(item for item in cleaned if item)


def _clean_string_set(value: Any) -> frozenset[str]:
    return frozenset(clean_string_list(value))


class PremiumTier(str, Enum):
    """Paid specialist tier."""

    NONE = "none"
    BASIC = "basic"
    PRO = "pro"
    ELITE = "elite"

    @property
    def boost_factor(self) -> float:
        return _BOOST_FACTORS[self.value]

    @property
    def priority_matching(self) -> bool:
        return self is PremiumTier.ELITE

    @classmethod
    def parse(cls, value: Any) -> PremiumTier:
        """Parse a tier name leniently; unknown or missing values map to NONE."""
        if isinstance(value, PremiumTier):
            return value
        text = clean_text(value)
        if text is None:
            return cls.NONE
        try:
            return cls(text.lower())
        except ValueError:
            return cls.NONE


_BOOST_FACTORS: dict[str, float] = {
    "none": 1.0,
    "basic": 1.1,
    "pro": 1.2,
    "elite": 1.3,
}


class GeoPoint(BaseModel):
    """A latitude/longitude pair in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180.0, le=180.0, allow_inf_nan=False)


def valid_position(latitude: Any, longitude: Any) -> GeoPoint | None:
    """Return a GeoPoint, or None when either coordinate is missing or invalid."""
    if _finite_or_none(latitude) is None or _finite_or_none(longitude) is None:
        return None
    try:
        return GeoPoint(latitude=float(latitude), longitude=float(longitude))
    except ValidationError:
        return None


class DistanceFilter(BaseModel):
    """Radius query around a center point."""

    model_config = ConfigDict(frozen=True)

    center: GeoPoint
    radius_km: float = Field(..., ge=0.0, allow_inf_nan=False)


class RequesterCriteria(BaseModel):
    """Canonical requester criteria consumed by the scorer.

    Legacy input shapes are converted by ``jobmate.matching.adapters``.
    """

    model_config = ConfigDict(frozen=True)

    requester_id: str | None = Field(default=None, description="Requester id")
    skills: frozenset[str] = Field(
        default_factory=frozenset, description="Desired skills/tags"
    )
    location: str | None = Field(default=None, description="Location text")
    position: GeoPoint | None = Field(default=None, description="Coordinates")
    availability: frozenset[str] = Field(
        default_factory=frozenset, description="Available time-slot ids"
    )
    budget_min: float | None = Field(default=None, description="Budget lower bound")
    budget_max: float | None = Field(default=None, description="Budget upper bound")
    preferred_category: str | None = Field(
        default=None, description="Preferred category id"
    )

    @field_validator("skills", "availability", mode="before")
    @classmethod
    def _strings(cls, v: Any) -> frozenset[str]:
        return _clean_string_set(v)

    @field_validator("requester_id", "location", "preferred_category", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str | None:
        return clean_text(v)

    @field_validator("budget_min", "budget_max", mode="before")
    @classmethod
    def _budget(cls, v: Any) -> float | None:
        return non_negative_or_none(v)

    @field_validator("position", mode="before")
    @classmethod
    def _position(cls, v: Any) -> Any:
        if v is None or isinstance(v, GeoPoint):
            return v
        if isinstance(v, dict):
            return valid_position(v.get("latitude"), v.get("longitude"))
        return None

    @property
    def budget_ceiling(self) -> float | None:
        """Upper budget bound, falling back to a single-value budget."""
        if self.budget_max is not None:
            return self.budget_max
        return self.budget_min

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> RequesterCriteria:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


class Listing(BaseModel):
    """A listing or specialist record as read from the persistence layer."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Listing/specialist id")
    title: str | None = Field(default=None, description="Listing title")
    tags: tuple[str, ...] = Field(default=(), description="Ordered tags")
    location: str | None = Field(default=None, description="Location text")
    latitude: float | None = Field(default=None, description="Latitude")
    longitude: float | None = Field(default=None, description="Longitude")
    schedule: frozenset[str] = Field(
        default_factory=frozenset, description="Offered time-slot ids"
    )
    price: float | None = Field(default=None, description="Price or hourly rate")
    category: str | None = Field(default=None, description="Category id")
    specialist_id: str | None = Field(default=None, description="Owning specialist")
    premium_tier: PremiumTier = Field(
        default=PremiumTier.NONE, description="Owner's paid tier"
    )
    rating: float | None = Field(default=None, description="Average rating (0-5)")
    completed_jobs: int | None = Field(default=None, description="Jobs completed")
    verified_payment: bool = Field(
        default=False, description="Client payment method is verified"
    )

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, v: Any) -> str:
        text = clean_text(v)
        if text is None:
            raise ValueError("listing id is required")
        return text

    @field_validator("title", "location", "category", "specialist_id", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str | None:
        return clean_text(v)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, v: Any) -> tuple[str, ...]:
        return clean_string_list(v)

    @field_validator("schedule", mode="before")
    @classmethod
    def _schedule(cls, v: Any) -> frozenset[str]:
        return _clean_string_set(v)

    @field_validator("latitude", mode="before")
    @classmethod
    def _latitude(cls, v: Any) -> float | None:
        number = _finite_or_none(v)
        if number is None or not -90.0 <= number <= 90.0:
            return None
        return number

    @field_validator("longitude", mode="before")
    @classmethod
    def _longitude(cls, v: Any) -> float | None:
        number = _finite_or_none(v)
        if number is None or not -180.0 <= number <= 180.0:
            return None
        return number

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, v: Any) -> float | None:
        return non_negative_or_none(v)

    @field_validator("rating", mode="before")
    @classmethod
    def _rating(cls, v: Any) -> float | None:
        number = non_negative_or_none(v)
        if number is None or number > 5.0:
            return None
        return number

    @field_validator("completed_jobs", mode="before")
    @classmethod
    def _completed_jobs(cls, v: Any) -> int | None:
        number = non_negative_or_none(v)
        return int(number) if number is not None else None

    @field_validator("premium_tier", mode="before")
    @classmethod
    def _tier(cls, v: Any) -> PremiumTier:
        return PremiumTier.parse(v)

    @field_validator("verified_payment", mode="before")
    @classmethod
    def _verified(cls, v: Any) -> bool:
        return v is True

    @property
    def position(self) -> GeoPoint | None:
        return valid_position(self.latitude, self.longitude)

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> Listing:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


@dataclass(frozen=True)
class DimensionScore:
    """Score for a single compatibility dimension."""

    score: float
    weight: float
    description: str

    def __post_init__(self) -> None:
        if not (0.0 <= self.score <= 100.0):
            raise ValueError(f"score must be between 0 and 100 (got {self.score})")
        if not (0.0 <= self.weight <= 1.0):
            raise ValueError(f"weight must be between 0.0 and 1.0 (got {self.weight})")

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "weight": self.weight,
            "description": self.description,
        }


@dataclass(frozen=True)
class MatchResult:
    """Compatibility score with its explanatory breakdown."""

    score: int
    primary_reason: str
    breakdown: dict[str, DimensionScore] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not (0 <= self.score <= 100):
            raise ValueError(f"score must be between 0 and 100 (got {self.score})")

    def weighted_average(self) -> float:
        """Weighted mean of the breakdown scores (50.0 when no weight is set)."""
        total_weight = sum(d.weight for d in self.breakdown.values())
        if total_weight <= 0:
            return 50.0
        total = sum(d.score * d.weight for d in self.breakdown.values())
        return total / total_weight

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "primary_reason": self.primary_reason,
            "breakdown": {
                name: dimension.to_dict() for name, dimension in self.breakdown.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MatchResult:
        breakdown = {
            str(name): DimensionScore(
                score=float(item["score"]),
                weight=float(item["weight"]),
                description=str(item.get("description", "")),
            )
            for name, item in (data.get("breakdown") or {}).items()
        }
        return cls(
            score=int(data["score"]),
            primary_reason=str(data.get("primary_reason", "")),
            breakdown=breakdown,
        )


@dataclass(frozen=True)
class GeoMatch:
    """A candidate paired with its distance from the query center."""

    candidate: Listing
    distance_km: float | None = None


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate with its compatibility result."""

    listing: Listing
    match: MatchResult
    distance_km: float | None = None


@dataclass(frozen=True)
class RankedCandidate:
    """A candidate ready for ranking: boosted score plus ordering flags."""

    candidate_id: str
    score: int
    distance_km: float | None = None
    priority: bool = False
    tier: PremiumTier = PremiumTier.NONE
    match: MatchResult | None = None
    boost_note: str | None = None
    badges: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not (0 <= self.score <= 100):
            raise ValueError(f"score must be between 0 and 100 (got {self.score})")

    def to_dict(self) -> dict[str, Any]:
        return {
            "candidate_id": self.candidate_id,
            "score": self.score,
            "distance_km": self.distance_km,
            "priority": self.priority,
            "tier": self.tier.value,
            "match": self.match.to_dict() if self.match is not None else None,
            "boost_note": self.boost_note,
            "badges": list(self.badges),
        }


@dataclass(frozen=True)
class Pagination:
    """Page bookkeeping returned alongside a ranked slice."""

    page: int
    limit: int
    total_count: int
    total_pages: int

    def to_dict(self) -> dict[str, int]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total_count": self.total_count,
            "total_pages": self.total_pages,
        }


@dataclass(frozen=True)
class RankedPage:
    """One page of ranked candidates."""

    items: list[RankedCandidate]
    pagination: Pagination

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "pagination": self.pagination.to_dict(),
        }
