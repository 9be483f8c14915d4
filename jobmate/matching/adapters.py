"""Adapters from persistence-layer record shapes to canonical models.

Requester data arrives in one of two shapes: the legacy flat "User" record
and the newer nested "UserPreferences" record. Each shape has its own
adapter so the scorer only ever sees ``RequesterCriteria``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jobmate.matching.models import Listing, RequesterCriteria, valid_position

_PREFERENCE_KEYS = ("categoryPreferences", "dailyPreferences", "generalPreferences")
_MAIN_CATEGORY_KEYS = ("jobs", "services", "marketplace", "rentals")


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _first_present(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def criteria_from_user(record: Mapping[str, Any]) -> RequesterCriteria:
    """Build criteria from a legacy flat "User" record."""
    preferences = _mapping(record.get("preferences"))
    return RequesterCriteria(
        requester_id=record.get("id"),
        skills=record.get("skills"),
        location=record.get("location"),
        position=valid_position(record.get("latitude"), record.get("longitude")),
        availability=record.get("availability"),
        budget_max=record.get("budget"),
        preferred_category=preferences.get("category"),
    )


def criteria_from_preferences(record: Mapping[str, Any]) -> RequesterCriteria:
    """Build criteria from a nested "UserPreferences" record."""
    category_prefs = _mapping(record.get("categoryPreferences"))
    daily = _mapping(record.get("dailyPreferences"))
    general = _mapping(record.get("generalPreferences"))

    jobs = _mapping(category_prefs.get("jobs"))
    marketplace = _mapping(category_prefs.get("marketplace"))
    services = _mapping(category_prefs.get("services"))

    budget = (
        daily.get("budget") or marketplace.get("maxPrice") or services.get("maxPrice")
    )

    return RequesterCriteria(
        requester_id=record.get("userId"),
        skills=jobs.get("desiredSkills"),
        location=daily.get("location"),
        position=valid_position(daily.get("latitude"), daily.get("longitude")),
        availability=general.get("availability"),
        budget_max=budget,
        preferred_category=_preferred_category(category_prefs, daily),
    )


def _preferred_category(
    category_prefs: Mapping[str, Any], daily: Mapping[str, Any]
) -> str | None:
    if "category" in category_prefs:
        return category_prefs.get("category")
    for key in category_prefs:
        if key in _MAIN_CATEGORY_KEYS:
            return key
    return daily.get("intent")


def criteria_from_record(record: Mapping[str, Any] | RequesterCriteria) -> RequesterCriteria:
    """Pick the adapter matching the record's shape."""
    if isinstance(record, RequesterCriteria):
        return record
    if any(key in record for key in _PREFERENCE_KEYS):
        return criteria_from_preferences(record)
    return criteria_from_user(record)


def listing_from_record(record: Mapping[str, Any] | Listing) -> Listing:
    """Build a Listing from a persistence record (camelCase or snake_case).

    Raises:
        pydantic.ValidationError: If the record has no usable id.
    """
    if isinstance(record, Listing):
        return record

    premium = _mapping(record.get("premium"))
    tier = _first_present(record, "premium_tier", "premiumLevel", "premiumTier")
    if tier is None:
        tier = premium.get("premiumLevel")

    return Listing(
        id=record.get("id"),
        title=record.get("title"),
        tags=record.get("tags"),
        location=record.get("location"),
        latitude=_first_present(record, "latitude", "lat", "location_lat"),
        longitude=_first_present(record, "longitude", "lng", "location_lng"),
        schedule=record.get("schedule"),
        price=_first_present(record, "price", "hourlyRate", "hourly_rate"),
        category=_first_present(record, "category", "categoryId", "category_id"),
        specialist_id=_first_present(
            record, "specialist_id", "specialistId", "creatorId"
        ),
        premium_tier=tier,
        rating=_first_present(record, "rating", "averageRating"),
        completed_jobs=_first_present(record, "completed_jobs", "completedJobs"),
        verified_payment=_first_present(
            record, "verified_payment", "verifiedPayment", "paymentVerified"
        ),
    )
