"""Pytest configuration and shared fixtures."""

import pytest


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Keep configuration and logging state from leaking between tests."""
    from jobmate.config.settings import reset_settings
    from jobmate.matching.config import reset_matching_config
    from jobmate.utils.logging import reset_logging

    yield
    reset_settings()
    reset_matching_config()
    reset_logging()


@pytest.fixture
def matching_config():
    """Default matching configuration that ignores any local .env file."""
    from jobmate.matching.config import MatchingConfig

    return MatchingConfig(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def requester():
    """Requester criteria with every dimension populated."""
    from jobmate.matching.models import GeoPoint, RequesterCriteria

    return RequesterCriteria(
        requester_id="req-1",
        skills=["plumbing", "pipe repair"],
        location="San Francisco",
        position=GeoPoint(latitude=37.7749, longitude=-122.4194),
        availability=["mon-am", "tue-am"],
        budget_max=100,
        preferred_category="plumbing",
    )


@pytest.fixture
def listing_records() -> list[dict]:
    """Persistence-style listing records around San Francisco."""
    return [
        {
            "id": "sp-near",
            "tags": ["plumbing", "pipe repair"],
            "location": "San Francisco",
            "latitude": 37.7833,
            "longitude": -122.4167,
            "schedule": ["mon-am", "tue-am"],
            "hourlyRate": 80,
            "categoryId": "plumbing",
            "premiumLevel": "none",
            "averageRating": 4.5,
        },
        {
            "id": "sp-elite",
            "tags": ["electrical"],
            "location": "Oakland",
            "latitude": 37.8044,
            "longitude": -122.2712,
            "schedule": ["fri-pm"],
            "hourlyRate": 200,
            "categoryId": "electrical",
            "premiumLevel": "elite",
            "averageRating": 3.0,
        },
        {
            "id": "sp-far",
            "tags": ["plumbing"],
            "location": "Los Angeles",
            "latitude": 34.0522,
            "longitude": -118.2437,
            "schedule": ["mon-am"],
            "hourlyRate": 90,
            "categoryId": "plumbing",
            "premiumLevel": "pro",
            "averageRating": 4.9,
        },
        {
            "id": "sp-nowhere",
            "tags": ["plumbing"],
            "location": "San Francisco",
            "schedule": ["mon-am"],
            "hourlyRate": 70,
            "categoryId": "plumbing",
        },
    ]
