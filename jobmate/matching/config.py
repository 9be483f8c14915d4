"""Configuration settings for the matching engine."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jobmate.matching.models import DIMENSIONS


class MatchingConfig(BaseSettings):
    """Matching engine configuration settings.

    All settings have sensible defaults and can be overridden via
    environment variables with `MATCHING_` prefix or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="MATCHING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Dimension weights (static configuration, normalised by their sum)
    weight_skills: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.30,
        description="Weight for skill/tag overlap",
    )
    weight_location: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.15,
        description="Weight for location text match",
    )
    weight_availability: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.10,
        description="Weight for schedule overlap",
    )
    weight_price: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.20,
        description="Weight for price vs budget",
    )
    weight_category: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.15,
        description="Weight for preferred category match",
    )
    weight_reputation: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.10,
        description="Weight for creator reputation",
    )

    # Pagination
    default_page_limit: Annotated[int, Field(gt=0)] = Field(
        default=10,
        description="Page size used when a query does not set one",
    )
    max_page_limit: Annotated[int, Field(gt=0)] = Field(
        default=100,
        description="Largest page size a query may request",
    )

    # Batch scoring
    max_workers: Annotated[int, Field(ge=1)] = Field(
        default=1,
        description="Worker threads for batch scoring (1 = score inline)",
    )

    # Geo
    earth_radius_km: Annotated[float, Field(gt=0.0)] = Field(
        default=6371.0,
        description="Earth radius used by the Haversine distance",
    )

    @model_validator(mode="after")
    def validate_page_limits(self) -> MatchingConfig:
        """Ensure the default page size fits under the maximum."""
        if self.default_page_limit > self.max_page_limit:
            raise ValueError(
                "default_page_limit must not exceed max_page_limit "
                f"(default_page_limit={self.default_page_limit}, "
                f"max_page_limit={self.max_page_limit})."
            )
        return self

    def weights(self) -> dict[str, float]:
        """Return dimension weights in evaluation order."""
        return {name: getattr(self, f"weight_{name}") for name in DIMENSIONS}


# Singleton instance for easy import
_matching_config: MatchingConfig | None = None


def get_matching_config() -> MatchingConfig:
    """Get the matching configuration singleton."""
    global _matching_config
    if _matching_config is None:
        _matching_config = MatchingConfig()
    return _matching_config


def reset_matching_config() -> None:
    """Reset the matching configuration singleton (useful for testing)."""
    global _matching_config
    _matching_config = None
