"""Great-circle distance and radius filtering."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from jobmate.matching.models import DistanceFilter, GeoMatch, GeoPoint, Listing

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


def haversine_km(
    a: GeoPoint, b: GeoPoint, *, earth_radius_km: float = EARTH_RADIUS_KM
) -> float:
    """Return the Haversine distance between two points in kilometers."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push h a hair above 1 for antipodal points.
    h = min(1.0, h)
    return earth_radius_km * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def filter_by_distance(
    candidates: Iterable[Listing],
    distance_filter: DistanceFilter | None,
    *,
    earth_radius_km: float = EARTH_RADIUS_KM,
) -> list[GeoMatch]:
    """Keep candidates within the filter radius, paired with their distance.

    With no filter this is a pass-through and every distance is None. With a
    filter, candidates lacking valid coordinates are excluded.
    """
    if distance_filter is None:
        return [GeoMatch(candidate=candidate) for candidate in candidates]

    matches: list[GeoMatch] = []
    missing_position = 0
    for candidate in candidates:
        position = candidate.position
        if position is None:
            missing_position += 1
            continue
        distance = haversine_km(
            distance_filter.center, position, earth_radius_km=earth_radius_km
        )
        if distance <= distance_filter.radius_km:
            matches.append(GeoMatch(candidate=candidate, distance_km=distance))

    if missing_position:
        logger.debug(
            f"Excluded {missing_position} candidate(s) without coordinates "
            f"from a {distance_filter.radius_km} km radius query"
        )
    return matches
