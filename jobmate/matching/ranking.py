"""Ranking and pagination of boosted candidates."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import Literal

from jobmate.matching.errors import InvalidParameterError
from jobmate.matching.models import Pagination, RankedCandidate, RankedPage

logger = logging.getLogger(__name__)

SortBy = Literal["rating", "distance", "price"]
SortOrder = Literal["asc", "desc"]

SORT_FIELDS: tuple[str, ...] = ("rating", "distance", "price")
SORT_ORDERS: tuple[str, ...] = ("asc", "desc")


def default_sort_order(sort_by: str) -> str:
    """Nearest first for distance, best first otherwise."""
    return "asc" if sort_by == "distance" else "desc"


def rank_candidates(
    candidates: Iterable[RankedCandidate],
    sort_by: str = "rating",
    sort_order: str | None = None,
) -> list[RankedCandidate]:
    """Order candidates for display.

    Priority candidates always come first. Within each group candidates are
    ordered by distance when ``sort_by`` is "distance" and by score otherwise,
    then by candidate id ascending. Candidates with no distance sort after
    those with one, whatever the order.

    Raises:
        InvalidParameterError: For an unknown sort field or order.
    """
    if sort_by not in SORT_FIELDS:
        raise InvalidParameterError(
            "sort_by", f"expected one of {SORT_FIELDS} (got {sort_by!r})"
        )
    order = sort_order or default_sort_order(sort_by)
    if order not in SORT_ORDERS:
        raise InvalidParameterError(
            "sort_order", f"expected one of {SORT_ORDERS} (got {order!r})"
        )
    sign = -1.0 if order == "desc" else 1.0

    def _key(item: RankedCandidate) -> tuple:
        if sort_by == "distance":
            missing = item.distance_km is None
            secondary = 0.0 if missing else sign * item.distance_km
            return (not item.priority, missing, secondary, item.candidate_id)
        return (not item.priority, False, sign * item.score, item.candidate_id)

    return sorted(candidates, key=_key)


def paginate(items: list[RankedCandidate], page: int, limit: int) -> RankedPage:
    """Slice one 1-indexed page out of a ranked list.

    A page past the end yields an empty slice, not an error.

    Raises:
        InvalidParameterError: If ``page`` < 1 or ``limit`` < 1.
    """
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise InvalidParameterError("page", f"must be an integer >= 1 (got {page!r})")
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidParameterError(
            "limit", f"must be an integer >= 1 (got {limit!r})"
        )

    total_count = len(items)
    total_pages = math.ceil(total_count / limit)
    start = (page - 1) * limit
    window = list(items[start : start + limit])

    if page > total_pages and total_count:
        logger.debug(f"Page {page} is past the last page ({total_pages})")

    return RankedPage(
        items=window,
        pagination=Pagination(
            page=page,
            limit=limit,
            total_count=total_count,
            total_pages=total_pages,
        ),
    )
