"""Grouping of optimized routes by origin store."""

from __future__ import annotations

from typing import Iterable

from .models import GroupedResult, Route


def group(routes: Iterable[Route]) -> GroupedResult:
    """Bucket route stops by the origin store of each route.

    Keys keep the order in which origins are first seen; each bucket holds the
    stops of its routes concatenated in input order. Routes without stops are
    skipped.
    """
    grouped: GroupedResult = {}
    for route in routes:
        if not route.stops:
            continue
        grouped.setdefault(route.origin, []).extend(route.stops)
    return grouped
