# journeygeo/geometry/hull.py
"""
Convex hull (Andrew's monotone chain) and polygon area over lat/lon points.
"""

from __future__ import annotations

from typing import Optional, Sequence

from journeygeo.geometry.primitives import centroid, cross_product, meters_per_degree
from journeygeo.models import Coordinate


def _half_hull(points: Sequence[Coordinate]) -> list[Coordinate]:
    chain: list[Coordinate] = []
    for point in points:
        # Collinear (== 0) points are dropped as well as right turns.
        while len(chain) >= 2 and cross_product(chain[-2], chain[-1], point) <= 0:
            chain.pop()
        chain.append(point)
    return chain


def convex_hull(points: Sequence[Coordinate]) -> list[Coordinate]:
    """
    Return hull vertices of `points`.

    Points are sorted by (longitude, latitude). With fewer than 3 inputs the
    points are returned unchanged. The result can still have fewer than 3
    vertices for collinear or duplicate-heavy input; callers decide whether
    that counts as a polygon.
    """
    if len(points) < 3:
        return list(points)

    ordered = sorted(points, key=lambda c: (c.longitude, c.latitude))
    lower = _half_hull(ordered)
    upper = _half_hull(list(reversed(ordered)))

    # Each chain ends where the other begins.
    return lower[:-1] + upper[:-1]


def polygon_area_m2(polygon: Sequence[Coordinate]) -> Optional[float]:
    """
    Approximate area of a lat/lon polygon in square meters.

    Shoelace area in degree space, scaled by the local meters-per-degree at
    the polygon's mean latitude. Returns None below 3 vertices.
    """
    n = len(polygon)
    if n < 3:
        return None

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += polygon[i].longitude * polygon[j].latitude
        area -= polygon[j].longitude * polygon[i].latitude
    area = abs(area) / 2.0

    m_lat, m_lon = meters_per_degree(centroid(list(polygon)).latitude)
    return area * m_lat * m_lon
