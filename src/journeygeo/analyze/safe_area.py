# journeygeo/analyze/safe_area.py
"""
Safe-area estimation from the historical path-point cloud.

Raw samples are binned into a fixed-size grid; only cells visited repeatedly
(count >= max(3, 1.5 * average non-empty cell count)) contribute a centroid,
and the hull of those centroids is the safe area. Single passes through an
area therefore never grow the polygon.
"""

from __future__ import annotations

import math
from collections import defaultdict
from typing import Iterable, Optional, Union

from journeygeo.geometry.hull import convex_hull
from journeygeo.geometry.primitives import centroid, meters_per_degree
from journeygeo.models import Coordinate, SafeAreaPoint

DEFAULT_GRID_SIZE_M = 50.0
MIN_CELL_COUNT = 3.0
DENSITY_FACTOR = 1.5


def _as_coordinate(p: Union[SafeAreaPoint, Coordinate]) -> Coordinate:
    return p.coordinate if isinstance(p, SafeAreaPoint) else p


def grid_cells(
        coords: list[Coordinate],
        grid_size_m: float,
) -> tuple[dict[tuple[int, int], list[Coordinate]], tuple[float, float, float, float]]:
    """
    Bin coordinates into a grid anchored at the bounding box's south-west corner.

    Returns (cells, (min_lat, min_lon, deg_lat, deg_lon)) where cells maps
    (lat_index, lon_index) to the member coordinates in input order.
    """
    min_lat = min(c.latitude for c in coords)
    max_lat = max(c.latitude for c in coords)
    min_lon = min(c.longitude for c in coords)

    m_lat, m_lon = meters_per_degree((min_lat + max_lat) / 2.0)
    deg_lat = grid_size_m / m_lat
    deg_lon = grid_size_m / m_lon

    cells: dict[tuple[int, int], list[Coordinate]] = defaultdict(list)
    for c in coords:
        key = (
            math.floor((c.latitude - min_lat) / deg_lat),
            math.floor((c.longitude - min_lon) / deg_lon),
        )
        cells[key].append(c)

    return dict(cells), (min_lat, min_lon, deg_lat, deg_lon)


def intense_travel_points(
        points: Iterable[Union[SafeAreaPoint, Coordinate]],
        grid_size_m: float = DEFAULT_GRID_SIZE_M,
) -> list[Coordinate]:
    """Centroids of the grid cells whose count clears the density threshold."""
    coords = [_as_coordinate(p) for p in points]
    if not coords:
        return []

    cells, _ = grid_cells(coords, grid_size_m)
    avg = sum(len(members) for members in cells.values()) / len(cells)
    threshold = max(MIN_CELL_COUNT, avg * DENSITY_FACTOR)

    return [
        centroid(cells[key])
        for key in sorted(cells)
        if len(cells[key]) >= threshold
    ]


def compute_safe_area(
        points: Iterable[Union[SafeAreaPoint, Coordinate]],
        grid_size_m: float = DEFAULT_GRID_SIZE_M,
) -> Optional[list[Coordinate]]:
    """
    Return the safe-area polygon, or None when the data cannot support one.

    None is returned for fewer than 3 input points, fewer than 3 dense
    cells, or a hull that collapses below 3 vertices.
    """
    coords = [_as_coordinate(p) for p in points]
    if len(coords) < 3:
        return None

    centres = intense_travel_points(coords, grid_size_m)
    if len(centres) < 3:
        return None

    hull = convex_hull(centres)
    if len(hull) < 3:
        return None
    return hull
