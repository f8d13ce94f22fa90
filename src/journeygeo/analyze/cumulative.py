# journeygeo/analyze/cumulative.py
"""
Cross-journey map analysis: heat map, boundaries, hesitation clusters,
furthest point from home and the cumulative stats card.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from journeygeo.analyze.metrics import WINDOW_LAST_WEEK, filter_window
from journeygeo.analyze.safe_area import DEFAULT_GRID_SIZE_M, compute_safe_area, grid_cells
from journeygeo.geometry.hull import convex_hull, polygon_area_m2
from journeygeo.geometry.primitives import centroid, distance_meters
from journeygeo.models import Coordinate, Journey, SafeAreaPoint

HEAT_MAP_GRID_M = 100.0
HESITATION_CLUSTER_RADIUS_M = 50.0
BOUNDARY_ROUND_DIGITS = 4


@dataclass(frozen=True)
class HeatMapCell:
    center: Coordinate
    bounds: tuple[Coordinate, Coordinate]  # (south-west, north-east)
    count: int
    intensity: float  # count / busiest cell count, in (0, 1]

    @property
    def band(self) -> str:
        if self.intensity > 0.7:
            return "red"
        if self.intensity > 0.4:
            return "orange"
        if self.intensity > 0.2:
            return "yellow"
        return "green"


@dataclass(frozen=True)
class HesitationCluster:
    center: Coordinate
    count: int
    total_duration: float  # seconds


@dataclass(frozen=True)
class FurthestPoint:
    home: Coordinate
    coordinate: Coordinate
    distance: float  # meters


@dataclass(frozen=True)
class CumulativeStats:
    total_journeys: int
    total_distance: float
    total_duration: int
    furthest_distance: float
    safe_area_size: float  # square meters
    total_hesitations: int
    avg_journey_duration: int
    anxiety_free_percentage: float


def _all_coordinates(journeys: Iterable[Journey]) -> list[Coordinate]:
    return [p.coordinate for j in journeys for p in j.path]


def heat_map(journeys: Iterable[Journey], grid_size_m: float = HEAT_MAP_GRID_M) -> list[HeatMapCell]:
    coords = _all_coordinates(journeys)
    if not coords:
        return []

    cells, (min_lat, min_lon, deg_lat, deg_lon) = grid_cells(coords, grid_size_m)
    max_count = max(len(members) for members in cells.values())

    result: list[HeatMapCell] = []
    for (lat_i, lon_i) in sorted(cells):
        count = len(cells[(lat_i, lon_i)])
        south = min_lat + lat_i * deg_lat
        west = min_lon + lon_i * deg_lon
        result.append(HeatMapCell(
            center=Coordinate(south + deg_lat / 2.0, west + deg_lon / 2.0),
            bounds=(Coordinate(south, west), Coordinate(south + deg_lat, west + deg_lon)),
            count=count,
            intensity=count / max_count,
        ))
    return result


def _rounded_hull(coords: Sequence[Coordinate]) -> Optional[list[Coordinate]]:
    unique: dict[tuple[float, float], Coordinate] = {}
    for c in coords:
        key = (round(c.latitude, BOUNDARY_ROUND_DIGITS), round(c.longitude, BOUNDARY_ROUND_DIGITS))
        unique.setdefault(key, Coordinate(*key))

    if len(unique) < 3:
        return None
    hull = convex_hull(list(unique.values()))
    return hull if len(hull) >= 3 else None


def boundary_polygon(journeys: Iterable[Journey]) -> Optional[list[Coordinate]]:
    """Hull around everywhere ever walked, on a ~11 m rounding grid."""
    return _rounded_hull(_all_coordinates(journeys))


def last_week_boundary_polygon(
        journeys: Iterable[Journey],
        now: Optional[dt.datetime] = None,
) -> Optional[list[Coordinate]]:
    """Same as boundary_polygon, over journeys started 7 to 14 days before `now`."""
    return _rounded_hull(_all_coordinates(filter_window(journeys, WINDOW_LAST_WEEK, now)))


def cluster_hesitations(
        journeys: Iterable[Journey],
        radius_m: float = HESITATION_CLUSTER_RADIUS_M,
) -> list[HesitationCluster]:
    """
    Greedy clustering: each unclaimed hesitation seeds a cluster and claims every
    other unclaimed hesitation within `radius_m` of the seed.
    """
    hesitations = [h for j in journeys for h in j.hesitation_points]
    claimed: set[int] = set()
    clusters: list[HesitationCluster] = []

    for i, seed in enumerate(hesitations):
        if i in claimed:
            continue
        claimed.add(i)
        members = [seed]
        for k, other in enumerate(hesitations):
            if k in claimed:
                continue
            if distance_meters(seed.coordinate, other.coordinate) <= radius_m:
                members.append(other)
                claimed.add(k)

        clusters.append(HesitationCluster(
            center=centroid([m.coordinate for m in members]),
            count=len(members),
            total_duration=sum(m.duration for m in members),
        ))

    return clusters


def furthest_point(journeys: Iterable[Journey]) -> Optional[FurthestPoint]:
    """
    Furthest recorded point from "home", the mean of every journey's first point.
    """
    journeys = list(journeys)
    starts = [j.path[0].coordinate for j in journeys if j.path]
    coords = _all_coordinates(journeys)
    if not starts or not coords:
        return None

    home = centroid(starts)
    best: Optional[Coordinate] = None
    best_distance = 0.0
    for c in coords:
        d = distance_meters(home, c)
        if d > best_distance:
            best_distance = d
            best = c

    if best is None:
        return None
    return FurthestPoint(home=home, coordinate=best, distance=best_distance)


def cumulative_stats(
        journeys: Iterable[Journey],
        safe_area_points: Iterable[SafeAreaPoint] = (),
        safe_area_grid_m: float = DEFAULT_GRID_SIZE_M,
) -> CumulativeStats:
    journeys = list(journeys)
    total = len(journeys)
    total_duration = sum(j.duration for j in journeys)

    calm = sum(
        1 for j in journeys
        if not any(c.feeling.is_distressed for c in j.checkpoints)
    )

    furthest = furthest_point(journeys)
    safe_area = compute_safe_area(safe_area_points, safe_area_grid_m)
    area = polygon_area_m2(safe_area) if safe_area else None

    return CumulativeStats(
        total_journeys=total,
        total_distance=sum((j.distance for j in journeys), 0.0),
        total_duration=total_duration,
        furthest_distance=furthest.distance if furthest else 0.0,
        safe_area_size=area or 0.0,
        total_hesitations=sum(len(j.hesitation_points) for j in journeys),
        avg_journey_duration=total_duration // total if total else 0,
        anxiety_free_percentage=calm / total * 100.0 if total else 0.0,
    )
