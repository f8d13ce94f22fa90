# journeygeo/geometry/primitives.py
"""
Geometry primitives shared by the smoother, hull and analysis modules.
"""

from __future__ import annotations

import math

from haversine import haversine, Unit

from journeygeo.models import Coordinate

# Flat-earth scale used for grid binning and area estimates.
METERS_PER_DEGREE_LAT = 111320.0


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates, spherical earth."""
    return haversine((a.latitude, a.longitude), (b.latitude, b.longitude), unit=Unit.METERS)


def cross_product(o: Coordinate, a: Coordinate, b: Coordinate) -> float:
    """
    Signed area of o-a-b with (lat, lon) treated as planar x/y.

    Only meaningful as an orientation test for the hull builder.
    """
    return ((a.latitude - o.latitude) * (b.longitude - o.longitude)
            - (a.longitude - o.longitude) * (b.latitude - o.latitude))


def meters_per_degree(center_lat: float) -> tuple[float, float]:
    """Return (meters per degree latitude, meters per degree longitude) at center_lat."""
    return METERS_PER_DEGREE_LAT, METERS_PER_DEGREE_LAT * math.cos(math.radians(center_lat))


def centroid(coords: list[Coordinate]) -> Coordinate:
    """Arithmetic mean of a non-empty list of coordinates."""
    n = len(coords)
    return Coordinate(
        latitude=sum(c.latitude for c in coords) / n,
        longitude=sum(c.longitude for c in coords) / n,
    )
