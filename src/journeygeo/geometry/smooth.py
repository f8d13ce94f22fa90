# journeygeo/geometry/smooth.py
"""
Catmull-Rom path smoothing for display.

The output is a derived sequence; stored journey paths are never replaced
with it.
"""

from __future__ import annotations

from typing import Sequence

from journeygeo.models import Coordinate

DEFAULT_SEGMENTS_PER_POINT = 5


def _catmull_rom(p0: float, p1: float, p2: float, p3: float, t: float) -> float:
    t2 = t * t
    t3 = t2 * t
    return 0.5 * (
        (2.0 * p1)
        + (-p0 + p2) * t
        + (2.0 * p0 - 5.0 * p1 + 4.0 * p2 - p3) * t2
        + (-p0 + 3.0 * p1 - 3.0 * p2 + p3) * t3
    )


def smooth_path(
        points: Sequence[Coordinate],
        segments_per_point: int = DEFAULT_SEGMENTS_PER_POINT,
) -> list[Coordinate]:
    """
    Interpolate `segments_per_point` samples ending at each point after the first.

    Control points for index i are points[i-2], points[i-1], points[i],
    points[i+1], clamped to the ends of the sequence. Latitude and longitude
    are interpolated independently.

    Inputs of two points or fewer come back unchanged (as a list).
    """
    if len(points) <= 2:
        return list(points)

    last = len(points) - 1
    smoothed: list[Coordinate] = [points[0]]

    for i in range(1, len(points)):
        p0 = points[max(0, i - 2)]
        p1 = points[max(0, i - 1)]
        p2 = points[i]
        p3 = points[min(last, i + 1)]

        for k in range(1, segments_per_point + 1):
            t = k / segments_per_point
            smoothed.append(Coordinate(
                latitude=_catmull_rom(p0.latitude, p1.latitude, p2.latitude, p3.latitude, t),
                longitude=_catmull_rom(p0.longitude, p1.longitude, p2.longitude, p3.longitude, t),
            ))

    return smoothed
