# journeygeo/analyze/plans.py
"""
Plan summaries for list views.
"""

from __future__ import annotations

from journeygeo.analyze.metrics import METERS_PER_KM, METERS_PER_MILE
from journeygeo.geometry.primitives import distance_meters
from journeygeo.models import ExposurePlan

FEET_PER_METER = 3.28084
SHORT_MILES_M = 160.934  # 0.1 mi
SHORT_METRIC_M = 100.0


def planned_route_distance(plan: ExposurePlan) -> float:
    """Straight-line meters between consecutive active targets."""
    targets = plan.active_targets()
    return sum(
        (distance_meters(a.coordinate, b.coordinate) for a, b in zip(targets, targets[1:])),
        0.0,
    )


def _short_distance(meters: float, miles: bool) -> str:
    if miles:
        if meters < SHORT_MILES_M:
            return f"{meters * FEET_PER_METER:.0f} ft"
        return f"{meters / METERS_PER_MILE:.2f} mi"
    if meters < SHORT_METRIC_M:
        return f"{meters:.0f} m"
    return f"{meters / METERS_PER_KM:.2f} km"


def plan_summary(plan: ExposurePlan, miles: bool = False) -> str:
    """e.g. '3 Targets • 1.20 km'."""
    count = len(plan.active_targets())
    if count == 0:
        return "0 Targets"
    plural = "" if count == 1 else "s"
    return f"{count} Target{plural} • {_short_distance(planned_route_distance(plan), miles)}"
