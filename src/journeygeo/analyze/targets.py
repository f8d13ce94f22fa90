# journeygeo/analyze/targets.py
"""
Match an exposure plan's targets against the path actually walked.

Path points carry no usable per-point time here, so the time a target was
reached is reconstructed from the closest point's index, assuming samples
are spread evenly over the journey's duration. Dwell time assumes one sample
every `sample_interval_s` seconds.
"""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from typing import Optional

from journeygeo.geometry.primitives import distance_meters
from journeygeo.models import ExposurePlan, Journey, TargetCompletion

# Wider than the live geofence (10-20 m) to absorb GPS drift.
REACH_RADIUS_M = 30.0
DWELL_WINDOW = 10
SAMPLE_INTERVAL_S = 5.0


@dataclass(frozen=True)
class CompletionSummary:
    reached: int
    total: int
    total_wait: float  # seconds


def analyze_target_completions(
        journey: Journey,
        plan: Optional[ExposurePlan],
        *,
        reach_radius_m: float = REACH_RADIUS_M,
        dwell_window: int = DWELL_WINDOW,
        sample_interval_s: float = SAMPLE_INTERVAL_S,
) -> list[TargetCompletion]:
    """
    One TargetCompletion per non-deleted target, in order_index order.

    For each target:
      - min_distance: closest approach over the whole path (first index wins ties)
      - time_reached: start_time + index / len(path) * duration
      - was_reached: min_distance <= reach_radius_m
      - estimated_wait_time: points within the radius in
        [index - dwell_window, index + dwell_window), times sample_interval_s,
        capped at the target's planned wait

    An empty path leaves every target unreached with min_distance = inf.
    """
    if plan is None:
        return []

    path = journey.coordinates
    n = len(path)
    completions: list[TargetCompletion] = []

    for index, target in enumerate(plan.active_targets()):
        min_distance = math.inf
        closest: Optional[int] = None

        for i, point in enumerate(path):
            d = distance_meters(target.coordinate, point)
            if d < min_distance:
                min_distance = d
                closest = i

        was_reached = min_distance <= reach_radius_m
        time_reached: Optional[dt.datetime] = None
        wait = 0.0

        if was_reached and closest is not None:
            offset = closest * journey.duration / n
            time_reached = journey.start_time + dt.timedelta(seconds=offset)

            lo = max(0, closest - dwell_window)
            hi = min(n, closest + dwell_window)
            near = sum(
                1 for p in path[lo:hi]
                if distance_meters(target.coordinate, p) <= reach_radius_m
            )
            wait = min(near * sample_interval_s, float(target.wait_time_seconds))

        completions.append(TargetCompletion(
            target=target,
            index=index,
            was_reached=was_reached,
            min_distance=min_distance,
            time_reached=time_reached,
            estimated_wait_time=wait,
        ))

    return completions


def reached_targets(
        journey: Journey,
        plan: Optional[ExposurePlan],
        reach_radius_m: float = REACH_RADIUS_M,
) -> list[tuple[int, bool]]:
    """(index, reached) per active target: reached if any path point is within the radius."""
    if plan is None:
        return []
    path = journey.coordinates
    return [
        (index, any(distance_meters(t.coordinate, p) <= reach_radius_m for p in path))
        for index, t in enumerate(plan.active_targets())
    ]


def completion_summary(completions: list[TargetCompletion]) -> CompletionSummary:
    return CompletionSummary(
        reached=sum(1 for c in completions if c.was_reached),
        total=len(completions),
        total_wait=sum(c.estimated_wait_time for c in completions),
    )


def format_wait_time(seconds: float) -> str:
    minutes, secs = divmod(int(seconds), 60)
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"
