# journeygeo/analyze/metrics.py
"""
Journey metrics: unit-aware labels and rollups over journey collections.

Rollups are always a fresh pass over the full collection.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterable, Optional

from journeygeo.models import Journey, as_utc

METERS_PER_MILE = 1609.34
METERS_PER_KM = 1000.0
NO_PACE = "--:--"

WINDOW_ALL_TIME = "allTime"
WINDOW_7D = "7d"
WINDOW_LAST_WEEK = "lastWeek"
WINDOWS = (WINDOW_ALL_TIME, WINDOW_7D, WINDOW_LAST_WEEK)


@dataclass(frozen=True)
class JourneyMetrics:
    distance_label: str
    duration_label: str
    pace_label: str


@dataclass(frozen=True)
class Rollup:
    count: int
    distance: float   # meters
    duration: int     # seconds
    checkpoint_count: int


def _unit_distance(meters: float, miles: bool) -> float:
    return meters / METERS_PER_MILE if miles else meters / METERS_PER_KM


def format_distance(meters: float, miles: bool = False, precision: int = 2) -> str:
    """'1.00 km' / '1.00 mi'. Summary cards use precision=1."""
    unit = "mi" if miles else "km"
    return f"{_unit_distance(meters, miles):.{precision}f} {unit}"


def format_duration(seconds: int) -> str:
    """'Xh Ym' past sixty minutes, otherwise 'Xm Ys'."""
    seconds = int(seconds)
    minutes, secs = divmod(seconds, 60)
    if minutes > 60:
        hours, mins = divmod(minutes, 60)
        return f"{hours}h {mins}m"
    return f"{minutes}m {secs}s"


def format_duration_compact(seconds: int) -> str:
    """'Xh Ym' from one hour up, otherwise 'Xm'."""
    seconds = int(seconds)
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_pace(duration_s: float, distance_m: float, miles: bool = False) -> str:
    """Minutes:seconds per km (or mile); NO_PACE if duration or distance is zero."""
    if duration_s <= 0 or distance_m <= 0:
        return NO_PACE

    pace = duration_s / 60.0 / _unit_distance(distance_m, miles)
    pace_min = int(pace)
    pace_sec = int((pace - pace_min) * 60)
    return f"{pace_min}:{pace_sec:02d}"


def journey_metrics(journey: Journey, miles: bool = False) -> JourneyMetrics:
    return JourneyMetrics(
        distance_label=format_distance(journey.distance, miles),
        duration_label=format_duration(journey.duration),
        pace_label=format_pace(journey.duration, journey.distance, miles),
    )


def filter_window(
        journeys: Iterable[Journey],
        window: str = WINDOW_ALL_TIME,
        now: Optional[dt.datetime] = None,
) -> list[Journey]:
    """
    Select the journeys that fall in `window`.

      allTime  : everything
      7d       : start_time >= now - 7 days
      lastWeek : now - 14 days <= start_time < now - 7 days

    Naive `now` and naive start times are compared as UTC.
    """
    if window not in WINDOWS:
        raise ValueError(f"Unknown rollup window {window!r}; expected one of {WINDOWS}")

    journeys = list(journeys)
    if window == WINDOW_ALL_TIME:
        return journeys

    now = dt.datetime.now(dt.timezone.utc) if now is None else as_utc(now)
    seven_days_ago = now - dt.timedelta(days=7)

    if window == WINDOW_7D:
        return [j for j in journeys if as_utc(j.start_time) >= seven_days_ago]

    fourteen_days_ago = now - dt.timedelta(days=14)
    return [j for j in journeys if fourteen_days_ago <= as_utc(j.start_time) < seven_days_ago]


def rollup(
        journeys: Iterable[Journey],
        window: str = WINDOW_ALL_TIME,
        now: Optional[dt.datetime] = None,
) -> Rollup:
    selected = filter_window(journeys, window, now)
    return Rollup(
        count=len(selected),
        distance=sum((j.distance for j in selected), 0.0),
        duration=sum(j.duration for j in selected),
        checkpoint_count=sum(len(j.checkpoints) for j in selected),
    )
