# journeygeo/models.py
"""
Value types for journeys, exposure plans and derived analysis results.

Everything here is a frozen dataclass: analysis functions take these as
already-loaded input and never mutate them. Sequences are stored as tuples so
a journey's path order cannot be changed after construction.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional


def as_utc(value: dt.datetime) -> dt.datetime:
    """Aware UTC copy of `value`; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


@dataclass(frozen=True)
class Coordinate:
    """WGS84 position in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class PathPoint:
    """
    One recorded GPS sample.

    Position in Journey.path is the temporal order. `timestamp` is kept when
    the source provides one, but analysis estimates time-at-point from the
    index instead of reading it.
    """

    coordinate: Coordinate
    timestamp: Optional[dt.datetime] = None

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude


class FeelingLevel(Enum):
    """
    User-reported emotional state at a checkpoint.

    Default-variant policy: anything `parse` cannot match (unknown strings,
    empty values, None) becomes OKAY. Constructing the enum directly with a
    bad value still raises ValueError; `parse` is the only lenient entry point.
    """

    GREAT = "Great"
    GOOD = "Good"
    OKAY = "Okay"
    ANXIOUS = "Anxious"
    PANIC = "Panic"

    @classmethod
    def default(cls) -> "FeelingLevel":
        return cls.OKAY

    @classmethod
    def parse(cls, raw: object) -> "FeelingLevel":
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return cls.default()
        s = raw.strip().lower()
        for member in cls:
            if s == member.value.lower() or s == member.name.lower():
                return member
        return cls.default()

    @property
    def is_distressed(self) -> bool:
        return self in (FeelingLevel.ANXIOUS, FeelingLevel.PANIC)


@dataclass(frozen=True)
class Checkpoint:
    id: str
    coordinate: Coordinate
    feeling: FeelingLevel
    timestamp: dt.datetime


@dataclass(frozen=True)
class HesitationPoint:
    """A detected pause during tracking (precomputed by the tracker)."""

    coordinate: Coordinate
    start_time: dt.datetime
    end_time: dt.datetime
    duration: float  # seconds


@dataclass(frozen=True)
class Journey:
    """
    A finished tracking session.

    duration is whole seconds, distance is meters, both as recorded by the
    tracker (not recomputed from the path).
    """

    id: str
    start_time: dt.datetime
    end_time: dt.datetime
    duration: int
    distance: float
    path: tuple[PathPoint, ...] = ()
    checkpoints: tuple[Checkpoint, ...] = ()
    hesitation_points: tuple[HesitationPoint, ...] = ()
    linked_plan_id: Optional[str] = None

    @property
    def coordinates(self) -> list[Coordinate]:
        return [p.coordinate for p in self.path]


@dataclass(frozen=True)
class ExposureTarget:
    id: str
    name: str
    coordinate: Coordinate
    order_index: int
    wait_time_seconds: int = 0
    is_deleted: bool = False


@dataclass(frozen=True)
class ExposurePlan:
    id: str
    name: str
    targets: tuple[ExposureTarget, ...] = ()

    def active_targets(self) -> list[ExposureTarget]:
        """Non-deleted targets in planned visiting order."""
        return sorted(
            (t for t in self.targets if not t.is_deleted),
            key=lambda t: t.order_index,
        )


@dataclass(frozen=True)
class TargetCompletion:
    """Derived per-analysis result; never persisted."""

    target: ExposureTarget
    index: int
    was_reached: bool
    min_distance: float
    time_reached: Optional[dt.datetime]
    estimated_wait_time: float


@dataclass(frozen=True)
class SafeAreaPoint:
    coordinate: Coordinate


def safe_area_points(journeys: Iterable[Journey]) -> list[SafeAreaPoint]:
    """One SafeAreaPoint per recorded path point, across every journey."""
    return [SafeAreaPoint(p.coordinate) for j in journeys for p in j.path]
