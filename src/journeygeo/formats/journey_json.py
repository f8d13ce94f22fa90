# journeygeo/formats/journey_json.py
"""
JSON loaders for journeys, exposure plans and safe-area point sets.

Field names follow the sync service's documents:

journey:
    {
      "id": "...",
      "start_time": "2025-10-20T09:00:00Z",
      "end_time": "2025-10-20T09:10:00Z",
      "distance": 850.0,          # meters
      "duration": 600,            # seconds
      "linked_plan_id": "...",    # optional
      "path_points_json": [{"latitude": .., "longitude": .., "timestamp": ".."}],
      "checkpoints_json": [{"id": .., "latitude": .., "longitude": .., "feeling": "Good", "timestamp": ..}],
      "hesitation_points_json": [{"latitude": .., "longitude": .., "start_time": .., "end_time": .., "duration": ..}]
    }

Hesitation entries written by the app use "startTime"/"endTime"; both
spellings are read.

plan:
    {"id": "...", "name": "...", "targets": [{"id", "name", "latitude", "longitude",
      "wait_time_seconds", "order_index", "is_deleted"}]}

safe area:
    [{"latitude": .., "longitude": ..}, ...]   (or {"points": [...]})

This module is format-focused: it turns documents into journeygeo.models
values and raises DataError subclasses for anything it cannot interpret.
"""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

from journeygeo.errors import DataError, InvalidJourneyError, InvalidPlanError
from journeygeo.models import (
    Checkpoint,
    Coordinate,
    ExposurePlan,
    ExposureTarget,
    FeelingLevel,
    HesitationPoint,
    Journey,
    PathPoint,
    SafeAreaPoint,
    as_utc,
)
from journeygeo.util.logging import log

JOURNEY_SUFFIXES = (".json", ".gpx")


def parse_time_utc(text: Any) -> Optional[dt.datetime]:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts a trailing "Z". Naive values are taken as UTC.
    Returns None for empty or unparseable input.
    """
    if not isinstance(text, str):
        return None
    s = text.strip()
    if not s:
        return None
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return as_utc(dt.datetime.fromisoformat(s))
    except ValueError:
        return None


def _require_time(doc: dict[str, Any], key: str, err: type[DataError]) -> dt.datetime:
    value = parse_time_utc(doc.get(key))
    if value is None:
        raise err(f"{key!r} missing or not an ISO-8601 timestamp: {doc.get(key)!r}")
    return value


def _coordinate(doc: dict[str, Any], err: type[DataError]) -> Coordinate:
    try:
        return Coordinate(latitude=float(doc["latitude"]), longitude=float(doc["longitude"]))
    except KeyError as e:
        raise err(f"coordinate missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise err(f"coordinate not numeric: {doc!r}") from e


def journey_from_dict(doc: dict[str, Any]) -> Journey:
    if not isinstance(doc, dict):
        raise InvalidJourneyError(f"journey document must be an object, got {type(doc).__name__}")

    start = _require_time(doc, "start_time", InvalidJourneyError)
    end = parse_time_utc(doc.get("end_time")) or start

    try:
        duration = int(doc.get("duration", 0) or 0)
        distance = float(doc.get("distance", 0.0) or 0.0)
    except (TypeError, ValueError) as e:
        raise InvalidJourneyError(f"duration/distance not numeric in journey {doc.get('id')!r}") from e

    path = tuple(
        PathPoint(_coordinate(p, InvalidJourneyError), parse_time_utc(p.get("timestamp")))
        for p in doc.get("path_points_json") or []
    )

    checkpoints = tuple(
        Checkpoint(
            id=str(c.get("id", "")),
            coordinate=_coordinate(c, InvalidJourneyError),
            feeling=FeelingLevel.parse(c.get("feeling")),
            timestamp=parse_time_utc(c.get("timestamp")) or start,
        )
        for c in doc.get("checkpoints_json") or []
    )

    hesitations: list[HesitationPoint] = []
    for h in doc.get("hesitation_points_json") or []:
        h_start = parse_time_utc(h.get("start_time", h.get("startTime"))) or start
        h_end = parse_time_utc(h.get("end_time", h.get("endTime"))) or h_start
        try:
            h_duration = float(h.get("duration", (h_end - h_start).total_seconds()))
        except (TypeError, ValueError) as e:
            raise InvalidJourneyError(f"hesitation duration not numeric: {h!r}") from e
        hesitations.append(HesitationPoint(
            coordinate=_coordinate(h, InvalidJourneyError),
            start_time=h_start,
            end_time=h_end,
            duration=h_duration,
        ))

    plan_id = doc.get("linked_plan_id")
    return Journey(
        id=str(doc.get("id", "")),
        start_time=start,
        end_time=end,
        duration=duration,
        distance=distance,
        path=path,
        checkpoints=checkpoints,
        hesitation_points=tuple(hesitations),
        linked_plan_id=str(plan_id) if plan_id else None,
    )


def plan_from_dict(doc: dict[str, Any]) -> ExposurePlan:
    if not isinstance(doc, dict):
        raise InvalidPlanError(f"plan document must be an object, got {type(doc).__name__}")

    targets: list[ExposureTarget] = []
    for t in doc.get("targets") or []:
        try:
            targets.append(ExposureTarget(
                id=str(t.get("id", "")),
                name=str(t.get("name", "")),
                coordinate=_coordinate(t, InvalidPlanError),
                order_index=int(t.get("order_index", 0)),
                wait_time_seconds=int(t.get("wait_time_seconds", 0) or 0),
                is_deleted=bool(t.get("is_deleted", False)),
            ))
        except (TypeError, ValueError) as e:
            raise InvalidPlanError(f"target not well-formed: {t!r}") from e

    return ExposurePlan(
        id=str(doc.get("id", "")),
        name=str(doc.get("name", "")),
        targets=tuple(targets),
    )


def _read_json(path: Path, err: type[DataError]) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise err(f"{path}: invalid JSON ({e})") from e


def load_journey(path: Path) -> Journey:
    """Load a journey from a JSON document or a GPX track."""
    path = Path(path)
    if path.suffix.lower() == ".gpx":
        from journeygeo.formats.gpx import journey_from_gpx
        return journey_from_gpx(path)
    try:
        return journey_from_dict(_read_json(path, InvalidJourneyError))
    except InvalidJourneyError as e:
        raise InvalidJourneyError(f"{path}: {e}") from e


def load_journeys(paths: Iterable[Path], *, skip_invalid: bool = False) -> list[Journey]:
    """
    Load several journeys in order.

    With skip_invalid, unreadable documents are logged and left out instead
    of aborting the whole batch.
    """
    journeys: list[Journey] = []
    for p in paths:
        try:
            journeys.append(load_journey(p))
        except DataError as e:
            if not skip_invalid:
                raise
            log(f"Skipping {p}: {e}", err=True)
    return journeys


def iter_journey_files(root: Path) -> Iterator[Path]:
    """Yield journey documents (*.json, *.gpx) under root, sorted."""
    root = Path(root).expanduser()
    if not root.is_dir():
        return
    for p in sorted(root.rglob("*")):
        if p.is_file() and p.suffix.lower() in JOURNEY_SUFFIXES:
            yield p


def load_plan(path: Path) -> ExposurePlan:
    path = Path(path)
    try:
        return plan_from_dict(_read_json(path, InvalidPlanError))
    except InvalidPlanError as e:
        raise InvalidPlanError(f"{path}: {e}") from e


def find_plan(plans_dir: Path, plan_id: str) -> Optional[ExposurePlan]:
    """Look up a plan by id among <plans_dir>/*.json; None if absent."""
    plans_dir = Path(plans_dir).expanduser()
    if not plans_dir.is_dir():
        return None
    candidate = plans_dir / f"{plan_id}.json"
    if candidate.is_file():
        return load_plan(candidate)
    for p in sorted(plans_dir.glob("*.json")):
        plan = load_plan(p)
        if plan.id == plan_id:
            return plan
    return None


def load_safe_area_points(path: Path) -> list[SafeAreaPoint]:
    """Load the append-only safe-area point set; a missing file is an empty set."""
    path = Path(path)
    if not path.is_file():
        return []
    doc = _read_json(path, InvalidJourneyError)
    if isinstance(doc, dict):
        doc = doc.get("points") or []
    if not isinstance(doc, list):
        raise InvalidJourneyError(f"{path}: safe-area document must be a list of points")
    return [SafeAreaPoint(_coordinate(p, InvalidJourneyError)) for p in doc]
