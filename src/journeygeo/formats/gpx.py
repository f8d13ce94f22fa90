# journeygeo/formats/gpx.py
"""
GPX import for journeygeo

Turns a recorded GPX track into a Journey so tracks exported from other
devices can go through the same analysis as app-recorded journeys.

This module is intentionally format-focused:
- GPX namespace handling
- reading ElementTree safely
- extracting ordered trackpoints

A GPX track has no checkpoints, hesitations or plan link; those stay empty.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET

from journeygeo.errors import InvalidGpxError
from journeygeo.formats.journey_json import parse_time_utc
from journeygeo.geometry.primitives import distance_meters
from journeygeo.models import Coordinate, Journey, PathPoint

# GPX 1.1 default namespace
GPX_NS = {"gpx": "http://www.topografix.com/GPX/1/1"}


@dataclass(frozen=True)
class TrackPoint:
    lat: float
    lon: float
    time: Optional[_dt.datetime]
    ele: float | None = None


def read_gpx(path: Path) -> ET.ElementTree:
    """
    Read a GPX file into an ElementTree.

    Raises:
      InvalidGpxError, OSError
    """
    try:
        return ET.parse(path)
    except ET.ParseError as e:
        raise InvalidGpxError(f"{path}: {e}") from e


def extract_trackpoints(tree: ET.ElementTree) -> list[TrackPoint]:
    """Extract ordered trackpoints (with or without <time>) from a GPX tree."""
    root = tree.getroot()
    pts: list[TrackPoint] = []

    for trkpt in root.findall(".//gpx:trkpt", GPX_NS):
        try:
            lat = float(trkpt.get("lat"))
            lon = float(trkpt.get("lon"))
        except (TypeError, ValueError) as e:
            raise InvalidGpxError(f"trkpt without numeric lat/lon: {trkpt.attrib}") from e

        time = parse_time_utc(trkpt.findtext("gpx:time", default="", namespaces=GPX_NS))

        ele_text = (trkpt.findtext("gpx:ele", default="", namespaces=GPX_NS) or "").strip()
        ele = float(ele_text) if ele_text else None

        pts.append(TrackPoint(lat=lat, lon=lon, time=time, ele=ele))

    return pts


def _track_name(tree: ET.ElementTree) -> Optional[str]:
    root = tree.getroot()
    for xpath in ("gpx:trk/gpx:name", "gpx:metadata/gpx:name"):
        name = (root.findtext(xpath, default="", namespaces=GPX_NS) or "").strip()
        if name:
            return name
    return None


def journey_from_gpx(path: Path) -> Journey:
    """
    Build a Journey from a GPX track.

    - id: track name, falling back to the file stem
    - start/end: first and last trackpoint <time>; a track with no times
      gets the file's mtime for both and zero duration
    - distance: summed haversine step length over all trackpoints
    """
    path = Path(path)
    tree = read_gpx(path)
    pts = extract_trackpoints(tree)
    if not pts:
        raise InvalidGpxError(f"{path}: no trackpoints found")

    coords = [Coordinate(p.lat, p.lon) for p in pts]
    distance = sum((distance_meters(a, b) for a, b in zip(coords, coords[1:])), 0.0)

    times = [p.time for p in pts if p.time is not None]
    if times:
        start, end = times[0], times[-1]
    else:
        start = end = _dt.datetime.fromtimestamp(path.stat().st_mtime, tz=_dt.timezone.utc)

    return Journey(
        id=_track_name(tree) or path.stem,
        start_time=start,
        end_time=end,
        duration=max(0, int((end - start).total_seconds())),
        distance=distance,
        path=tuple(PathPoint(c, p.time) for c, p in zip(coords, pts)),
    )
