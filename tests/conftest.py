import datetime as dt
from pathlib import Path

import matplotlib
import pytest

from journeygeo.models import Coordinate, ExposurePlan, ExposureTarget, Journey, PathPoint

matplotlib.use("Agg")

START = dt.datetime(2025, 10, 20, 9, 0, tzinfo=dt.timezone.utc)


@pytest.fixture
def sample_gpx_path() -> Path:
    return Path(__file__).parent / "data" / "sample.gpx"


@pytest.fixture
def start_time() -> dt.datetime:
    return START


@pytest.fixture
def make_journey():
    def _make(coords=(), *, start=START, duration=600, distance=0.0, **kwargs) -> Journey:
        return Journey(
            id=kwargs.pop("id", "j1"),
            start_time=start,
            end_time=start + dt.timedelta(seconds=duration),
            duration=duration,
            distance=distance,
            path=tuple(PathPoint(Coordinate(lat, lon)) for lat, lon in coords),
            **kwargs,
        )
    return _make


@pytest.fixture
def straight_line_coords():
    """10 samples walking east along the equator from lon 0 to lon 0.001 (~111 m)."""
    return [(0.0, i * 0.001 / 9) for i in range(10)]


@pytest.fixture
def make_plan():
    def _make(*targets) -> ExposurePlan:
        return ExposurePlan(
            id="plan-1",
            name="Corner shop",
            targets=tuple(
                ExposureTarget(
                    id=f"t{i}",
                    name=t.get("name", f"Target {i}"),
                    coordinate=Coordinate(*t["at"]),
                    order_index=t.get("order", i),
                    wait_time_seconds=t.get("wait", 60),
                    is_deleted=t.get("deleted", False),
                )
                for i, t in enumerate(targets)
            ),
        )
    return _make
