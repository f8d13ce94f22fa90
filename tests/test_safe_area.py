import pytest

from journeygeo.analyze.safe_area import compute_safe_area, intense_travel_points
from journeygeo.models import Coordinate, SafeAreaPoint, safe_area_points

CORNERS = [(0.0, 0.0), (0.0, 0.005), (0.005, 0.0), (0.005, 0.005)]


def _four_hotspots():
    """Ten repeats at each corner of a ~550 m square plus sparse one-off samples."""
    pts = []
    for lat, lon in CORNERS:
        pts.extend(SafeAreaPoint(Coordinate(lat, lon)) for _ in range(10))
    for row in (0.002, 0.003):
        pts.extend(SafeAreaPoint(Coordinate(row, k * 0.0006)) for k in range(8))
    return pts


def test_fewer_than_three_points_is_none():
    assert compute_safe_area([]) is None
    assert compute_safe_area([SafeAreaPoint(Coordinate(0, 0))] * 2) is None


def test_dense_single_cell_is_none():
    pts = [SafeAreaPoint(Coordinate(0.0 + (i % 10) * 1e-6, (i // 10) * 1e-6)) for i in range(100)]
    assert compute_safe_area(pts) is None


def test_hotspots_become_polygon():
    polygon = compute_safe_area(_four_hotspots())

    assert polygon is not None
    assert len(polygon) == 4
    got = {(round(c.latitude, 9), round(c.longitude, 9)) for c in polygon}
    assert got == set(CORNERS)


def test_one_off_samples_do_not_qualify():
    centres = intense_travel_points(_four_hotspots())
    assert len(centres) == 4


def test_threshold_never_below_three():
    # Three cells, two samples each: average 2, threshold stays at 3.
    pts = [Coordinate(lat, lon) for lat, lon in CORNERS[:3] for _ in range(2)]
    assert intense_travel_points(pts) == []
    assert compute_safe_area(pts) is None


def test_centroid_is_mean_of_cell_members():
    pts = [Coordinate(0.0, 0.0), Coordinate(0.0001, 0.0001), Coordinate(0.0002, 0.0002)]
    # Two far-off singles pull the average down so the 3-sample cell qualifies.
    pts += [Coordinate(0.01, 0.01), Coordinate(0.02, 0.02)]
    centres = intense_travel_points(pts)
    assert len(centres) == 1
    assert centres[0].latitude == pytest.approx(0.0001)
    assert centres[0].longitude == pytest.approx(0.0001)


def test_safe_area_points_from_journeys(make_journey):
    journeys = [make_journey([(0, 0), (0, 1)]), make_journey([(1, 1)])]
    pts = safe_area_points(journeys)
    assert [p.coordinate for p in pts] == [Coordinate(0, 0), Coordinate(0, 1), Coordinate(1, 1)]
