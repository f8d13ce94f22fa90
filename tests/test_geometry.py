import pytest

from journeygeo.geometry.hull import convex_hull, polygon_area_m2
from journeygeo.geometry.primitives import cross_product, distance_meters
from journeygeo.geometry.smooth import smooth_path
from journeygeo.models import Coordinate

C = Coordinate


@pytest.mark.parametrize(
    "a, b",
    [
        (C(0.0, 0.0), C(0.0, 1.0)),
        (C(51.5007, -0.1246), C(48.8584, 2.2945)),
        (C(-33.8568, 151.2153), C(-33.8523, 151.2108)),
    ],
)
def test_distance_is_symmetric_and_zero_on_self(a, b):
    assert distance_meters(a, b) == pytest.approx(distance_meters(b, a))
    assert distance_meters(a, a) == 0
    assert distance_meters(a, b) > 0


def test_distance_one_degree_on_equator():
    assert distance_meters(C(0, 0), C(0, 1)) == pytest.approx(111_195, rel=1e-3)


def test_cross_product_sign():
    o, a = C(0, 0), C(1, 0)
    assert cross_product(o, a, C(0, 1)) > 0
    assert cross_product(o, a, C(0, -1)) < 0
    assert cross_product(o, a, C(2, 0)) == 0


@pytest.mark.parametrize("n", [0, 1, 2])
def test_smooth_path_short_inputs_unchanged(n):
    pts = [C(0.0, i * 0.001) for i in range(n)]
    assert smooth_path(pts) == pts


def test_smooth_path_density_and_anchors():
    pts = [C(0.0, 0.0), C(0.001, 0.001), C(0.0, 0.002), C(0.001, 0.003)]
    out = smooth_path(pts)

    assert len(out) == 1 + (len(pts) - 1) * 5
    assert out[0] == pts[0]
    # Every block of interpolated samples ends on the original point (t == 1).
    for i in range(1, len(pts)):
        end = out[i * 5]
        assert end.latitude == pytest.approx(pts[i].latitude)
        assert end.longitude == pytest.approx(pts[i].longitude)


def test_smooth_path_is_deterministic_and_does_not_mutate():
    pts = [C(0.0, 0.0), C(0.0005, 0.0002), C(0.001, 0.0)]
    before = list(pts)
    assert smooth_path(pts, 3) == smooth_path(pts, 3)
    assert pts == before
    assert len(smooth_path(pts, 3)) == 7


def test_smooth_path_stays_on_straight_line():
    pts = [C(0.0, i * 0.001) for i in range(6)]
    for c in smooth_path(pts):
        assert c.latitude == pytest.approx(0.0)


def test_convex_hull_small_inputs():
    assert convex_hull([]) == []
    two = [C(0, 0), C(1, 1)]
    assert convex_hull(two) == two


def test_convex_hull_square_with_interior_points():
    corners = [C(0, 0), C(0, 1), C(1, 1), C(1, 0)]
    interior = [C(0.5, 0.5), C(0.2, 0.7), C(0.9, 0.1), C(0.5, 0.0)]
    pts = interior + corners + [C(1, 1)]

    hull = convex_hull(pts)

    assert set(hull) == set(corners)
    assert len(hull) == 4
    for i in range(len(hull)):
        assert hull[i] != hull[(i + 1) % len(hull)]
    # Every input lies on or inside the hull.
    for i in range(len(hull)):
        a, b = hull[i], hull[(i + 1) % len(hull)]
        for p in pts:
            assert cross_product(a, b, p) >= -1e-12


def test_convex_hull_collinear_collapses():
    pts = [C(0, i) for i in range(5)]
    assert len(convex_hull(pts)) < 3


def test_polygon_area_square_near_equator():
    # ~111.32 m x ~111.32 m
    square = [C(0, 0), C(0.001, 0), C(0.001, 0.001), C(0, 0.001)]
    assert polygon_area_m2(square) == pytest.approx(111.32 ** 2, rel=1e-3)
    assert polygon_area_m2(square[:2]) is None
