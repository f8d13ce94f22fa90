import datetime as dt
import math

import pytest

from journeygeo.analyze.targets import (
    analyze_target_completions,
    completion_summary,
    format_wait_time,
    reached_targets,
)


def test_straight_line_walk_reaches_midpoint_target(make_journey, make_plan, straight_line_coords, start_time):
    journey = make_journey(straight_line_coords, duration=600)
    plan = make_plan({"at": (0.0, 0.0005), "wait": 60})

    [c] = analyze_target_completions(journey, plan)

    assert c.was_reached
    assert c.min_distance < 30.0
    assert c.index == 0
    assert c.time_reached in (
        start_time + dt.timedelta(seconds=240),
        start_time + dt.timedelta(seconds=300),
    )
    # Samples 3..6 lie within 30 m of the target.
    assert c.estimated_wait_time == pytest.approx(20.0)


def test_wait_time_capped_at_plan(make_journey, make_plan, straight_line_coords):
    journey = make_journey(straight_line_coords)
    plan = make_plan({"at": (0.0, 0.0005), "wait": 10})

    [c] = analyze_target_completions(journey, plan)

    assert c.estimated_wait_time == 10


def test_path_through_target_has_zero_distance(make_journey, make_plan):
    journey = make_journey([(0.0, 0.0), (0.0, 0.0003), (0.0, 0.0006)])
    plan = make_plan({"at": (0.0, 0.0003)})

    [c] = analyze_target_completions(journey, plan)

    assert c.min_distance == pytest.approx(0.0, abs=1e-6)
    assert c.was_reached


def test_empty_path_reaches_nothing(make_journey, make_plan):
    journey = make_journey([])
    plan = make_plan({"at": (0.0, 0.0)}, {"at": (1.0, 1.0)})

    completions = analyze_target_completions(journey, plan)

    assert len(completions) == 2
    for c in completions:
        assert not c.was_reached
        assert math.isinf(c.min_distance)
        assert c.time_reached is None
        assert c.estimated_wait_time == 0


def test_far_target_not_reached(make_journey, make_plan, straight_line_coords):
    journey = make_journey(straight_line_coords)
    plan = make_plan({"at": (0.01, 0.0)})

    [c] = analyze_target_completions(journey, plan)

    assert not c.was_reached
    assert c.min_distance > 1000
    assert c.time_reached is None
    assert c.estimated_wait_time == 0


def test_targets_sorted_and_deleted_skipped(make_journey, make_plan, straight_line_coords):
    journey = make_journey(straight_line_coords)
    plan = make_plan(
        {"name": "Bench", "at": (0.0, 0.001), "order": 2},
        {"name": "Gone", "at": (0.0, 0.0), "order": 0, "deleted": True},
        {"name": "Gate", "at": (0.0, 0.0), "order": 1},
    )

    completions = analyze_target_completions(journey, plan)

    assert [c.target.name for c in completions] == ["Gate", "Bench"]
    assert [c.index for c in completions] == [0, 1]


def test_no_plan_or_targets(make_journey, make_plan, straight_line_coords):
    journey = make_journey(straight_line_coords)
    assert analyze_target_completions(journey, None) == []
    assert analyze_target_completions(journey, make_plan()) == []


def test_custom_radius(make_journey, make_plan, straight_line_coords):
    journey = make_journey(straight_line_coords)
    plan = make_plan({"at": (0.0, 0.0005)})

    [c] = analyze_target_completions(journey, plan, reach_radius_m=5.0)

    assert not c.was_reached


def test_reached_targets_and_summary(make_journey, make_plan, straight_line_coords):
    journey = make_journey(straight_line_coords)
    plan = make_plan({"at": (0.0, 0.0005), "wait": 60}, {"at": (0.01, 0.0)})

    assert reached_targets(journey, plan) == [(0, True), (1, False)]

    summary = completion_summary(analyze_target_completions(journey, plan))
    assert (summary.reached, summary.total) == (1, 2)
    assert summary.total_wait == pytest.approx(20.0)


@pytest.mark.parametrize("seconds, expected", [(0, "0s"), (45, "45s"), (60, "1m 0s"), (125.7, "2m 5s")])
def test_format_wait_time(seconds, expected):
    assert format_wait_time(seconds) == expected
