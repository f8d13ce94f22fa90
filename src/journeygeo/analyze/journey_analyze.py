#!/usr/bin/env python3
"""
journeygeo-analyze: per-journey report.

For each journey (JSON document or GPX track) prints distance, duration and
pace, and, when a plan is given or linked, which targets were reached and
the estimated wait at each.
"""

from __future__ import annotations

import argparse
import math
from pathlib import Path
from typing import Optional

from journeygeo.analyze.metrics import format_distance, journey_metrics
from journeygeo.analyze.targets import (
    analyze_target_completions,
    completion_summary,
    format_wait_time,
)
from journeygeo.config import AnalysisConfig, load_config
from journeygeo.errors import JourneyGeoError
from journeygeo.formats.journey_json import find_plan, iter_journey_files, load_journey, load_plan
from journeygeo.models import ExposurePlan, Journey, TargetCompletion
from journeygeo.util.fzf import fzf_select_paths
from journeygeo.util.logging import log


def print_report(
        path: Path,
        journey: Journey,
        completions: list[TargetCompletion],
        *,
        miles: bool,
        tsv: bool,
) -> None:
    m = journey_metrics(journey, miles)
    summary = completion_summary(completions)

    if tsv:
        print(
            f"{path}\t"
            f"{journey.id}\t"
            f"{len(journey.path)}\t"
            f"{journey.distance:.2f}\t"
            f"{journey.duration}\t"
            f"{m.pace_label}\t"
            f"{summary.reached}/{summary.total}"
        )
        return

    print(f"\n{path}")
    print(f"  journey       : {journey.id}")
    print(f"  points        : {len(journey.path)}")
    print(f"  distance      : {m.distance_label}")
    print(f"  duration      : {m.duration_label}")
    print(f"  pace          : {m.pace_label}")
    print(f"  checkpoints   : {len(journey.checkpoints)}")
    print(f"  hesitations   : {len(journey.hesitation_points)}")
    if not completions:
        return

    print(f"  targets       : {summary.reached}/{summary.total} reached, "
          f"wait {format_wait_time(summary.total_wait)}")
    for c in completions:
        mark = "x" if c.was_reached else " "
        closest = "n/a" if math.isinf(c.min_distance) else format_distance(c.min_distance, miles)
        line = f"    [{mark}] {c.index + 1}. {c.target.name}  closest {closest}"
        if c.was_reached:
            at = c.time_reached.isoformat(timespec="seconds") if c.time_reached else "?"
            line += f"  at {at}  waited {format_wait_time(c.estimated_wait_time)}"
        print(line)


def _resolve_plan(journey: Journey, explicit: Optional[ExposurePlan], plans_dir: Path) -> Optional[ExposurePlan]:
    if explicit is not None:
        return explicit
    if not journey.linked_plan_id:
        return None
    plan = find_plan(plans_dir, journey.linked_plan_id)
    if plan is None:
        log(f"Linked plan {journey.linked_plan_id} not found under {plans_dir}", err=True)
    return plan


def analyze_file(path: Path, plan: Optional[ExposurePlan], plans_dir: Path, analysis: AnalysisConfig):
    journey = load_journey(path)
    completions = analyze_target_completions(
        journey,
        _resolve_plan(journey, plan, plans_dir),
        reach_radius_m=analysis.reach_radius_m,
        dwell_window=analysis.dwell_window,
        sample_interval_s=analysis.sample_interval_s,
    )
    return journey, completions


def main() -> int:
    ap = argparse.ArgumentParser(description="journeygeo: analyze recorded journey(s).")
    ap.add_argument("journeys", nargs="*",
                    help="Journey JSON or GPX files. If omitted, use fzf selection.")
    ap.add_argument("--plan", default=None,
                    help="Exposure plan JSON to check targets against (default: the journey's linked plan).")
    ap.add_argument("--data-root", default=None,
                    help="Data root (default: from journeygeo config or ~/Journeys)")
    ap.add_argument("--miles", action="store_true", default=None,
                    help="Report distances in miles.")
    ap.add_argument("--tsv", action="store_true",
                    help="Print tab-separated output (good for piping).")
    ap.add_argument("--plot-dir", default=None,
                    help="Write <journey-file-stem>.png plots (path, smoothed path, targets) here.")

    args = ap.parse_args()

    try:
        cfg = load_config()
        if args.data_root:
            data_root = Path(args.data_root).expanduser()
            journeys_dir, plans_dir = data_root / "journeys", data_root / "plans"
        else:
            journeys_dir, plans_dir = cfg.paths.journeys_dir, cfg.paths.plans_dir
        miles = cfg.miles if args.miles is None else args.miles

        plan = load_plan(Path(args.plan).expanduser()) if args.plan else None

        if args.journeys:
            selected = [Path(p).expanduser() for p in args.journeys]
        else:
            candidates = list(iter_journey_files(journeys_dir))
            if not candidates:
                log(f"No journey files found under {journeys_dir}", err=True)
                return 2
            selected = fzf_select_paths(
                candidates,
                header="Select journey file(s) to analyze:",
                root=journeys_dir,
                multi=True,
            )

        if args.tsv:
            print("file\tjourney\tpoints\tdistance_m\tduration_s\tpace\ttargets_reached")

        for path in selected:
            if not path.is_file():
                log(f"Skipping (not a file): {path}", err=True)
                continue
            journey, completions = analyze_file(path, plan, plans_dir, cfg.analysis)
            print_report(path, journey, completions, miles=miles, tsv=args.tsv)
            if args.plot_dir:
                from journeygeo.visualize.plot import plot_journey

                out = plot_journey(
                    journey,
                    completions,
                    segments_per_point=cfg.analysis.smoothing_segments,
                    out_path=Path(args.plot_dir).expanduser() / f"{path.stem}.png",
                )
                log(f"Wrote plot: {out}", err=True)

    except JourneyGeoError as e:
        log(f"ERROR: {e}", err=True)
        return 2

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
