#!/usr/bin/env python3
"""
journeygeo-summary: rollups and cumulative map analysis over every journey
under the data root.
"""

from __future__ import annotations

import argparse
import datetime as dt
from pathlib import Path

from journeygeo.analyze.cumulative import (
    boundary_polygon,
    cluster_hesitations,
    cumulative_stats,
    heat_map,
)
from journeygeo.analyze.metrics import (
    WINDOW_7D,
    WINDOW_ALL_TIME,
    format_distance,
    format_duration_compact,
    rollup,
)
from journeygeo.analyze.safe_area import compute_safe_area
from journeygeo.config import load_config
from journeygeo.errors import JourneyGeoError
from journeygeo.formats.journey_json import iter_journey_files, load_journeys, load_safe_area_points
from journeygeo.models import safe_area_points
from journeygeo.util.logging import log


def print_rollup(title: str, r, *, miles: bool) -> None:
    print(f"\n{title}")
    print(f"  journeys      : {r.count}")
    print(f"  distance      : {format_distance(r.distance, miles, precision=1)}")
    print(f"  time          : {format_duration_compact(r.duration)}")
    print(f"  checkpoints   : {r.checkpoint_count}")


def main() -> int:
    ap = argparse.ArgumentParser(description="journeygeo: summarize all recorded journeys.")
    ap.add_argument("--data-root", default=None,
                    help="Data root (default: from journeygeo config or ~/Journeys)")
    ap.add_argument("--safe-area", default=None,
                    help="Safe-area point set JSON (default: derived from every journey path).")
    ap.add_argument("--miles", action="store_true", default=None,
                    help="Report distances in miles.")
    ap.add_argument("--plot", default=None,
                    help="Write a PNG of paths, heat map, boundary and safe area to this path.")

    args = ap.parse_args()

    try:
        cfg = load_config()
        if args.data_root:
            data_root = Path(args.data_root).expanduser()
            journeys_dir, safe_area_path = data_root / "journeys", data_root / "safe_area.json"
        else:
            journeys_dir, safe_area_path = cfg.paths.journeys_dir, cfg.paths.safe_area_path
        if args.safe_area:
            safe_area_path = Path(args.safe_area).expanduser()
        miles = cfg.miles if args.miles is None else args.miles
        analysis = cfg.analysis

        journeys = load_journeys(iter_journey_files(journeys_dir), skip_invalid=True)
        log(f"Loaded {len(journeys)} journey(s) from {journeys_dir}")

        points = load_safe_area_points(safe_area_path) or safe_area_points(journeys)

    except JourneyGeoError as e:
        log(f"ERROR: {e}", err=True)
        return 2

    now = dt.datetime.now(dt.timezone.utc)
    print_rollup("Last 7 days", rollup(journeys, WINDOW_7D, now), miles=miles)
    print_rollup("All time", rollup(journeys, WINDOW_ALL_TIME, now), miles=miles)

    stats = cumulative_stats(journeys, points, analysis.safe_area_grid_m)
    print("\nCumulative")
    print(f"  max range     : {format_distance(stats.furthest_distance, miles, precision=1)}")
    print(f"  avg duration  : {format_duration_compact(stats.avg_journey_duration)}")
    print(f"  hesitations   : {stats.total_hesitations}")
    print(f"  anxiety-free  : {stats.anxiety_free_percentage:.0f}%")
    print(f"  safe area     : {stats.safe_area_size:.0f} m^2")

    clusters = cluster_hesitations(journeys, analysis.hesitation_cluster_radius_m)
    if clusters:
        print("\nHesitation hotspots")
        for c in sorted(clusters, key=lambda c: c.count, reverse=True)[:5]:
            print(f"  {c.center.latitude:.5f},{c.center.longitude:.5f}  "
                  f"x{c.count}  {c.total_duration:.0f}s")

    safe_area = compute_safe_area(points, analysis.safe_area_grid_m)
    if safe_area is None:
        print("\nSafe area     : not enough repeated travel yet")
    else:
        print(f"\nSafe area     : {len(safe_area)} vertices")

    if args.plot:
        from journeygeo.visualize.plot import plot_cumulative

        out = plot_cumulative(
            journeys,
            heat_cells=heat_map(journeys, analysis.heat_map_grid_m),
            boundary=boundary_polygon(journeys),
            safe_area=safe_area,
            out_path=Path(args.plot).expanduser(),
        )
        log(f"Wrote plot: {out}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
