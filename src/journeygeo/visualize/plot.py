# journeygeo/visualize/plot.py
"""
Plotting routines for journeygeo

Quick lon/lat scatter plots for checking analysis output by eye. These are
not map renderings (no tiles, no projection).
"""

from pathlib import Path

import matplotlib.pyplot as plt

from journeygeo.geometry.smooth import smooth_path


def _close(polygon):
    return list(polygon) + [polygon[0]]


def plot_journey(journey, completions=None, *, segments_per_point=5, out_path=None):
    """Raw path, smoothed path and plan targets (green reached, red missed)."""
    coords = journey.coordinates
    smoothed = smooth_path(coords, segments_per_point)

    fig, ax = plt.subplots(figsize=(8, 6))
    if coords:
        ax.scatter([c.longitude for c in coords], [c.latitude for c in coords],
                   s=5, c="grey", label="Recorded")
        ax.plot([c.longitude for c in smoothed], [c.latitude for c in smoothed],
                lw=2, c="tab:blue", label="Smoothed")

    for comp in completions or []:
        t = comp.target.coordinate
        ax.scatter([t.longitude], [t.latitude], s=80, marker="*",
                   c="green" if comp.was_reached else "red")
        ax.annotate(f"{comp.index + 1}. {comp.target.name}", (t.longitude, t.latitude),
                    textcoords="offset points", xytext=(5, 5), fontsize=8)

    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_title(f"Journey {journey.id}")
    if coords:
        ax.legend(loc="best")
    return _finish(fig, out_path)


def plot_cumulative(journeys, *, heat_cells=(), boundary=None, safe_area=None, out_path=None):
    """All paths, heat-map cells coloured by band, boundary and safe-area outlines."""
    fig, ax = plt.subplots(figsize=(8, 6))

    for cell in heat_cells:
        sw, ne = cell.bounds
        ax.add_patch(plt.Rectangle(
            (sw.longitude, sw.latitude),
            ne.longitude - sw.longitude,
            ne.latitude - sw.latitude,
            color=cell.band, alpha=0.3, lw=0,
        ))

    for j in journeys:
        coords = j.coordinates
        if len(coords) > 1:
            ax.plot([c.longitude for c in coords], [c.latitude for c in coords],
                    lw=1, c="tab:blue", alpha=0.6)

    if boundary:
        ring = _close(boundary)
        ax.plot([c.longitude for c in ring], [c.latitude for c in ring],
                ls="--", c="purple", label="Boundary")

    if safe_area:
        ring = _close(safe_area)
        ax.fill([c.longitude for c in ring], [c.latitude for c in ring],
                c="green", alpha=0.25, label="Safe area")

    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_title("All journeys")
    ax.autoscale_view()
    if boundary or safe_area:
        ax.legend(loc="best")
    return _finish(fig, out_path)


def _finish(fig, out_path):
    if out_path is None:
        plt.show()
        return None
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=120, bbox_inches="tight")
    plt.close(fig)
    return out_path
