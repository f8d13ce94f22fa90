"""
journeygeo configuration loader

This module centralizes *all* configuration handling for journeygeo.

Sources:
- Sensible defaults if no config exists.
- Per-machine config, kept out of the repo:
    ~/.config/journeygeo/config.toml
- Repo-local config:
    <repo_root>/config/config.toml
- Environment variable overrides for automation.

Precedence (highest to lowest) for any given value:
1) CLI argument (handled by each command)
2) Environment variables (JOURNEYGEO_*)
3) User config: ~/.config/journeygeo/config.toml
4) Repo config: <repo_root>/config/config.toml
5) Hard defaults (~/Journeys/... paths, analysis constants below)

Sections:
    [paths]     data_root, journeys_dir, plans_dir, safe_area_path
    [analysis]  thresholds used by the analysis modules
    [display]   miles = true|false

The analysis functions themselves never read config; they take plain keyword
arguments with the same defaults. The CLIs are the only place the two meet.

This module uses Python's built-in tomllib on Python 3.11+, or `tomli` otherwise.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

from journeygeo.errors import ConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# ---------------------------------------------------------------------------
# TOML loading helpers
# ---------------------------------------------------------------------------
def _load_toml(path: Path) -> dict[str, Any]:
    """
    Parse a TOML file at `path`.

    Behavior:
    - If the file does not exist, return an empty dict (non-fatal).
    - If the file exists but is invalid TOML, raise ConfigError
      with a clear, user-facing message.
    """
    if not path.is_file():
        return {}

    try:
        return tomllib.loads(path.read_text(encoding="utf-8")) or {}
    except (tomllib.TOMLDecodeError, OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to parse TOML config: {path} ({e})") from e


# ---------------------------------------------------------------------------
# Generic coercion helpers
# ---------------------------------------------------------------------------
def _deep_get(d: dict[str, Any], dotted_key: str) -> Any:
    """
    Fetch nested dictionary values using dot-separated keys.

    Example:
        _deep_get(cfg, "analysis.reach_radius_m")

    Returns None if any part of the path is missing.
    """
    cur: Any = d
    for part in dotted_key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return None
        cur = cur[part]
    return cur


def _as_path(v: Any) -> Optional[Path]:
    """
    Coerce a config value into a pathlib.Path if possible.

    Returns None if value cannot be interpreted as a path.
    """
    if v is None:
        return None
    if isinstance(v, Path):
        return v.expanduser()
    if isinstance(v, str):
        return Path(v).expanduser()
    return None


def _as_bool(v: Any, default: bool) -> bool:
    """
    Coerce loosely-typed config values into booleans.

    Accepts common truthy / falsy representations so that TOML and
    environment variables behave the same way.
    """
    if v is None:
        return default
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("true", "yes", "y", "1", "on"):
            return True
        if s in ("false", "no", "n", "0", "off"):
            return False
    return default


def _as_number(v: Any, key: str, kind: type) -> Any:
    """
    Coerce a config value into int or float.

    Unlike paths and booleans, a bad threshold silently falling back to a
    default would change analysis results, so this raises ConfigError.
    """
    if isinstance(v, bool):
        raise ConfigError(f"{key}: expected a number, got {v!r}")
    try:
        return kind(v)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key}: expected a number, got {v!r}") from e


def _env_path(var: str) -> Optional[Path]:
    """Read an environment variable and interpret it as a Path."""
    val = os.environ.get(var)
    return Path(val).expanduser() if val else None


# ---------------------------------------------------------------------------
# Repo discovery + defaults
# ---------------------------------------------------------------------------
def find_repo_root(start: Path) -> Optional[Path]:
    """
    Walk upward from `start` looking for the journeygeo repo root.

    Heuristic:
    - The presence of a `config/` directory marks the repo root
    """
    start = start.resolve()
    for p in [start] + list(start.parents):
        if (p / "config").is_dir():
            return p
    return None


def default_data_root() -> Path:
    """
    Default data root if nothing is configured.

    journeys/, plans/ and safe_area.json derive from this path
    unless explicitly overridden.
    """
    return Path.home() / "Journeys"


# ---------------------------------------------------------------------------
# Typed config dataclasses
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AnalysisConfig:
    """
    Thresholds consumed by the analysis modules.

    Defaults mirror the module-level constants in journeygeo.analyze.*.
    """

    reach_radius_m: float = 30.0
    dwell_window: int = 10
    sample_interval_s: float = 5.0
    safe_area_grid_m: float = 50.0
    heat_map_grid_m: float = 100.0
    smoothing_segments: int = 5
    hesitation_cluster_radius_m: float = 50.0


@dataclass(frozen=True)
class JourneyGeoPaths:
    """
    Canonical resolved filesystem paths used by journeygeo.
    """

    data_root: Path
    journeys_dir: Path
    plans_dir: Path
    safe_area_path: Path


@dataclass(frozen=True)
class JourneyGeoConfig:
    """
    Fully merged journeygeo configuration.

    Attributes:
    - paths: resolved filesystem layout
    - analysis: thresholds for the analysis modules
    - miles: display distances in miles instead of kilometers
    - source: provenance map showing where each value came from
    """

    paths: JourneyGeoPaths
    analysis: AnalysisConfig
    miles: bool
    source: dict[str, str]


_PATH_KEYS = (
    "paths.data_root",
    "paths.journeys_dir",
    "paths.plans_dir",
    "paths.safe_area_path",
)

_ENV_PATHS = {
    "JOURNEYGEO_DATA_ROOT": "paths.data_root",
    "JOURNEYGEO_JOURNEYS_DIR": "paths.journeys_dir",
    "JOURNEYGEO_PLANS_DIR": "paths.plans_dir",
    "JOURNEYGEO_SAFE_AREA_PATH": "paths.safe_area_path",
}


# ---------------------------------------------------------------------------
# Main config loader
# ---------------------------------------------------------------------------
def load_config(
    repo_root: Optional[Path] = None,
    repo_config_path: Optional[Path] = None,
    user_config_path: Optional[Path] = None,
) -> JourneyGeoConfig:
    """
    Load, merge, and normalize all journeygeo configuration.

    This function is the single authoritative entry point
    for configuration access.
    """

    # Locate repo and config files
    if repo_root is None:
        repo_root = find_repo_root(Path(__file__).resolve())
    if repo_config_path is None and repo_root is not None:
        repo_config_path = repo_root / "config" / "config.toml"
    if user_config_path is None:
        user_config_path = Path.home() / ".config" / "journeygeo" / "config.toml"

    repo_cfg = _load_toml(repo_config_path) if repo_config_path else {}
    user_cfg = _load_toml(user_config_path) if user_config_path else {}
    layers = (
        (repo_cfg, f"repo:{repo_config_path}"),
        (user_cfg, f"user:{user_config_path}"),
    )

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------
    paths: dict[str, Path] = {}
    src: dict[str, str] = {k: "default" for k in _PATH_KEYS}

    for cfg, label in layers:
        for k in _PATH_KEYS:
            v = _as_path(_deep_get(cfg, k))
            if v is None:
                continue
            paths[k] = v
            src[k] = label

    for env, key in _ENV_PATHS.items():
        v = _env_path(env)
        if v is None:
            continue
        paths[key] = v
        src[key] = f"env:{env}"

    # Derive children from data_root unless set explicitly
    data_root = paths.get("paths.data_root", default_data_root())
    resolved = JourneyGeoPaths(
        data_root=data_root.expanduser(),
        journeys_dir=paths.get("paths.journeys_dir", data_root / "journeys").expanduser(),
        plans_dir=paths.get("paths.plans_dir", data_root / "plans").expanduser(),
        safe_area_path=paths.get("paths.safe_area_path", data_root / "safe_area.json").expanduser(),
    )

    # ------------------------------------------------------------------
    # Analysis thresholds
    # ------------------------------------------------------------------
    analysis_values: dict[str, Any] = {}
    for f in fields(AnalysisConfig):
        key = f"analysis.{f.name}"
        src[key] = "default"
        kind = int if f.type in (int, "int") else float
        for cfg, label in layers:
            raw = _deep_get(cfg, key)
            if raw is None:
                continue
            analysis_values[f.name] = _as_number(raw, key, kind)
            src[key] = label

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------
    miles = False
    src["display.miles"] = "default"
    for cfg, label in layers:
        raw = _deep_get(cfg, "display.miles")
        if raw is None:
            continue
        miles = _as_bool(raw, miles)
        src["display.miles"] = label

    env_miles = os.environ.get("JOURNEYGEO_MILES")
    if env_miles:
        miles = _as_bool(env_miles, miles)
        src["display.miles"] = "env:JOURNEYGEO_MILES"

    return JourneyGeoConfig(
        paths=resolved,
        analysis=AnalysisConfig(**analysis_values),
        miles=miles,
        source=src,
    )
