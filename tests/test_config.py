from pathlib import Path

import pytest

from journeygeo.config import AnalysisConfig, find_repo_root, load_config
from journeygeo.errors import ConfigError

ENV_VARS = (
    "JOURNEYGEO_DATA_ROOT",
    "JOURNEYGEO_JOURNEYS_DIR",
    "JOURNEYGEO_PLANS_DIR",
    "JOURNEYGEO_SAFE_AREA_PATH",
    "JOURNEYGEO_MILES",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


def _toml(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_config_files(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    cfg = load_config(
        repo_config_path=tmp_path / "none.toml",
        user_config_path=tmp_path / "also-none.toml",
    )

    assert cfg.paths.data_root == tmp_path / "Journeys"
    assert cfg.paths.journeys_dir == tmp_path / "Journeys" / "journeys"
    assert cfg.paths.safe_area_path == tmp_path / "Journeys" / "safe_area.json"
    assert cfg.analysis == AnalysisConfig()
    assert cfg.miles is False
    assert cfg.source["paths.data_root"] == "default"


def test_user_overrides_repo_and_children_follow_data_root(tmp_path: Path):
    repo = _toml(tmp_path / "repo.toml", f"""
[paths]
data_root = "{tmp_path / 'repo-data'}"
plans_dir = "{tmp_path / 'shared-plans'}"

[analysis]
reach_radius_m = 25
dwell_window = 8

[display]
miles = true
""")
    user = _toml(tmp_path / "user.toml", f"""
[paths]
data_root = "{tmp_path / 'user-data'}"

[analysis]
reach_radius_m = 40.5
""")

    cfg = load_config(repo_config_path=repo, user_config_path=user)

    assert cfg.paths.data_root == tmp_path / "user-data"
    assert cfg.paths.journeys_dir == tmp_path / "user-data" / "journeys"
    assert cfg.paths.plans_dir == tmp_path / "shared-plans"
    assert cfg.analysis.reach_radius_m == 40.5
    assert cfg.analysis.dwell_window == 8
    assert isinstance(cfg.analysis.dwell_window, int)
    assert cfg.miles is True
    assert cfg.source["paths.data_root"] == f"user:{user}"
    assert cfg.source["paths.plans_dir"] == f"repo:{repo}"
    assert cfg.source["analysis.heat_map_grid_m"] == "default"


def test_env_overrides_files(tmp_path: Path, monkeypatch):
    user = _toml(tmp_path / "user.toml", f"""
[paths]
data_root = "{tmp_path / 'user-data'}"

[display]
miles = true
""")
    monkeypatch.setenv("JOURNEYGEO_DATA_ROOT", str(tmp_path / "env-data"))
    monkeypatch.setenv("JOURNEYGEO_SAFE_AREA_PATH", str(tmp_path / "area.json"))
    monkeypatch.setenv("JOURNEYGEO_MILES", "no")

    cfg = load_config(repo_config_path=tmp_path / "none.toml", user_config_path=user)

    assert cfg.paths.data_root == tmp_path / "env-data"
    assert cfg.paths.journeys_dir == tmp_path / "env-data" / "journeys"
    assert cfg.paths.safe_area_path == tmp_path / "area.json"
    assert cfg.miles is False
    assert cfg.source["paths.data_root"] == "env:JOURNEYGEO_DATA_ROOT"
    assert cfg.source["display.miles"] == "env:JOURNEYGEO_MILES"


def test_invalid_toml_raises(tmp_path: Path):
    bad = _toml(tmp_path / "bad.toml", "[paths\ndata_root = ")
    with pytest.raises(ConfigError):
        load_config(repo_config_path=bad, user_config_path=tmp_path / "none.toml")


@pytest.mark.parametrize("value", ['"thirty"', "true"])
def test_non_numeric_threshold_raises(tmp_path: Path, value):
    user = _toml(tmp_path / "user.toml", f"[analysis]\nreach_radius_m = {value}\n")
    with pytest.raises(ConfigError):
        load_config(repo_config_path=tmp_path / "none.toml", user_config_path=user)


def test_find_repo_root(tmp_path: Path):
    (tmp_path / "config").mkdir()
    nested = tmp_path / "src" / "pkg"
    nested.mkdir(parents=True)

    assert find_repo_root(nested) == tmp_path.resolve()
