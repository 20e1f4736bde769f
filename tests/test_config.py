"""Tests for configuration system."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from bitruvius.config import (
    AppConfig,
    GaitSettings,
    RenderSettings,
    SimulationSettings,
    load_config,
)
from bitruvius.models import GaitParameters


def test_gait_settings_defaults_match_parameters():
    assert GaitSettings().to_parameters() == GaitParameters()


@pytest.mark.parametrize(
    ("field", "bad"),
    [("intensity", 2.5), ("lean", -1.5), ("frequency", 5.0), ("bends", 11.0), ("mood", 1.2)],
)
def test_gait_settings_range_rejected(field: str, bad: float) -> None:
    with pytest.raises(ValidationError):
        GaitSettings(**{field: bad})


def test_simulation_settings_defaults():
    s = SimulationSettings()
    assert s.secondary_motion is False
    assert s.fps == 60


@pytest.mark.parametrize("bad", [0, -30])
def test_simulation_fps_rejected(bad: int) -> None:
    with pytest.raises(ValidationError):
        SimulationSettings(fps=bad)


def test_render_settings_defaults():
    r = RenderSettings()
    assert r.base_unit == 150.0
    assert r.mannequin_base_unit == 100.0
    assert r.floor_y == 500.0
    assert r.scale == 0.5


def test_app_config_defaults(isolated_home: Path) -> None:
    config = AppConfig()
    assert config.config_dir == isolated_home / ".bitruvius"
    assert config.library_path is None
    assert config.gait.stride == 0.6


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BITRUVIUS_GAIT__STRIDE", "1.2")
    monkeypatch.setenv("BITRUVIUS_SIMULATION__SECONDARY_MOTION", "true")
    monkeypatch.setenv("BITRUVIUS_LIBRARY_PATH", "/tmp/poses.json")
    config = load_config()
    assert config.gait.stride == 1.2
    assert config.simulation.secondary_motion is True
    assert config.library_path == Path("/tmp/poses.json")


def test_env_out_of_range_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BITRUVIUS_GAIT__INTENSITY", "9")
    with pytest.raises(ValidationError):
        load_config()


def test_toml_file(isolated_home: Path) -> None:
    config_dir = isolated_home / ".bitruvius"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text(
        "[gait]\nmood = -0.5\n\n[simulation]\nfps = 30\n",
        encoding="utf-8",
    )
    config = load_config()
    assert config.gait.mood == -0.5
    assert config.simulation.fps == 30


def test_env_beats_toml(isolated_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_dir = isolated_home / ".bitruvius"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text("[simulation]\nfps = 30\n", encoding="utf-8")
    monkeypatch.setenv("BITRUVIUS_SIMULATION__FPS", "24")
    assert load_config().simulation.fps == 24
