"""Application configuration with pydantic-settings + TOML."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict, TomlConfigSettingsSource

from bitruvius.models.gait import GaitParameters


def _default_config_dir() -> Path:
    return Path.home() / ".bitruvius"


class GaitSettings(BaseSettings):
    """Default gait sliders, validated against their documented ranges."""

    intensity: float = Field(default=0.5, ge=0.0, le=2.0)
    stride: float = Field(default=0.6, ge=0.0, le=2.0)
    lean: float = Field(default=0.1, ge=-1.0, le=1.0)
    frequency: float = Field(default=1.0, ge=0.0, le=4.0)
    gravity: float = Field(default=0.5, ge=0.0, le=2.0)
    bounce: float = Field(default=0.4, ge=0.0, le=2.0)
    bends: float = Field(default=0.7, ge=0.0, le=10.0)
    head_spin: float = Field(default=0.0, ge=-1.0, le=1.0)
    mood: float = Field(default=0.5, ge=-1.0, le=1.0)
    ground_drag: float = Field(default=0.2, ge=0.0, le=2.0)

    def to_parameters(self) -> GaitParameters:
        return GaitParameters(**self.model_dump())


class SimulationSettings(BaseSettings):
    """Frame loop settings."""

    secondary_motion: bool = False
    fps: int = Field(default=60, gt=0)


class RenderSettings(BaseSettings):
    """PNG rasteriser settings."""

    base_unit: float = Field(default=150.0, gt=0)
    mannequin_base_unit: float = Field(default=100.0, gt=0)
    floor_y: float = 500.0
    scale: float = Field(default=0.5, gt=0)
    line_width: int = Field(default=4, gt=0)
    point_radius: int = Field(default=6, ge=0)


class AppConfig(BaseSettings):
    """Root application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BITRUVIUS_",
        env_nested_delimiter="__",
    )

    config_dir: Path = Field(default_factory=_default_config_dir)
    library_path: Path | None = None
    gait: GaitSettings = Field(default_factory=GaitSettings)
    simulation: SimulationSettings = Field(default_factory=SimulationSettings)
    render: RenderSettings = Field(default_factory=RenderSettings)

    @classmethod
    def settings_customise_sources(cls, settings_cls, **kwargs):  # type: ignore[override]
        toml_path = _default_config_dir() / "config.toml"
        sources = (
            kwargs.get("init_settings"),
            kwargs.get("env_settings"),
        )
        if toml_path.exists():
            sources = (*sources, TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        return (*sources, kwargs.get("dotenv_settings"), kwargs.get("file_secret_settings"))


def load_config() -> AppConfig:
    """Load application config from init args, environment and TOML."""
    return AppConfig()
