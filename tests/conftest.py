"""Shared fixtures for Bitruvius tests."""

import os
from pathlib import Path

import pytest

from bitruvius.models import GaitParameters, MannequinPose, PoseLibraryEntry
from bitruvius.models.skeleton import build_mannequin_topology
from bitruvius.pipeline.codec import decode_pose
from bitruvius.poses import load_library, save_library


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the user's real config file and BITRUVIUS_ env out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("BITRUVIUS_"):
            monkeypatch.delenv(key)
    return home


@pytest.fixture
def default_gait() -> GaitParameters:
    return GaitParameters()


@pytest.fixture
def mannequin():
    return build_mannequin_topology()


@pytest.fixture
def t_pose() -> MannequinPose:
    return decode_pose(load_library().get("B01").data)


@pytest.fixture
def seed_entries() -> list[PoseLibraryEntry]:
    return [
        PoseLibraryEntry(id="X01", cat="Test", name="Wave", src="Tests", data="r:0,500;ls:-45;le:30"),
        PoseLibraryEntry(id="X02", cat="Test", name="Kick", src="Tests", data="r:0,500;rt:-60;rc:20"),
    ]


@pytest.fixture
def library_file(tmp_path: Path, seed_entries: list[PoseLibraryEntry]) -> Path:
    return save_library(seed_entries, tmp_path / "library.json")
