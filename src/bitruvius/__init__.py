"""Bitruvius - procedural walk cycles and a posable 2D mannequin."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bitruvius")
except PackageNotFoundError:
    __version__ = "unknown"
