"""Built-in pose library for the Bitruvius mannequin."""

from bitruvius.poses.loader import (
    PoseLibrary,
    PoseLibraryError,
    build_library,
    load_library,
    save_library,
)

__all__ = ["PoseLibrary", "PoseLibraryError", "build_library", "load_library", "save_library"]
