"""Load the pose library from the bundled JSON catalogue or a user file."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Sequence
from functools import lru_cache
from pathlib import Path

from jsonschema import ValidationError as SchemaValidationError

from bitruvius.models.pose import PoseLibraryEntry
from bitruvius.pipeline.mirror import mirror_entry
from bitruvius.validation import validate_library_json

logger = logging.getLogger(__name__)

# Directory containing the bundled pose catalogue.
_POSES_DIR = Path(__file__).resolve().parent
BUNDLED_LIBRARY = _POSES_DIR / "library.json"

# Seed poses that lean to the left and get a derived right-hand variant.
DEFAULT_MIRROR_IDS: tuple[str, ...] = ("A06", "D02", "S01")


class PoseLibraryError(ValueError):
    """Raised when a pose library file cannot be loaded."""


class PoseLibrary:
    """Read-only, ordered catalogue of pose entries."""

    def __init__(self, entries: Iterable[PoseLibraryEntry]) -> None:
        self._entries: tuple[PoseLibraryEntry, ...] = tuple(entries)
        self._by_id = {e.id: e for e in self._entries}

    def __iter__(self) -> Iterator[PoseLibraryEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._by_id

    @property
    def entries(self) -> tuple[PoseLibraryEntry, ...]:
        return self._entries

    def get(self, entry_id: str) -> PoseLibraryEntry | None:
        return self._by_id.get(entry_id)

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(e.category for e in self._entries))

    def by_category(self, category: str) -> list[PoseLibraryEntry]:
        return [e for e in self._entries if e.category == category]


def read_entries(path: Path) -> list[PoseLibraryEntry]:
    """Read and validate the seed records stored at *path*."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        msg = f"pose library not found: {path}"
        raise PoseLibraryError(msg) from None
    except PermissionError:
        msg = f"permission denied reading pose library: {path}"
        raise PoseLibraryError(msg) from None
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"pose library contains invalid JSON: {exc}"
        raise PoseLibraryError(msg) from None
    try:
        validate_library_json(data)
    except SchemaValidationError as exc:
        msg = f"pose library has invalid structure: {exc.message}"
        raise PoseLibraryError(msg) from None
    return [PoseLibraryEntry.model_validate(record) for record in data]


def build_library(
    seeds: Sequence[PoseLibraryEntry],
    mirror_ids: Iterable[str] = DEFAULT_MIRROR_IDS,
) -> PoseLibrary:
    """Append mirrored variants of *mirror_ids* to *seeds*.

    Ids missing from the seeds are logged and skipped.
    """
    by_id = {e.id: e for e in seeds}
    mirrored: list[PoseLibraryEntry] = []
    for entry_id in mirror_ids:
        original = by_id.get(entry_id)
        if original is None:
            logger.warning("Original pose with ID %s not found for mirroring", entry_id)
            continue
        mirrored.append(mirror_entry(original))
    logger.debug("Built pose library: %d seeds, %d mirrored", len(seeds), len(mirrored))
    return PoseLibrary([*seeds, *mirrored])


@lru_cache(maxsize=1)
def _bundled_library() -> PoseLibrary:
    return build_library(read_entries(BUNDLED_LIBRARY))


def load_library(
    path: Path | None = None,
    mirror_ids: Iterable[str] = DEFAULT_MIRROR_IDS,
) -> PoseLibrary:
    """Load a pose library, deriving its mirrored entries.

    Parameters
    ----------
    path:
        A user library file. The bundled catalogue is used (and cached) when
        omitted.
    mirror_ids:
        Ids of seed entries to mirror. Only honoured for user files.

    Raises
    ------
    PoseLibraryError
        If the file is missing, unreadable, not JSON or fails validation.
    """
    if path is None:
        return _bundled_library()
    return build_library(read_entries(path), mirror_ids)


def save_library(entries: Iterable[PoseLibraryEntry], path: Path) -> Path:
    """Write *entries* as a library file and return its path."""
    records = [e.model_dump(by_alias=True) for e in entries]
    validate_library_json(records)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
    logger.info("Wrote pose library %s (%d entries)", path, len(records))
    return path
