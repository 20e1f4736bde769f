"""Validation utilities for Bitruvius pose library files."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

import jsonschema

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "pose_library.schema.json"


@lru_cache(maxsize=1)
def _library_schema() -> dict[str, object]:
    return json.loads(_SCHEMA_PATH.read_text(encoding="utf-8"))


def validate_library_json(data: object) -> None:
    """Validate a raw pose library document against pose_library.schema.json.

    Parameters
    ----------
    data:
        The decoded JSON document (a list of pose records).

    Raises
    ------
    jsonschema.ValidationError
        If the data does not conform to the schema.
    """
    jsonschema.validate(data, _library_schema())
