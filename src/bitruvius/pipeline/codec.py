"""Compact text encoding of mannequin poses.

A pose is written as ``;``-separated ``key:value`` tokens using short keys,
e.g. ``r:0,600;br:0;w:0;ls:-90;rs:90``. The root token carries an ``x,y``
pair. Values are rounded to two decimals.
"""

from __future__ import annotations

import logging
import math
import re

from bitruvius.models.pose import MannequinPose, Vector2D

logger = logging.getLogger(__name__)

SHORT_KEY_MAP: dict[str, str] = {
    "root": "r",
    "body_rotation": "br",
    "waist": "w",
    "torso": "t",
    "collar": "c",
    "head": "h",
    "l_shoulder": "ls",
    "l_forearm": "le",
    "l_wrist": "lw",
    "r_shoulder": "rs",
    "r_forearm": "re",
    "r_wrist": "rw",
    "l_thigh": "lt",
    "l_calf": "lc",
    "l_ankle": "la",
    "r_thigh": "rt",
    "r_calf": "rc",
    "r_ankle": "ra",
}

LONG_KEY_MAP: dict[str, str] = {short: long for long, short in SHORT_KEY_MAP.items()}

# Serialisation order: spine, then the right side, then the left side.
CANONICAL_ORDER: tuple[str, ...] = (
    "root",
    "body_rotation",
    "waist",
    "torso",
    "collar",
    "head",
    "r_shoulder",
    "r_forearm",
    "r_wrist",
    "l_shoulder",
    "l_forearm",
    "l_wrist",
    "r_thigh",
    "r_calf",
    "r_ankle",
    "l_thigh",
    "l_calf",
    "l_ankle",
)

TOKEN_SEPARATOR = ";"
KEY_SEPARATOR = ":"
ROOT_SEPARATOR = ","

# Leading decimal number; trailing characters after it are ignored.
_NUMBER_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def format_number(value: float) -> str:
    """Round to two decimals and print without trailing zeros.

    ``90.0`` -> ``"90"``, ``-178.181`` -> ``"-178.18"``, ``-0.001`` -> ``"0"``.
    """
    rounded = round(float(value), 2)
    if rounded.is_integer():
        return str(int(rounded))
    return repr(rounded)


def encode_pose(pose: MannequinPose) -> str:
    """Serialise the fields present in *pose* in canonical order."""
    parts: list[str] = []
    for key in CANONICAL_ORDER:
        value = getattr(pose, key)
        if value is None:
            continue
        short = SHORT_KEY_MAP[key]
        if key == "root":
            parts.append(
                f"{short}{KEY_SEPARATOR}{format_number(value.x)}{ROOT_SEPARATOR}{format_number(value.y)}"
            )
        else:
            parts.append(f"{short}{KEY_SEPARATOR}{format_number(value)}")
    return TOKEN_SEPARATOR.join(parts)


def decode_pose(text: str) -> MannequinPose:
    """Parse a pose string into a (possibly partial) pose.

    Unknown keys and unparseable values are skipped, never raised. Blank
    input gives an empty pose. A value is read up to the next ``:`` and a
    root up to its second ``,``; each number is taken from the longest
    numeric prefix, so ``12abc`` reads as 12.
    """
    fields: dict[str, object] = {}
    if not text or not text.strip():
        return MannequinPose()

    for token in text.split(TOKEN_SEPARATOR):
        short, sep, rest = token.strip().partition(KEY_SEPARATOR)
        raw = rest.partition(KEY_SEPARATOR)[0]
        if not short or not sep:
            if token.strip():
                logger.debug("Skipping pose token without a value: %r", token)
            continue

        key = LONG_KEY_MAP.get(short)
        if key is None:
            logger.debug("Skipping unknown pose key: %r", short)
            continue

        if key == "root":
            x_raw, _, tail = raw.partition(ROOT_SEPARATOR)
            y_raw = tail.partition(ROOT_SEPARATOR)[0]
            x = _parse_number(x_raw)
            y = _parse_number(y_raw)
            if x is None or y is None:
                logger.warning("Skipping malformed root value: %r", raw)
                continue
            fields[key] = Vector2D(x=x, y=y)
        else:
            value = _parse_number(raw)
            if value is None:
                logger.warning("Skipping malformed value for '%s': %r", short, raw)
                continue
            fields[key] = value

    return MannequinPose.model_validate(fields)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _parse_number(raw: str) -> float | None:
    match = _NUMBER_PREFIX.match(raw)
    if match is None:
        return None
    value = float(match.group())
    if not math.isfinite(value):
        return None
    return value
