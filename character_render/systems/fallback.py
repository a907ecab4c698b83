"""Closest-bucket resolution for missing state combinations.

Not every character ships every (version, side, pose) combination. The
resolver walks a fixed precedence list and returns the first key present:

1. the exact request;
2. ``normal`` version;
3. ``normal`` version, ``stand`` pose;
4. ``normal`` version, ``stand`` pose, ``front`` side.

Correct pose and side are preferred over the skin variant, then the default
pose over the default side.
"""

from typing import Container, List, Optional

from character_render.types import (
    DEFAULT_POSE,
    DEFAULT_SIDE,
    DEFAULT_VERSION,
    BucketKey,
    CharacterPose,
    CharacterSide,
    CharacterVersion,
)


def fallback_chain(
    version: CharacterVersion, side: CharacterSide, pose: CharacterPose
) -> List[BucketKey]:
    """Return candidate keys in precedence order (duplicates kept)."""
    return [
        (version, side, pose),
        (DEFAULT_VERSION, side, pose),
        (DEFAULT_VERSION, side, DEFAULT_POSE),
        (DEFAULT_VERSION, DEFAULT_SIDE, DEFAULT_POSE),
    ]


def resolve_bucket_key(
    version: CharacterVersion,
    side: CharacterSide,
    pose: CharacterPose,
    available: Container[BucketKey],
) -> Optional[BucketKey]:
    """Return the closest available bucket key, or None if nothing matches."""
    for candidate in fallback_chain(version, side, pose):
        if candidate in available:
            return candidate
    return None
