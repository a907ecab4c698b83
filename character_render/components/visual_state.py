"""Draw request and render-cache key.

``VisualState`` is what callers ask for; ``VisualStateKey`` is what the
render cache stores results under once the request has been resolved
against the available buckets.
"""

from dataclasses import dataclass
from typing import Optional

from character_render.types import (
    CharacterPose,
    CharacterSide,
    CharacterVersion,
)


@dataclass(frozen=True)
class VisualState:
    """Requested visual state of a character, with documented defaults.

    Attributes:
        version: Skin variant, ``normal`` by default.
        is_showing_back: Facing away from the viewer; selects the ``back`` side.
        pose: Animation stance, ``stand`` by default.
        mirrored: Draw horizontally flipped (facing left).
        eyes_closed: Select ``eyes_closed`` layers instead of ``eyes_open``.
        mouth_closed: Select ``mouth_closed`` layers instead of ``mouth_open``.
    """

    version: CharacterVersion = CharacterVersion.NORMAL
    is_showing_back: bool = False
    pose: CharacterPose = CharacterPose.STAND
    mirrored: bool = False
    eyes_closed: bool = True
    mouth_closed: bool = True

    @property
    def side(self) -> CharacterSide:
        return CharacterSide.BACK if self.is_showing_back else CharacterSide.FRONT


def _flag(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True)
class VisualStateKey:
    """Fully resolved draw request.

    The expression flags are ``None`` when the resolved bucket has no layer of
    the corresponding tag family; they are then left out of the canonical key
    so every caller flag value shares one cache entry.
    """

    version: CharacterVersion
    side: CharacterSide
    pose: CharacterPose
    mirrored: bool
    eyes_closed: Optional[bool] = None
    mouth_closed: Optional[bool] = None

    def canonical(self) -> str:
        parts = [str(self.version), str(self.side), str(self.pose), _flag(self.mirrored)]
        if self.eyes_closed is not None:
            parts.append(_flag(self.eyes_closed))
        if self.mouth_closed is not None:
            parts.append(_flag(self.mouth_closed))
        return ",".join(parts)
