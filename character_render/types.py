"""Common type aliases and enumerations.

``DecodeFn``, ``DrawableFactory`` and ``ReportFn`` are the collaborator
extension points injected into :class:`character_render.character.Character`
so that decoding, drawable construction and diagnostics can be swapped out
(e.g. by test doubles).
"""

from enum import StrEnum, auto
from typing import Any, Awaitable, Callable, List, Optional, Tuple, TYPE_CHECKING


# Forward declaration to avoid circular imports:
if TYPE_CHECKING:
    from character_render.components import RawLayer
    from character_render.events import AnnualEvent


class CharacterVersion(StrEnum):
    """Skin variant of a character."""

    NORMAL = auto()
    ALT = auto()


class CharacterSide(StrEnum):
    """Facing direction."""

    FRONT = auto()
    BACK = auto()


class CharacterPose(StrEnum):
    """Animation stance."""

    STAND = auto()
    SIT = auto()
    WALK1 = auto()
    WALK2 = auto()


class CharacterFormat(StrEnum):
    """Asset format shipped by the server for a character."""

    SVG = auto()
    PNG = auto()


class RenderQuality(StrEnum):
    """Rendering quality mode requested from the character endpoint."""

    CRISP = auto()
    REGULAR = auto()


class ExpressionTag(StrEnum):
    """Layer tags selecting facial-expression variants."""

    EYES_OPEN = auto()
    EYES_CLOSED = auto()
    MOUTH_OPEN = auto()
    MOUTH_CLOSED = auto()


CHARACTER_FEATURE_NAMES: Tuple[str, ...] = (
    ExpressionTag.EYES_OPEN,
    ExpressionTag.EYES_CLOSED,
    ExpressionTag.MOUTH_OPEN,
    ExpressionTag.MOUTH_CLOSED,
)

EYES_TAGS = frozenset({ExpressionTag.EYES_OPEN, ExpressionTag.EYES_CLOSED})
MOUTH_TAGS = frozenset({ExpressionTag.MOUTH_OPEN, ExpressionTag.MOUTH_CLOSED})

DEFAULT_POSE = CharacterPose.STAND
DEFAULT_SIDE = CharacterSide.FRONT
DEFAULT_VERSION = CharacterVersion.NORMAL

BucketKey = Tuple[CharacterVersion, CharacterSide, CharacterPose]

DecodeFn = Callable[[str, bool], Awaitable[List[Optional["RawLayer"]]]]
DrawableFactory = Callable[[Any, float, bool], Any]
ReportFn = Callable[[str], None]
EventPredicate = Callable[["AnnualEvent"], bool]


def bucket_key(
    version: CharacterVersion, side: CharacterSide, pose: CharacterPose
) -> BucketKey:
    """Return the composite raw-bucket key, coercing plain strings to enums."""
    return (CharacterVersion(version), CharacterSide(side), CharacterPose(pose))


ALL_BUCKET_KEYS: Tuple[BucketKey, ...] = tuple(
    (version, side, pose)
    for version in CharacterVersion
    for side in CharacterSide
    for pose in CharacterPose
)
