"""Wire payload for one character.

The server sends one record per character with eight mandatory image strings
(the ``normal`` version, one per side and pose), up to eight optional ``Alt``
strings and an ``isBase64`` flag telling raster data from vector markup.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping

from pyrsistent import PMap, pmap

from character_render.types import (
    BucketKey,
    CharacterPose,
    CharacterSide,
    CharacterVersion,
)


# (side, pose) -> camelCase wire field name of the normal version
WIRE_FIELDS: Dict[tuple[CharacterSide, CharacterPose], str] = {
    (CharacterSide.FRONT, CharacterPose.STAND): "frontStanding",
    (CharacterSide.FRONT, CharacterPose.SIT): "frontSitting",
    (CharacterSide.FRONT, CharacterPose.WALK1): "frontWalking1",
    (CharacterSide.FRONT, CharacterPose.WALK2): "frontWalking2",
    (CharacterSide.BACK, CharacterPose.STAND): "backStanding",
    (CharacterSide.BACK, CharacterPose.SIT): "backSitting",
    (CharacterSide.BACK, CharacterPose.WALK1): "backWalking1",
    (CharacterSide.BACK, CharacterPose.WALK2): "backWalking2",
}

ALT_SUFFIX = "Alt"


@dataclass(frozen=True)
class CharacterPayload:
    """Undecoded image strings for one character.

    Attributes:
        images: Raw image string per bucket key. Always holds the eight
            ``normal`` keys; ``alt`` keys only where the character ships them.
        is_base64: True for base64 raster data, False for SVG markup.
    """

    images: PMap[BucketKey, str]
    is_base64: bool = False

    @staticmethod
    def from_wire(record: Mapping[str, Any]) -> "CharacterPayload":
        """Build a payload from its camelCase wire record.

        Raises:
            ValueError: If the record is not a mapping or a mandatory field is
                missing or not a string.
        """
        if not isinstance(record, Mapping):
            raise ValueError(f"Character payload must be a mapping, got {type(record).__name__}")

        images: Dict[BucketKey, str] = {}
        for (side, pose), field_name in WIRE_FIELDS.items():
            value = record.get(field_name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"Missing mandatory payload field: {field_name}")
            images[(CharacterVersion.NORMAL, side, pose)] = value

            alt_value = record.get(field_name + ALT_SUFFIX)
            if alt_value:
                if not isinstance(alt_value, str):
                    raise ValueError(
                        f"Payload field {field_name + ALT_SUFFIX} must be a string"
                    )
                images[(CharacterVersion.ALT, side, pose)] = alt_value

        return CharacterPayload(
            images=pmap(images), is_base64=bool(record.get("isBase64", False))
        )

    def mandatory_keys(self) -> list[BucketKey]:
        return [k for k in self.images if k[0] == CharacterVersion.NORMAL]

    def optional_keys(self) -> list[BucketKey]:
        return [k for k in self.images if k[0] == CharacterVersion.ALT]
