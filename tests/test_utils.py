import asyncio
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from pyrsistent import pmap

from character_render.character import Character
from character_render.components import (
    WIRE_FIELDS,
    CatalogEntry,
    CharacterPayload,
    RawLayer,
)
from character_render.renderer.drawable import Drawable, make_drawable
from character_render.types import (
    ALL_BUCKET_KEYS,
    BucketKey,
    CharacterPose,
    CharacterSide,
    CharacterVersion,
)

NORMAL_FRONT_STAND: BucketKey = (
    CharacterVersion.NORMAL,
    CharacterSide.FRONT,
    CharacterPose.STAND,
)
NORMAL_KEYS: Tuple[BucketKey, ...] = tuple(
    k for k in ALL_BUCKET_KEYS if k[0] == CharacterVersion.NORMAL
)


def raw_string(prefix: str, key: BucketKey) -> str:
    return prefix + ":" + ",".join(str(part) for part in key)


def make_payload(
    prefix: str,
    keys: Iterable[BucketKey] = NORMAL_KEYS,
    is_base64: bool = False,
) -> CharacterPayload:
    """Payload whose raw strings encode their own bucket key."""
    return CharacterPayload(
        images=pmap({key: raw_string(prefix, key) for key in keys}),
        is_base64=is_base64,
    )


def make_wire(prefix: str, alt: bool = False, is_base64: bool = False) -> Dict[str, Any]:
    """camelCase wire record with every mandatory field (and optionally every Alt)."""
    record: Dict[str, Any] = {"isBase64": is_base64}
    for (side, pose), field_name in WIRE_FIELDS.items():
        record[field_name] = raw_string(prefix, (CharacterVersion.NORMAL, side, pose))
        if alt:
            record[field_name + "Alt"] = raw_string(
                prefix, (CharacterVersion.ALT, side, pose)
            )
    return record


class FakeDecoder:
    """Decoder double.

    Returns ``layers[raw]`` when configured, otherwise a single untagged layer
    whose image is the raw string. Strings starting with a prefix listed in
    ``gates`` wait for that event first; strings in ``errors`` raise.
    """

    def __init__(
        self,
        layers: Optional[Mapping[str, Sequence[Optional[RawLayer]]]] = None,
        gates: Optional[Mapping[str, asyncio.Event]] = None,
        errors: Iterable[str] = (),
    ):
        self.layers = dict(layers or {})
        self.gates = dict(gates or {})
        self.errors = set(errors)
        self.calls: List[Tuple[str, bool]] = []

    async def __call__(self, raw: str, is_base64: bool) -> List[Optional[RawLayer]]:
        self.calls.append((raw, is_base64))
        for prefix, gate in self.gates.items():
            if raw.startswith(prefix):
                await gate.wait()
        if raw in self.errors:
            raise ValueError(f"cannot decode {raw}")
        return list(self.layers.get(raw, [RawLayer(image=raw)]))


class CountingFactory:
    """Drawable factory double counting how many drawables it built."""

    def __init__(self) -> None:
        self.calls: List[Tuple[Any, float, bool]] = []

    def __call__(self, image: Any, scale: float, mirrored: bool) -> Drawable:
        self.calls.append((image, scale, mirrored))
        return make_drawable(image, scale, mirrored)


class ReportRecorder:
    def __init__(self) -> None:
        self.messages: List[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)


def make_character(
    name: str = "giko",
    decoder: Optional[FakeDecoder] = None,
    factory: Optional[CountingFactory] = None,
    reports: Optional[ReportRecorder] = None,
    scale: float = 0.5,
) -> Character:
    return Character(
        CatalogEntry(name=name, scale=scale),
        decode_fn=decoder or FakeDecoder(),
        drawable_factory=factory or CountingFactory(),
        report_fn=reports or ReportRecorder(),
    )


def images_of(drawables: Sequence[Drawable]) -> List[Any]:
    return [d.image for d in drawables]
