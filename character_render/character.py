"""Character entity.

A :class:`Character` owns everything needed to draw one avatar: catalog
metadata, the decoded raw buckets and the render cache built on top of them.
Only the character's own ``load`` / ``get_image`` touch the bucket set and
cache; both run on the event loop, and the only suspension point is the
decode step inside ``load``.

Typical use::

    giko = Character(CatalogEntry(name="giko"))
    giko.set_payload(CharacterPayload.from_wire(record))
    if await giko.load():
        layers = giko.get_image(VisualState(pose=CharacterPose.SIT, mirrored=True))
"""

import logging
from dataclasses import replace
from typing import Any, Optional, Tuple

from pyrsistent import pmap

from character_render.components import (
    CatalogEntry,
    CharacterPayload,
    Portrait,
    VisualState,
)
from character_render.events import no_active_events, resolve_visibility
from character_render.loader import AssetLoader, RawBuckets
from character_render.renderer.cache import RenderCache
from character_render.types import (
    BucketKey,
    DecodeFn,
    DrawableFactory,
    EventPredicate,
    ReportFn,
)

logger = logging.getLogger(__name__)


class Character:
    """Drawable avatar backed by a cached set of decoded buckets.

    Attributes:
        name: Unique character identity.
        format: Asset format served for this character.
        hidden: Hidden from the character picker for this session.
        is_event: Shown as a seasonal/event character for this session.
        scale: Base scale passed to every drawable.
        portrait: Portrait projection parameters.
        is_loaded: True once the latest submitted payload has been applied.
    """

    def __init__(
        self,
        entry: CatalogEntry,
        event_predicate: EventPredicate = no_active_events,
        decode_fn: Optional[DecodeFn] = None,
        drawable_factory: Optional[DrawableFactory] = None,
        report_fn: Optional[ReportFn] = None,
    ):
        self.name = entry.name
        self.format = entry.format
        self.scale = entry.scale
        self.portrait = Portrait().merged(entry.portrait)
        self.hidden, self.is_event = resolve_visibility(
            entry.hidden, entry.is_event, entry.hidden_during, event_predicate
        )
        self.is_loaded = False

        self._loader = AssetLoader(entry.name, decode_fn=decode_fn, report_fn=report_fn)
        self._cache = RenderCache(drawable_factory)
        self._raw_images: RawBuckets = pmap()

    def __repr__(self) -> str:
        return f"Character({self.name!r}, loaded={self.is_loaded})"

    @property
    def render_cache(self) -> RenderCache:
        return self._cache

    def bucket_keys(self) -> Tuple[BucketKey, ...]:
        return tuple(self._raw_images.keys())

    def set_payload(self, payload: CharacterPayload) -> None:
        """Submit a new payload; it takes effect after the next ``load``."""
        self._loader.submit_payload(payload)
        self.is_loaded = False

    async def load(self) -> bool:
        """Decode the pending payload.

        Returns True only when this call applied new buckets, meaning the
        caller should redraw. False means nothing was pending or a newer
        payload arrived during decoding (its own ``load`` applies it).
        """
        outcome = await self._loader.load(self._apply)
        logger.debug(
            "Load finished", extra={"character": self.name, "outcome": str(outcome)}
        )
        return outcome.applied

    def _apply(self, buckets: RawBuckets) -> None:
        self._raw_images = buckets
        self._cache.clear()
        self.is_loaded = True

    def get_image(
        self, state: Optional[VisualState] = None, **overrides: Any
    ) -> Tuple[Any, ...]:
        """Return the ordered drawable layers for a visual state.

        ``state`` defaults to :class:`VisualState` defaults; keyword overrides
        (``pose=...``, ``mirrored=...``) are applied on top. Missing
        combinations fall back to the closest bucket, and a character without
        any data yields an empty tuple.
        """
        if state is None:
            state = VisualState(**overrides)
        elif overrides:
            state = replace(state, **overrides)
        return self._cache.get_layers(self._raw_images, state, self.scale)
