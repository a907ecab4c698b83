"""Render cache: memoized drawable layer lists per visual state.

Producing the final layer list for a request means resolving the closest
bucket, filtering its layers by expression tags and wrapping each survivor in
a drawable handle. The result depends only on the bucket contents and the
resolved :class:`VisualStateKey`, so it is computed at most once per key and
kept until :meth:`RenderCache.clear` is called after a reload.

Expression flags only take part in the key when the resolved bucket has
layers of that tag family; a bucket without expression variants therefore has
a single entry per (version, side, pose, mirrored).
"""

from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from character_render.components import RawLayer, VisualState, VisualStateKey
from character_render.systems.fallback import resolve_bucket_key
from character_render.systems.tag_filter import expression_families, filter_layers
from character_render.types import BucketKey, DrawableFactory
from character_render.renderer.drawable import make_drawable

Buckets = Mapping[BucketKey, Sequence[RawLayer]]


def visual_state_key(
    resolved: BucketKey, layers: Sequence[RawLayer], state: VisualState
) -> VisualStateKey:
    """Build the cache key for ``state`` resolved to bucket ``resolved``."""
    has_eyes, has_mouth = expression_families(layers)
    version, side, pose = resolved
    return VisualStateKey(
        version=version,
        side=side,
        pose=pose,
        mirrored=state.mirrored,
        eyes_closed=state.eyes_closed if has_eyes else None,
        mouth_closed=state.mouth_closed if has_mouth else None,
    )


class RenderCache:
    """Memoizes drawable layer tuples keyed by canonical visual-state key."""

    def __init__(self, drawable_factory: Optional[DrawableFactory] = None):
        self._drawable_factory: DrawableFactory = drawable_factory or make_drawable
        self._entries: Dict[str, Tuple[Any, ...]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def clear(self) -> None:
        self._entries = {}

    def get_layers(
        self, buckets: Buckets, state: VisualState, scale: float
    ) -> Tuple[Any, ...]:
        """Return the ordered drawable layers for ``state``.

        An empty tuple is returned when the character has no bucket that the
        fallback chain can reach.
        """
        resolved = resolve_bucket_key(state.version, state.side, state.pose, buckets)
        if resolved is None:
            return ()
        layers = buckets[resolved]

        key = visual_state_key(resolved, layers, state).canonical()
        cached = self._entries.get(key)
        if cached is not None:
            return cached

        output = tuple(
            self._drawable_factory(layer.image, scale, state.mirrored)
            for layer in filter_layers(layers, state.eyes_closed, state.mouth_closed)
        )
        self._entries[key] = output
        return output
