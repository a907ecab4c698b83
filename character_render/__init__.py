"""Character asset loading, state fallback and render caching.

Typical flow::

    characters = build_characters(event_predicate)
    route_payloads(characters, fetched_json)
    await load_all(characters)
    layers = characters["giko"].get_image(VisualState(pose=CharacterPose.SIT))
"""

from character_render.catalog import CHARACTER_CATALOG, build_characters
from character_render.character import Character
from character_render.components import (
    CatalogEntry,
    CharacterPayload,
    Portrait,
    RawLayer,
    VisualState,
    VisualStateKey,
)
from character_render.config import RenderConfig
from character_render.events import AnnualEvent, active_events, no_active_events
from character_render.fetch import (
    characters_endpoint,
    load_all,
    quality_for,
    route_payloads,
)
from character_render.logging_setup import configure_logging
from character_render.loader import AssetLoader, LoadOutcome
from character_render.renderer.cache import RenderCache
from character_render.renderer.drawable import Drawable, compose_layers, make_drawable
from character_render.types import (
    CharacterFormat,
    CharacterPose,
    CharacterSide,
    CharacterVersion,
    RenderQuality,
)

__all__ = [
    "AnnualEvent",
    "AssetLoader",
    "CHARACTER_CATALOG",
    "CatalogEntry",
    "Character",
    "CharacterFormat",
    "CharacterPayload",
    "CharacterPose",
    "CharacterSide",
    "CharacterVersion",
    "Drawable",
    "LoadOutcome",
    "Portrait",
    "RawLayer",
    "RenderCache",
    "RenderConfig",
    "RenderQuality",
    "VisualState",
    "VisualStateKey",
    "active_events",
    "build_characters",
    "characters_endpoint",
    "compose_layers",
    "configure_logging",
    "load_all",
    "make_drawable",
    "no_active_events",
    "quality_for",
    "route_payloads",
]
