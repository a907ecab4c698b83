"""Component aggregates.

Immutable records passed between the loader, the resolver systems and the
render cache: decoded layers, wire payloads, catalog entries, portrait
projection and visual-state requests / cache keys.
"""

from .catalog_entry import CatalogEntry
from .layer import RawLayer
from .payload import ALT_SUFFIX, WIRE_FIELDS, CharacterPayload
from .portrait import Portrait
from .visual_state import VisualState, VisualStateKey

__all__ = [
    "ALT_SUFFIX",
    "CatalogEntry",
    "CharacterPayload",
    "Portrait",
    "RawLayer",
    "VisualState",
    "VisualStateKey",
    "WIRE_FIELDS",
]
