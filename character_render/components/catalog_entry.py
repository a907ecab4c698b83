"""Static catalog record describing one character.

Entries are created once from the table in :mod:`character_render.catalog`
and never mutated. Visibility is derived from them (together with the
active-event predicate) when the :class:`Character` is constructed.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, TYPE_CHECKING

from character_render.types import CharacterFormat

if TYPE_CHECKING:
    from character_render.events import AnnualEvent


@dataclass(frozen=True)
class CatalogEntry:
    """Catalog data for one character.

    Attributes:
        name: Unique character identity.
        format: Asset format (vector or raster).
        hidden: Configured default visibility (hidden from the picker).
        is_event: True for seasonal/event variants.
        scale: Base drawing scale.
        portrait: Optional overrides of the default portrait projection.
        hidden_during: Annual event whose activity decides ``hidden`` for
            seasonal characters. Overrides ``hidden`` when set.
    """

    name: str
    format: CharacterFormat = CharacterFormat.SVG
    hidden: bool = False
    is_event: bool = False
    scale: float = 0.5
    portrait: Optional[Mapping[str, float]] = None
    hidden_during: Optional["AnnualEvent"] = None
