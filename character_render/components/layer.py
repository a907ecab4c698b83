"""Decoded image layer component.

A ``RawLayer`` is one decoded drawable image plus the expression tags that
select it. Layers without tags are base layers and are drawn in every
expression variant.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from pyrsistent import PSet, pset


@dataclass(frozen=True)
class RawLayer:
    """Decoded image and its optional expression tags.

    Attributes:
        image: Decoded image object (a Pillow image for raster assets, an SVG
            document string for vector assets).
        tags: Expression tags (``eyes_closed``, ``mouth_open``...); ``None`` or
            empty for untagged base layers.
    """

    image: Any
    tags: Optional[PSet[str]] = None

    @staticmethod
    def tagged(image: Any, tags: Iterable[str]) -> "RawLayer":
        return RawLayer(image=image, tags=pset(tags))
