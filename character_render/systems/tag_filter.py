"""Expression tag filtering.

Decides which layers of a bucket are drawn for a pair of expression flags.
Untagged layers are always kept. A tagged layer is kept when *any* of its
tags matches the requested flags, so a layer carrying both an eyes and a
mouth tag survives when either family matches.
"""

from typing import Iterable, List, Tuple

from character_render.components import RawLayer
from character_render.types import EYES_TAGS, MOUTH_TAGS, ExpressionTag


def layer_included(layer: RawLayer, eyes_closed: bool, mouth_closed: bool) -> bool:
    """Return True if ``layer`` belongs to the requested expression variant."""
    if not layer.tags:
        return True
    tags = layer.tags
    return (
        (eyes_closed and ExpressionTag.EYES_CLOSED in tags)
        or (not eyes_closed and ExpressionTag.EYES_OPEN in tags)
        or (mouth_closed and ExpressionTag.MOUTH_CLOSED in tags)
        or (not mouth_closed and ExpressionTag.MOUTH_OPEN in tags)
    )


def filter_layers(
    layers: Iterable[RawLayer], eyes_closed: bool, mouth_closed: bool
) -> List[RawLayer]:
    """Keep the layers of the requested expression variant, preserving order."""
    return [
        layer for layer in layers if layer_included(layer, eyes_closed, mouth_closed)
    ]


def expression_families(layers: Iterable[RawLayer]) -> Tuple[bool, bool]:
    """Return whether any layer carries an eyes tag and whether any carries a mouth tag."""
    has_eyes = False
    has_mouth = False
    for layer in layers:
        if not layer.tags:
            continue
        has_eyes = has_eyes or any(tag in EYES_TAGS for tag in layer.tags)
        has_mouth = has_mouth or any(tag in MOUTH_TAGS for tag in layer.tags)
    return has_eyes, has_mouth
