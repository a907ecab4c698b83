"""Default decoder turning wire image strings into raw layers.

Raster payloads carry one base64 PNG per bucket, decoded with Pillow into a
single untagged layer. Vector payloads carry one SVG document per bucket;
each top-level ``<g>`` group becomes its own layer, tagged with the
expression feature names found in its ``class`` attribute. Every other
top-level element (``defs``, ``style``, loose shapes...) is copied into each
layer document. Markup declaring a DTD or entities is rejected.

Rasterizing the vector layers is left to the drawing side.
"""

import asyncio
import base64
import binascii
from io import BytesIO
from typing import List, Optional
from xml.etree import ElementTree as ET

from defusedxml import DTDForbidden, EntitiesForbidden, ExternalReferenceForbidden
from defusedxml import ElementTree as SafeET
from PIL import Image, UnidentifiedImageError

from character_render.components import RawLayer
from character_render.types import CHARACTER_FEATURE_NAMES

SVG_NS = "http://www.w3.org/2000/svg"


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _strip_data_uri(raw: str) -> str:
    if raw.startswith("data:") and "," in raw:
        return raw.split(",", 1)[1]
    return raw


def decode_raster(raw: str) -> Image.Image:
    """Decode a base64 (optionally data-URI) string into an RGBA image.

    Raises:
        ValueError: If the string is not valid base64 or not an image.
    """
    try:
        data = base64.b64decode(_strip_data_uri(raw.strip()), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e
    try:
        with Image.open(BytesIO(data)) as img:
            return img.convert("RGBA")
    except UnidentifiedImageError as e:
        raise ValueError(f"Unrecognized image data: {e}") from e


def _is_blank(element: ET.Element) -> bool:
    drawable_attrs = set(element.attrib) - {"class", "id"}
    return len(element) == 0 and not drawable_attrs and not (element.text or "").strip()


def _layer_tags(element: ET.Element) -> List[str]:
    classes = (element.get("class") or "").split()
    return [name for name in CHARACTER_FEATURE_NAMES if name in classes]


def _parse_svg(markup: str) -> ET.Element:
    try:
        root = SafeET.fromstring(markup, forbid_dtd=True)
    except (DTDForbidden, EntitiesForbidden, ExternalReferenceForbidden) as e:
        raise ValueError(f"SVG markup declares a DTD or entities: {e}") from e
    except ET.ParseError as e:
        raise ValueError(f"Malformed SVG markup: {e}") from e
    if _local_name(root.tag) != "svg":
        raise ValueError(f"Expected an <svg> root element, got <{_local_name(root.tag)}>")
    return root


def _serialize(document: ET.Element) -> str:
    if document.tag.startswith("{" + SVG_NS + "}"):
        return ET.tostring(document, encoding="unicode", default_namespace=SVG_NS)
    return ET.tostring(document, encoding="unicode")


def split_svg_layers(markup: str) -> List[Optional[RawLayer]]:
    """Split an SVG document into one layer per top-level ``<g>`` group.

    Blank groups are returned as ``None`` so that callers can report them.

    Raises:
        ValueError: If ``markup`` is not a well-formed SVG document, or
            declares a DTD or entities.
    """
    root = _parse_svg(markup)

    groups = [child for child in root if _local_name(child.tag) == "g"]
    if not groups:
        return [RawLayer(image=markup)]
    shared = [child for child in root if _local_name(child.tag) != "g"]

    layers: List[Optional[RawLayer]] = []
    for group in groups:
        if _is_blank(group):
            layers.append(None)
            continue
        document = ET.Element(root.tag, dict(root.attrib))
        document.extend(shared)
        document.append(group)
        image = _serialize(document)
        tags = _layer_tags(group)
        layers.append(RawLayer.tagged(image, tags) if tags else RawLayer(image=image))
    return layers


async def decode_image_string(raw: str, is_base64: bool) -> List[Optional[RawLayer]]:
    """Default ``DecodeFn``.

    Raster decoding runs in a worker thread so that the event loop keeps
    serving draw requests while large payloads are decoded.
    """
    if is_base64:
        image = await asyncio.to_thread(decode_raster, raw)
        return [RawLayer(image=image)]
    return await asyncio.to_thread(split_svg_layers, raw)
