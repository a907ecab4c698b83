"""Drawable layer handles and compositing.

``make_drawable`` is the default ``DrawableFactory``: it only captures the
image together with the scale and mirroring it must be drawn with. Raster
work happens lazily in :meth:`Drawable.to_image`, and :func:`compose_layers`
stacks an ordered layer list into one Pillow image.
"""

from dataclasses import dataclass
from typing import Any, Sequence

from PIL import Image, ImageOps


@dataclass(frozen=True)
class Drawable:
    """Image plus the parameters it is drawn with.

    Attributes:
        image: Decoded layer image.
        scale: Scale factor applied to both dimensions.
        mirrored: Flip horizontally.
    """

    image: Any
    scale: float
    mirrored: bool = False

    def to_image(self) -> Image.Image:
        """Return the scaled (and mirrored) RGBA raster of this layer.

        Raises:
            TypeError: If the layer image is not a Pillow image.
        """
        if not isinstance(self.image, Image.Image):
            raise TypeError(
                f"Cannot rasterize layer image of type {type(self.image).__name__}"
            )
        img = self.image if self.image.mode == "RGBA" else self.image.convert("RGBA")
        w, h = img.size
        size = (max(1, round(w * self.scale)), max(1, round(h * self.scale)))
        if size != img.size:
            img = img.resize(size, Image.Resampling.LANCZOS)
        if self.mirrored:
            img = ImageOps.mirror(img)
        return img


def make_drawable(image: Any, scale: float, mirrored: bool) -> Drawable:
    """Default ``DrawableFactory``."""
    return Drawable(image=image, scale=scale, mirrored=mirrored)


def compose_layers(drawables: Sequence[Drawable]) -> Image.Image:
    """Alpha-composite layers bottom-up onto a transparent canvas.

    The canvas is sized to the largest layer; smaller layers are anchored at
    the bottom center, where characters stand. An empty sequence yields a
    1x1 transparent image.
    """
    rasters = [drawable.to_image() for drawable in drawables]
    if not rasters:
        return Image.new("RGBA", (1, 1), (0, 0, 0, 0))
    width = max(r.width for r in rasters)
    height = max(r.height for r in rasters)
    canvas = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    for raster in rasters:
        canvas.alpha_composite(raster, ((width - raster.width) // 2, height - raster.height))
    return canvas
