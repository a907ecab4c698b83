from dataclasses import dataclass, replace
from typing import Mapping, Optional


@dataclass(frozen=True)
class Portrait:
    """Projection used when drawing a character's head in the user list.

    Attributes:
        left: Horizontal offset, relative to the portrait width.
        top: Vertical offset, relative to the portrait height.
        scale: Zoom applied to the character image.
    """

    left: float = -0.5
    top: float = 0.0
    scale: float = 1.9

    def merged(self, overrides: Optional[Mapping[str, float]]) -> "Portrait":
        """Return a copy where only the supplied keys are replaced."""
        if not overrides:
            return self
        unknown = set(overrides) - {"left", "top", "scale"}
        if unknown:
            raise ValueError(f"Unknown portrait fields: {sorted(unknown)}")
        return replace(self, **{k: float(v) for k, v in overrides.items()})
