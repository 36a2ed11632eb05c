import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Dimensions:
    """Integer pixel size of a rendered page."""

    width: int
    height: int

    @classmethod
    def scaled(cls, width_pt: float, height_pt: float, scale: float) -> "Dimensions":
        """Scale a native page size in points, rounding partial pixels up."""
        return cls(
            width=math.ceil(round(width_pt * scale, 6)),
            height=math.ceil(round(height_pt * scale, 6)),
        )

    @property
    def pixels(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class RasterFrame:
    """Rendered page pixels, row-major. A ``stride`` of 0 means packed rows."""

    width: int
    height: int
    samples: bytes
    mode: str = "RGB"
    stride: int = 0
