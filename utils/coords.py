from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from complexmath.number import Complex


@dataclass(frozen=True)
class ViewportMapping:
    """
    Affine transform between the sampled pixel grid and the complex plane for
    one view (center + diameter + pixel size).

    The shorter screen side spans ``diameter`` plane units. Grid cells sit
    every ``spacing`` pixels starting at the top-left pixel; row grows with
    the imaginary part, column with the real part.
    """
    center: Complex
    diameter: float
    width: int
    height: int
    spacing: int
    scale: float
    top_left: Complex
    rows: int
    cols: int

    @classmethod
    def create(cls, center, diameter: float, width: int, height: int,
               spacing: int = 1) -> "ViewportMapping":
        width, height, spacing = int(width), int(height), int(spacing)
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport size must be positive, got {width}x{height}")
        if spacing <= 0:
            raise ValueError(f"sample spacing must be positive, got {spacing}")
        diameter = float(diameter)
        if not math.isfinite(diameter) or diameter <= 0:
            raise ValueError(f"diameter must be finite and positive, got {diameter}")

        center = Complex.coerce(center)
        scale = diameter / min(width, height)
        top_left = Complex(center.re - (width * scale) / 2,
                           center.im - (height * scale) / 2)
        return cls(center=center, diameter=diameter,
                   width=width, height=height, spacing=spacing,
                   scale=scale, top_left=top_left,
                   rows=math.ceil(height / spacing),
                   cols=math.ceil(width / spacing))

    # ---- Forward / inverse -----------------------------------------------

    def pixel_to_plane(self, x: float, y: float) -> Complex:
        return Complex(self.top_left.re + x * self.scale,
                       self.top_left.im + y * self.scale)

    def plane_to_pixel(self, pos: Complex) -> Tuple[float, float]:
        return ((pos.re - self.top_left.re) / self.scale,
                (pos.im - self.top_left.im) / self.scale)

    def cell_position(self, row: int, col: int) -> Complex:
        return self.pixel_to_plane(col * self.spacing, row * self.spacing)

    def plane_to_cell(self, pos: Complex) -> Optional[Tuple[int, int]]:
        """Nearest grid cell for a plane position, or None when it is off the grid."""
        px, py = self.plane_to_pixel(pos)
        if not (math.isfinite(px) and math.isfinite(py)):
            return None
        col = math.floor(px / self.spacing + 0.5)
        row = math.floor(py / self.spacing + 0.5)
        if row < 0 or col < 0 or row >= self.rows or col >= self.cols:
            return None
        return row, col

    def plane_to_index(self, pos: Complex) -> Optional[int]:
        cell = self.plane_to_cell(pos)
        if cell is None:
            return None
        return cell[0] * self.cols + cell[1]

    @property
    def size(self) -> int:
        return self.rows * self.cols

    # ---- Derived views ----------------------------------------------------

    def zoomed(self, x: float, y: float, zoom_in: bool = True,
               factor: float = 2.0) -> "ViewportMapping":
        """Mapping re-centred on pixel (x, y) with the diameter divided (or multiplied) by factor."""
        new_diameter = self.diameter / factor if zoom_in else self.diameter * factor
        return ViewportMapping.create(self.pixel_to_plane(x, y), new_diameter,
                                      self.width, self.height, self.spacing)

    def resized(self, width: int, height: int) -> "ViewportMapping":
        return ViewportMapping.create(self.center, self.diameter, width, height, self.spacing)
