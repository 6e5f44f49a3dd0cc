from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Optional

from .math3d import Mat4, Vec3

_ROTATIONS = {
    "x": Mat4.rotation_x,
    "y": Mat4.rotation_y,
    "z": Mat4.rotation_z,
}


@dataclass(frozen=True)
class Animation:
    """Constant spin about a principal axis, optionally around a pivot point."""

    axis: str
    rps: float  # revolutions per second
    pivot: Optional[Vec3] = None

    def __post_init__(self) -> None:
        if self.axis not in _ROTATIONS:
            raise ValueError(f"animation axis must be one of x, y, z, got {self.axis!r}")

    def angle_at(self, seconds: float) -> float:
        return 2.0 * math.pi * self.rps * seconds

    def matrix_at(self, seconds: float) -> Mat4:
        rotate = _ROTATIONS[self.axis](self.angle_at(seconds))
        if self.pivot is None:
            return rotate
        p = self.pivot
        return Mat4.multiply([
            Mat4.translation(p.x, p.y, p.z),
            rotate,
            Mat4.translation(-p.x, -p.y, -p.z),
        ])
