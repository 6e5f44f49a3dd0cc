from __future__ import annotations

from typing import Tuple

from .math3d import Mat4, Vec4
from .view import ProjectionKind


def parallel_projector() -> Mat4:
    """Orthographic drop onto the z=0 plane."""
    return Mat4.from_rows([
        [1.0, 0.0, 0.0, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def perspective_projector() -> Mat4:
    """Projection onto the z=-1 plane; w becomes -z and needs a divide."""
    return Mat4.from_rows([
        [1.0, 0.0, 0.0, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, -1.0, 0.0],
    ])


def projector(kind: ProjectionKind) -> Mat4:
    if kind is ProjectionKind.PERSPECTIVE:
        return perspective_projector()
    return parallel_projector()


def window_matrix(width: float, height: float) -> Mat4:
    """Map the normalized [-1,1] square onto a width x height pixel surface."""
    return Mat4.from_rows([
        [width / 2.0, 0.0, 0.0, width / 2.0],
        [0.0, height / 2.0, 0.0, height / 2.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def project_point(to_screen: Mat4, point: Vec4) -> Tuple[float, float]:
    p = to_screen @ point
    return p.x / p.w, p.y / p.w
