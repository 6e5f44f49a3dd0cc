from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import Optional, Tuple

from . import config
from .math3d import Vec4
from .view import ProjectionKind


class Outcode(IntFlag):
    """Canonical-volume planes a point lies outside of.

    Bit values are fixed: LEFT=32, RIGHT=16, BOTTOM=8, TOP=4, FAR=2, NEAR=1.
    """

    NONE = 0
    NEAR = 1
    FAR = 2
    TOP = 4
    BOTTOM = 8
    RIGHT = 16
    LEFT = 32


# Order in which an outside endpoint is pulled in, one plane per pass.
CLIP_ORDER = (
    Outcode.LEFT,
    Outcode.RIGHT,
    Outcode.BOTTOM,
    Outcode.TOP,
    Outcode.FAR,
    Outcode.NEAR,
)


@dataclass
class Segment:
    pt0: Vec4
    pt1: Vec4


def outcode_parallel(x: float, y: float, z: float, eps: float = config.FLOAT_EPSILON) -> Outcode:
    code = Outcode.NONE
    if x < -1.0 - eps:
        code |= Outcode.LEFT
    elif x > 1.0 + eps:
        code |= Outcode.RIGHT
    if y < -1.0 - eps:
        code |= Outcode.BOTTOM
    elif y > 1.0 + eps:
        code |= Outcode.TOP
    if z < -1.0 - eps:
        code |= Outcode.FAR
    elif z > 0.0 + eps:
        code |= Outcode.NEAR
    return code


def outcode_perspective(
    x: float, y: float, z: float, z_min: float, eps: float = config.FLOAT_EPSILON
) -> Outcode:
    code = Outcode.NONE
    if x < z - eps:
        code |= Outcode.LEFT
    elif x > -z + eps:
        code |= Outcode.RIGHT
    if y < z - eps:
        code |= Outcode.BOTTOM
    elif y > -z + eps:
        code |= Outcode.TOP
    if z < -1.0 - eps:
        code |= Outcode.FAR
    elif z > z_min + eps:
        code |= Outcode.NEAR
    return code


Point3 = Tuple[float, float, float]


def _first_plane(code: Outcode) -> Outcode:
    for plane in CLIP_ORDER:
        if plane in code:
            return plane
    return Outcode.NONE


def _parallel_t(plane: Outcode, p0: Point3, d: Point3, z_min: float) -> float:
    x0, y0, z0 = p0
    dx, dy, dz = d
    if plane is Outcode.LEFT:
        return (-1.0 - x0) / dx
    if plane is Outcode.RIGHT:
        return (1.0 - x0) / dx
    if plane is Outcode.BOTTOM:
        return (-1.0 - y0) / dy
    if plane is Outcode.TOP:
        return (1.0 - y0) / dy
    if plane is Outcode.FAR:
        return (-1.0 - z0) / dz
    return -z0 / dz


def _perspective_t(plane: Outcode, p0: Point3, d: Point3, z_min: float) -> float:
    # Side planes are x = z, x = -z, y = z, y = -z.
    x0, y0, z0 = p0
    dx, dy, dz = d
    if plane is Outcode.LEFT:
        return (z0 - x0) / (dx - dz)
    if plane is Outcode.RIGHT:
        return (x0 + z0) / (-dx - dz)
    if plane is Outcode.BOTTOM:
        return (z0 - y0) / (dy - dz)
    if plane is Outcode.TOP:
        return (y0 + z0) / (-dy - dz)
    if plane is Outcode.FAR:
        return (-1.0 - z0) / dz
    return (z_min - z0) / dz


def _clip(segment: Segment, outcode, solve_t, z_min: float) -> Optional[Segment]:
    p0 = (segment.pt0.x, segment.pt0.y, segment.pt0.z)
    p1 = (segment.pt1.x, segment.pt1.y, segment.pt1.z)

    while True:
        out0 = outcode(*p0)
        out1 = outcode(*p1)
        if not (out0 | out1):
            break
        if out0 & out1:
            return None

        plane = _first_plane(out0 if out0 else out1)
        d = (p1[0] - p0[0], p1[1] - p0[1], p1[2] - p0[2])
        t = solve_t(plane, p0, d, z_min)
        point = (
            (1.0 - t) * p0[0] + t * p1[0],
            (1.0 - t) * p0[1] + t * p1[1],
            (1.0 - t) * p0[2] + t * p1[2],
        )
        if out0:
            p0 = point
        else:
            p1 = point

    return Segment(Vec4(p0[0], p0[1], p0[2], 1.0), Vec4(p1[0], p1[1], p1[2], 1.0))


def clip_parallel(segment: Segment) -> Optional[Segment]:
    """Trim a segment to the parallel canonical volume, or None if it misses it."""
    return _clip(segment, outcode_parallel, _parallel_t, 0.0)


def clip_perspective(segment: Segment, z_min: float) -> Optional[Segment]:
    """Trim a segment to the perspective canonical frustum, or None if it misses it."""
    return _clip(
        segment,
        lambda x, y, z: outcode_perspective(x, y, z, z_min),
        _perspective_t,
        z_min,
    )


def clip_segment(segment: Segment, kind: ProjectionKind, z_min: float = 0.0) -> Optional[Segment]:
    if kind is ProjectionKind.PERSPECTIVE:
        return clip_perspective(segment, z_min)
    return clip_parallel(segment)
