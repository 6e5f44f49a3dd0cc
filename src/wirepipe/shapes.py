from __future__ import annotations

from typing import List

import numpy as np

from .math3d import Vec3
from .model import Model


def _check_positive(**params: float) -> None:
    for name, value in params.items():
        if not value > 0:
            raise ValueError(f"{name} must be positive, got {value}")


def _closed(loop: List[int]) -> List[int]:
    return loop + loop[:1]


def _ring(center: Vec3, radius: float, y: float, sides: int) -> np.ndarray:
    # Ring in the XZ plane, first point one step past angle 0.
    theta = np.arange(1, sides + 1) * (2.0 * np.pi / sides)
    return np.column_stack([
        center.x + radius * np.cos(theta),
        np.full(sides, y),
        center.z + radius * np.sin(theta),
        np.ones(sides),
    ])


def cube(center: Vec3, width: float, height: float, depth: float) -> Model:
    """Axis-aligned box. Vertices 0-3 are the bottom face, 4-7 the top face."""
    _check_positive(width=width, height=height, depth=depth)
    hw, hh, hd = width / 2.0, height / 2.0, depth / 2.0

    # (x sign, z sign) around a face
    corners = [(-1, -1), (-1, 1), (1, 1), (1, -1)]
    vertices = []
    for sy in (-1, 1):
        for sx, sz in corners:
            vertices.append([center.x + sx * hw, center.y + sy * hh, center.z + sz * hd, 1.0])

    edges = [_closed([0, 1, 2, 3]), _closed([4, 5, 6, 7])]
    edges += [[i, i + 4] for i in range(4)]
    return Model(vertices=vertices, edges=edges, kind="cube", center=center.copy())


def cylinder(center: Vec3, radius: float, height: float, sides: int) -> Model:
    _check_positive(radius=radius, height=height, sides=sides)
    bottom = _ring(center, radius, center.y - height / 2.0, sides)
    top = _ring(center, radius, center.y + height / 2.0, sides)

    edges = [_closed(list(range(sides))), _closed(list(range(sides, 2 * sides)))]
    edges += [[i, i + sides] for i in range(sides)]
    return Model(vertices=np.vstack([bottom, top]), edges=edges, kind="cylinder", center=center.copy())


def cone(center: Vec3, radius: float, height: float, sides: int) -> Model:
    """Base ring at ``center.y`` with the apex ``height`` above it."""
    _check_positive(radius=radius, height=height, sides=sides)
    base = _ring(center, radius, center.y, sides)
    apex = np.array([[center.x, center.y + height, center.z, 1.0]])

    edges = [_closed(list(range(sides)))]
    edges += [[i, sides] for i in range(sides)]
    return Model(vertices=np.vstack([base, apex]), edges=edges, kind="cone", center=center.copy())


def sphere(center: Vec3, radius: float, slices: int, stacks: int) -> Model:
    """UV sphere: ``slices`` pole-to-pole meridians of ``stacks + 1`` points each.

    Meridian k holds vertices ``k*(stacks+1) .. k*(stacks+1)+stacks``, top pole
    first. Latitude rings skip the poles.
    """
    _check_positive(radius=radius, slices=slices, stacks=stacks)
    per = stacks + 1
    polar = np.pi / 2.0 + np.arange(per) * (np.pi / stacks)
    # Profile in the XY plane, swept about the vertical axis through the center.
    profile_r = radius * np.cos(polar)
    profile_y = center.y + radius * np.sin(polar)

    vertices = []
    for k in range(slices):
        phi = k * (2.0 * np.pi / slices)
        c, s = np.cos(phi), np.sin(phi)
        vertices.append(np.column_stack([
            center.x + profile_r * c,
            profile_y,
            center.z - profile_r * s,
            np.ones(per),
        ]))

    edges = [list(range(k * per, (k + 1) * per)) for k in range(slices)]
    for i in range(1, stacks):
        edges.append(_closed([k * per + i for k in range(slices)]))
    return Model(vertices=np.vstack(vertices), edges=edges, kind="sphere", center=center.copy())


def spiral(center: Vec3, radius: float, slices: int, stacks: int) -> Model:
    """Closed wire winding around a sphere's surface.

    Point i sits ``(i+1)*pi/stacks`` around a vertical circle through the
    center, swept ``i*2pi/slices`` about the vertical axis. ``2*stacks`` points
    joined in one closed polyline.
    """
    _check_positive(radius=radius, slices=slices, stacks=stacks)
    count = 2 * stacks
    i = np.arange(count)
    theta = (i + 1) * (np.pi / stacks)
    phi = i * (2.0 * np.pi / slices)
    profile_r = radius * np.cos(theta)
    vertices = np.column_stack([
        center.x + profile_r * np.cos(phi),
        center.y + radius * np.sin(theta),
        center.z - profile_r * np.sin(phi),
        np.ones(count),
    ])
    return Model(vertices=vertices, edges=[_closed(list(range(count)))], kind="spiral", center=center.copy())
