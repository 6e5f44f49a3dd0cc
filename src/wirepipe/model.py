from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .animation import Animation
from .math3d import Mat4, Vec3, Vec4


def _as_vertex_array(vertices) -> np.ndarray:
    try:
        if isinstance(vertices, np.ndarray):
            data = vertices.astype(np.float64, copy=True)
        else:
            rows = [v.as_list() if isinstance(v, (Vec3, Vec4)) else list(v) for v in vertices]
            data = np.asarray(rows, dtype=np.float64)
    except TypeError as exc:
        raise ValueError(f"model vertices must be a sequence of 3- or 4-component points: {exc}") from exc
    if data.size == 0:
        return np.zeros((0, 4), dtype=np.float64)
    if data.ndim != 2 or data.shape[1] not in (3, 4):
        raise ValueError(f"model vertices must be an Nx3 or Nx4 array, got shape {data.shape}")
    if data.shape[1] == 3:
        # Affine points: w = 1
        data = np.hstack([data, np.ones((data.shape[0], 1), dtype=np.float64)])
    return data


@dataclass
class Model:
    """Wireframe polyhedron: homogeneous vertices plus index polylines."""

    vertices: np.ndarray
    edges: List[List[int]]
    transform: Mat4 = field(default_factory=Mat4.identity)
    animation: Optional[Animation] = None
    kind: str = "generic"
    center: Optional[Vec3] = None

    def __post_init__(self) -> None:
        self.vertices = _as_vertex_array(self.vertices)
        try:
            self.edges = [list(edge) for edge in self.edges]
        except TypeError as exc:
            raise ValueError(f"model edges must be a sequence of index polylines: {exc}") from exc
        self.validate()

    def validate(self) -> None:
        count = len(self.vertices)
        for e, edge in enumerate(self.edges):
            for idx in edge:
                if isinstance(idx, bool) or not isinstance(idx, (int, np.integer)):
                    raise ValueError(f"edge {e} has non-integer vertex index {idx!r}")
                if not 0 <= idx < count:
                    raise ValueError(
                        f"edge {e} references vertex {idx}, but the model has {count} vertices"
                    )

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    def index_pairs(self) -> Iterator[Tuple[int, int]]:
        """Consecutive index pairs of every edge polyline."""
        for edge in self.edges:
            for i in range(len(edge) - 1):
                yield edge[i], edge[i + 1]

    def segment_count(self) -> int:
        return sum(max(0, len(edge) - 1) for edge in self.edges)

    def update(self, seconds: float) -> None:
        """Recompute the transform from elapsed time; static models are left alone."""
        if self.animation is not None:
            self.transform = self.animation.matrix_at(seconds)
