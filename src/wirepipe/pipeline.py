"""Per-frame wireframe pipeline: transform -> clip -> project -> draw.

Everything a frame needs (view matrix, projector, window mapping, near-plane
ratio) is computed once in :func:`prepare_frame` and passed explicitly.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable, Iterator, List, Optional, Protocol, Tuple

import numpy as np

from .clipping import Segment, clip_segment
from .math3d import Mat4, Vec4
from .model import Model
from .projection import project_point, projector, window_matrix
from .view import ProjectionKind, View, near_plane_z, view_matrix

logger = logging.getLogger(__name__)

Segment2D = Tuple[float, float, float, float]


class Drawer(Protocol):
    def draw_segment(self, x0: float, y0: float, x1: float, y1: float) -> None:
        ...


@dataclass(frozen=True)
class Frame:
    kind: ProjectionKind
    view_matrix: Mat4
    to_screen: Mat4  # window @ projector
    z_min: float
    width: float
    height: float


@dataclass
class FrameStats:
    drawn: int = 0
    rejected: int = 0

    @property
    def total(self) -> int:
        return self.drawn + self.rejected


def prepare_frame(view: View, width: float, height: float) -> Frame:
    return Frame(
        kind=view.projection,
        view_matrix=view_matrix(view),
        to_screen=window_matrix(width, height) @ projector(view.projection),
        z_min=near_plane_z(view.clip),
        width=width,
        height=height,
    )


def transform_vertices(frame: Frame, model: Model) -> np.ndarray:
    """Canonical-volume vertices of ``model`` as an Nx4 array, x and y divided by w."""
    m = (frame.view_matrix @ model.transform).to_array()
    out = model.vertices @ m.T
    out[:, 0:2] /= out[:, 3:4]
    return out


def _point(row: np.ndarray) -> Vec4:
    return Vec4(float(row[0]), float(row[1]), float(row[2]), 1.0)


def project_segment(frame: Frame, segment: Segment) -> Segment2D:
    x0, y0 = project_point(frame.to_screen, segment.pt0)
    x1, y1 = project_point(frame.to_screen, segment.pt1)
    return x0, y0, x1, y1


def model_segments(frame: Frame, model: Model, stats: Optional[FrameStats] = None) -> Iterator[Segment2D]:
    """Yield the pixel-space segments of ``model`` that survive clipping."""
    canonical = transform_vertices(frame, model)
    for i0, i1 in model.index_pairs():
        segment = Segment(_point(canonical[i0]), _point(canonical[i1]))
        clipped = clip_segment(segment, frame.kind, frame.z_min)
        if clipped is None:
            if stats is not None:
                stats.rejected += 1
            continue
        if stats is not None:
            stats.drawn += 1
        yield project_segment(frame, clipped)


def render_segments(view: View, models: Iterable[Model], width: float, height: float) -> List[Segment2D]:
    frame = prepare_frame(view, width, height)
    segments: List[Segment2D] = []
    for model in models:
        segments.extend(model_segments(frame, model))
    return segments


def draw_scene(view: View, models: Iterable[Model], drawer: Drawer, width: float, height: float) -> FrameStats:
    frame = prepare_frame(view, width, height)
    stats = FrameStats()
    for model in models:
        for x0, y0, x1, y1 in model_segments(frame, model, stats):
            drawer.draw_segment(x0, y0, x1, y1)
    logger.debug("frame: %d segments drawn, %d rejected", stats.drawn, stats.rejected)
    return stats
