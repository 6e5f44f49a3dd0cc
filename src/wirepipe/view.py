from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import NamedTuple, Sequence, Tuple

from .math3d import Mat4, Vec3


class ProjectionKind(str, Enum):
    PARALLEL = "parallel"
    PERSPECTIVE = "perspective"


class ClipWindow(NamedTuple):
    """View window on the near plane plus front/back clip distances."""

    left: float
    right: float
    bottom: float
    top: float
    near: float
    far: float

    @staticmethod
    def from_sequence(values: Sequence[float]) -> "ClipWindow":
        if len(values) != 6:
            raise ValueError(
                f"clip expects [left, right, bottom, top, near, far], got {len(values)} values"
            )
        return ClipWindow(*(float(v) for v in values))


@dataclass(frozen=True)
class View:
    projection: ProjectionKind
    eye: Vec3  # PRP
    look_at: Vec3  # SRP
    up: Vec3  # VUP
    clip: ClipWindow

    def validate(self) -> None:
        """Raise ValueError when this view cannot produce a finite transform."""
        n = self.eye - self.look_at
        if n.length() == 0:
            raise ValueError("view eye (prp) and look-at point (srp) coincide")
        if self.up.cross(n).length() == 0:
            raise ValueError("view up vector (vup) is zero or parallel to the view direction")
        c = self.clip
        if not c.left < c.right:
            raise ValueError(f"clip window needs left < right, got {c.left} >= {c.right}")
        if not c.bottom < c.top:
            raise ValueError(f"clip window needs bottom < top, got {c.bottom} >= {c.top}")
        if not 0 < c.near < c.far:
            raise ValueError(f"clip planes need 0 < near < far, got near={c.near} far={c.far}")

    def with_projection(self, kind: ProjectionKind) -> "View":
        return replace(self, projection=kind)


def camera_basis(eye: Vec3, look_at: Vec3, up: Vec3) -> Tuple[Vec3, Vec3, Vec3]:
    """Return the (u, v, n) view reference frame.

    ``n`` points from the look-at point back to the eye, so the camera looks
    down -n.
    """
    n = (eye - look_at).normalized()
    u = up.cross(n).normalized()
    v = n.cross(u)
    return u, v, n


def _basis_rotation(u: Vec3, v: Vec3, n: Vec3) -> Mat4:
    return Mat4([
        u.x, u.y, u.z, 0.0,
        v.x, v.y, v.z, 0.0,
        n.x, n.y, n.z, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ])


def _window_center_shear(clip: ClipWindow) -> Mat4:
    # Center of window on the near plane; shear it onto the z axis.
    cw = Vec3((clip.left + clip.right) / 2.0, (clip.bottom + clip.top) / 2.0, -clip.near)
    return Mat4.shear_xy(-cw.x / cw.z, -cw.y / cw.z)


def _eye_frame(view: View) -> Tuple[Mat4, Mat4, Mat4]:
    to_origin = Mat4.translation(-view.eye.x, -view.eye.y, -view.eye.z)
    rotate = _basis_rotation(*camera_basis(view.eye, view.look_at, view.up))
    shear = _window_center_shear(view.clip)
    return to_origin, rotate, shear


def parallel_view_matrix(view: View) -> Mat4:
    """World space to the parallel canonical volume x,y in [-1,1], z in [-1,0]."""
    to_origin, rotate, shear = _eye_frame(view)
    c = view.clip
    near_to_origin = Mat4.translation(0.0, 0.0, c.near)
    scale = Mat4.scale(2.0 / (c.right - c.left), 2.0 / (c.top - c.bottom), 1.0 / c.far)
    return Mat4.multiply([scale, near_to_origin, shear, rotate, to_origin])


def perspective_view_matrix(view: View) -> Mat4:
    """World space to the perspective canonical frustum x,y in [z,-z], z in [-1,z_min]."""
    to_origin, rotate, shear = _eye_frame(view)
    c = view.clip
    scale = Mat4.scale(
        (2.0 * c.near) / ((c.right - c.left) * c.far),
        (2.0 * c.near) / ((c.top - c.bottom) * c.far),
        1.0 / c.far,
    )
    return Mat4.multiply([scale, shear, rotate, to_origin])


def view_matrix(view: View) -> Mat4:
    if view.projection is ProjectionKind.PERSPECTIVE:
        return perspective_view_matrix(view)
    return parallel_view_matrix(view)


def near_plane_z(clip: ClipWindow) -> float:
    """Canonical z of the perspective front clip plane (``z_min``)."""
    return -clip.near / clip.far
