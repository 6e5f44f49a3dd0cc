from __future__ import annotations

from dataclasses import replace
from typing import Tuple

from .math3d import Mat4, Vec3, Vec4
from .view import ProjectionKind, View, camera_basis, view_matrix


class Camera:
    """Interactive rig around an immutable :class:`View`.

    Every move swaps in a new View; the eye/look-at distance is preserved.
    """

    def __init__(self, view: View) -> None:
        self.view = view

    def basis(self) -> Tuple[Vec3, Vec3, Vec3]:
        return camera_basis(self.view.eye, self.view.look_at, self.view.up)

    def turn(self, angle: float) -> None:
        # Swing the look-at point around the eye about the camera's v axis.
        _, v, _ = self.basis()
        offset = self.view.look_at - self.view.eye
        rotated = Mat4.rotation_axis(v, angle) @ Vec4(offset.x, offset.y, offset.z, 0.0)
        self.view = replace(self.view, look_at=self.view.eye + rotated.xyz())

    def strafe(self, distance: float) -> None:
        u, _, _ = self.basis()
        self._translate(u * distance)

    def advance(self, distance: float) -> None:
        _, _, n = self.basis()
        self._translate(n * -distance)

    def set_projection(self, kind: ProjectionKind) -> None:
        self.view = self.view.with_projection(kind)

    def toggle_projection(self) -> ProjectionKind:
        if self.view.projection is ProjectionKind.PERSPECTIVE:
            self.set_projection(ProjectionKind.PARALLEL)
        else:
            self.set_projection(ProjectionKind.PERSPECTIVE)
        return self.view.projection

    def view_matrix(self) -> Mat4:
        return view_matrix(self.view)

    def _translate(self, delta: Vec3) -> None:
        self.view = replace(self.view, eye=self.view.eye + delta, look_at=self.view.look_at + delta)
