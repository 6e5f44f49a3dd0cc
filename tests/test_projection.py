import pytest

from wirepipe.math3d import Vec4
from wirepipe.projection import (
    parallel_projector,
    perspective_projector,
    project_point,
    projector,
    window_matrix,
)
from wirepipe.view import ProjectionKind


def test_perspective_projector_and_divide():
    p = perspective_projector() @ Vec4(4.0, 6.0, -2.0, 2.0)
    assert p.w == 2.0
    assert (p.x / p.w, p.y / p.w) == pytest.approx((2.0, 3.0))


def test_parallel_projector_drops_z():
    p = parallel_projector() @ Vec4(0.5, -0.5, -0.3, 1.0)
    assert p.as_list() == pytest.approx([0.5, -0.5, 0.0, 1.0])


@pytest.mark.parametrize("ndc, pixel", [
    ((0.0, 0.0), (400.0, 300.0)),
    ((1.0, 1.0), (800.0, 600.0)),
    ((-1.0, -1.0), (0.0, 0.0)),
    ((0.5, -0.5), (600.0, 150.0)),
])
def test_window_mapping(ndc, pixel):
    assert project_point(window_matrix(800, 600), Vec4(ndc[0], ndc[1], 0.0, 1.0)) == pytest.approx(pixel)


def test_window_after_perspective_projector():
    to_screen = window_matrix(800, 600) @ perspective_projector()
    # (2, 3) in NDC, then scaled and offset by width/2, height/2
    assert project_point(to_screen, Vec4(4.0, 6.0, -2.0, 2.0)) == pytest.approx((1200.0, 1200.0))


def test_projector_dispatch():
    assert projector(ProjectionKind.PARALLEL) == parallel_projector()
    assert projector(ProjectionKind.PERSPECTIVE) == perspective_projector()
