import pytest

from wirepipe.clipping import Segment, clip_segment
from wirepipe.math3d import Mat4, Vec3, Vec4
from wirepipe.model import Model
from wirepipe.pipeline import (
    draw_scene,
    model_segments,
    prepare_frame,
    render_segments,
    transform_vertices,
)
from wirepipe.projection import perspective_projector, window_matrix
from wirepipe.view import ClipWindow, ProjectionKind, View, near_plane_z

WIDTH, HEIGHT = 800, 600


class RecordingDrawer:
    def __init__(self):
        self.segments = []

    def draw_segment(self, x0, y0, x1, y1):
        self.segments.append((x0, y0, x1, y1))


def make_view(kind):
    return View(
        projection=kind,
        eye=Vec3(0.0, 0.0, 0.0),
        look_at=Vec3(0.0, 0.0, -1.0),
        up=Vec3(0.0, 1.0, 0.0),
        clip=ClipWindow(-1.0, 1.0, -1.0, 1.0, 1.0, 100.0),
    )


def line(p0, p1, transform=None):
    model = Model(vertices=[p0, p1], edges=[[0, 1]])
    if transform is not None:
        model.transform = transform
    return model


def test_prepare_frame_computes_shared_state():
    view = make_view(ProjectionKind.PERSPECTIVE)
    frame = prepare_frame(view, WIDTH, HEIGHT)
    assert frame.kind is ProjectionKind.PERSPECTIVE
    assert frame.z_min == near_plane_z(view.clip)
    assert frame.z_min == pytest.approx(-0.01)
    assert frame.to_screen == window_matrix(WIDTH, HEIGHT) @ perspective_projector()


def test_far_endpoint_is_clipped_onto_far_plane():
    frame = prepare_frame(make_view(ProjectionKind.PERSPECTIVE), WIDTH, HEIGHT)
    model = line((0, 0, -5, 1), (0, 0, -150, 1))

    canonical = transform_vertices(frame, model)
    assert canonical[0, 2] == pytest.approx(-0.05)
    assert canonical[1, 2] == pytest.approx(-1.5)

    drawer = RecordingDrawer()
    stats = draw_scene(make_view(ProjectionKind.PERSPECTIVE), [model], drawer, WIDTH, HEIGHT)
    assert stats.drawn == 1 and stats.rejected == 0
    # Both ends sit on the view axis, i.e. the middle of the window.
    assert drawer.segments[0] == pytest.approx((400.0, 300.0, 400.0, 300.0))


def test_far_clip_lands_on_boundary():
    frame = prepare_frame(make_view(ProjectionKind.PERSPECTIVE), WIDTH, HEIGHT)
    canonical = transform_vertices(frame, line((0, 0, -5, 1), (0, 0, -150, 1)))
    segment = Segment(Vec4(*canonical[0, :3]), Vec4(*canonical[1, :3]))
    clipped = clip_segment(segment, frame.kind, frame.z_min)
    assert clipped is not None
    assert clipped.pt1.z == pytest.approx(-1.0, abs=1e-6)


def test_perspective_segment_projects_through_divide():
    # Spans x in [-10, 10] at depth 10: the frustum is x in [-10, 10] there.
    drawer = RecordingDrawer()
    draw_scene(make_view(ProjectionKind.PERSPECTIVE), [line((-20, 0, -10), (20, 0, -10))], drawer, WIDTH, HEIGHT)
    assert drawer.segments[0] == pytest.approx((0.0, 300.0, 800.0, 300.0))


def test_segment_behind_the_eye_is_rejected():
    drawer = RecordingDrawer()
    stats = draw_scene(make_view(ProjectionKind.PERSPECTIVE), [line((0, 0, 5), (1, 0, 6))], drawer, WIDTH, HEIGHT)
    assert stats.rejected == 1 and stats.drawn == 0
    assert drawer.segments == []


def test_parallel_segment_is_trimmed_to_window():
    drawer = RecordingDrawer()
    stats = draw_scene(make_view(ProjectionKind.PARALLEL), [line((-5, 0, -10), (5, 0, -10))], drawer, WIDTH, HEIGHT)
    assert stats.total == 1
    assert drawer.segments[0] == pytest.approx((0.0, 300.0, 800.0, 300.0))


def test_model_transform_is_applied():
    model = line((0, 0, -10), (0, 0.5, -10), transform=Mat4.translation(0.5, 0.0, 0.0))
    segments = render_segments(make_view(ProjectionKind.PARALLEL), [model], WIDTH, HEIGHT)
    assert segments == [pytest.approx((600.0, 300.0, 600.0, 450.0))]


def test_transform_vertices_divides_by_w():
    frame = prepare_frame(make_view(ProjectionKind.PARALLEL), WIDTH, HEIGHT)
    out = transform_vertices(frame, Model(vertices=[[2, 2, -10, 2]], edges=[]))
    assert out[0, 0] == pytest.approx(1.0)
    assert out[0, 1] == pytest.approx(1.0)
    assert out[0, 3] == pytest.approx(2.0)


def test_polylines_emit_one_segment_per_index_pair():
    model = Model(
        vertices=[[-0.5, -0.5, -10], [0.5, -0.5, -10], [0.5, 0.5, -10], [-0.5, 0.5, -10]],
        edges=[[0, 1, 2, 3, 0]],
    )
    frame = prepare_frame(make_view(ProjectionKind.PARALLEL), WIDTH, HEIGHT)
    assert len(list(model_segments(frame, model))) == 4


def test_default_viewer_scene_is_visible():
    pytest.importorskip("pygame")
    from wireviewer.world import World

    world = World()
    drawer = RecordingDrawer()
    stats = world.draw(drawer, WIDTH, HEIGHT)
    assert stats.total == 15
    assert stats.drawn > 0
    assert len(drawer.segments) == stats.drawn
