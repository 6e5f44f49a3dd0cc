import math

import pytest

pygame = pytest.importorskip("pygame")

from wirepipe.scene import scene_from_dict
from wirepipe.view import ProjectionKind
from wireviewer import config
from wireviewer.world import World


class FakeInput:
    """Reports ``held`` keys as down and ``pressed`` keys as just pressed."""

    def __init__(self, held=(), pressed=()):
        self.held = set(held)
        self.pressed = set(pressed)

    def key(self, key):
        return key in self.held

    def key_pressed(self, key):
        return key in self.pressed


@pytest.fixture
def world():
    return World(scene_from_dict({
        "view": {
            "type": "perspective",
            "prp": [0, 0, 0],
            "srp": [0, 0, -10],
            "vup": [0, 1, 0],
            "clip": [-1, 1, -1, 1, 1, 100],
        },
        "models": [],
    }))


def eye(world):
    return world.camera.view.eye.as_list()


def look_at(world):
    return world.camera.view.look_at.as_list()


def test_w_and_s_advance_and_retreat(world):
    step = config.MOVE_SPEED * 0.5
    world.handle_input(FakeInput(held=[pygame.K_w]), 0.5)
    assert eye(world) == pytest.approx([0.0, 0.0, -step])
    assert look_at(world) == pytest.approx([0.0, 0.0, -10.0 - step])

    world.handle_input(FakeInput(held=[pygame.K_s]), 0.5)
    assert eye(world) == pytest.approx([0.0, 0.0, 0.0])


def test_a_and_d_strafe(world):
    step = config.MOVE_SPEED * 0.25
    world.handle_input(FakeInput(held=[pygame.K_d]), 0.25)
    assert eye(world) == pytest.approx([step, 0.0, 0.0])
    assert look_at(world) == pytest.approx([step, 0.0, -10.0])

    world.handle_input(FakeInput(held=[pygame.K_a]), 0.5)
    assert eye(world) == pytest.approx([-step, 0.0, 0.0])


def test_arrows_turn_the_camera(world):
    quarter_turn = (math.pi / 2) / config.TURN_SPEED
    world.handle_input(FakeInput(held=[pygame.K_LEFT]), quarter_turn)
    assert eye(world) == pytest.approx([0.0, 0.0, 0.0])
    assert look_at(world) == pytest.approx([-10.0, 0.0, 0.0], abs=1e-9)

    world.handle_input(FakeInput(held=[pygame.K_RIGHT]), 2 * quarter_turn)
    assert look_at(world) == pytest.approx([10.0, 0.0, 0.0], abs=1e-9)


def test_held_keys_keep_moving(world):
    for _ in range(4):
        world.handle_input(FakeInput(held=[pygame.K_w]), 0.1)
    assert eye(world) == pytest.approx([0.0, 0.0, -config.MOVE_SPEED * 0.4])


def test_p_toggles_projection_once_per_press(world):
    world.handle_input(FakeInput(held=[pygame.K_p], pressed=[pygame.K_p]), 0.1)
    assert world.camera.view.projection is ProjectionKind.PARALLEL

    # Still held on the next frame: no second toggle.
    world.handle_input(FakeInput(held=[pygame.K_p]), 0.1)
    assert world.camera.view.projection is ProjectionKind.PARALLEL

    world.handle_input(FakeInput(pressed=[pygame.K_p]), 0.1)
    assert world.camera.view.projection is ProjectionKind.PERSPECTIVE


def test_no_keys_leave_the_camera_alone(world):
    before = world.camera.view
    world.handle_input(FakeInput(), 1.0)
    assert world.camera.view == before
