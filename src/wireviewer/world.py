from __future__ import annotations

import logging
from typing import Any, Dict

import pygame

from wirepipe.camera import Camera
from wirepipe.input import InputState
from wirepipe.pipeline import Drawer, FrameStats, draw_scene
from wirepipe.scene import Scene, scene_from_dict

from . import config

logger = logging.getLogger(__name__)

# House-shaped prism seen through an off-center perspective window.
DEFAULT_SCENE: Dict[str, Any] = {
    "view": {
        "type": "perspective",
        "prp": [44, 20, -16],
        "srp": [20, 20, -40],
        "vup": [0, 1, 0],
        "clip": [-19, 5, -10, 8, 12, 100],
    },
    "models": [
        {
            "type": "generic",
            "vertices": [
                [0, 0, -30, 1],
                [20, 0, -30, 1],
                [20, 12, -30, 1],
                [10, 20, -30, 1],
                [0, 12, -30, 1],
                [0, 0, -60, 1],
                [20, 0, -60, 1],
                [20, 12, -60, 1],
                [10, 20, -60, 1],
                [0, 12, -60, 1],
            ],
            "edges": [
                [0, 1, 2, 3, 4, 0],
                [5, 6, 7, 8, 9, 5],
                [0, 5],
                [1, 6],
                [2, 7],
                [3, 8],
                [4, 9],
            ],
        }
    ],
}


class World:
    def __init__(self, scene: Scene | None = None) -> None:
        self.scene = scene if scene is not None else scene_from_dict(DEFAULT_SCENE)
        self.camera = Camera(self.scene.view)
        self.last_stats = FrameStats()

    def handle_input(self, inp: InputState, dt: float) -> None:
        cam = self.camera
        turn = config.TURN_SPEED * dt
        step = config.MOVE_SPEED * dt
        if inp.key(pygame.K_LEFT):
            cam.turn(turn)
        if inp.key(pygame.K_RIGHT):
            cam.turn(-turn)
        if inp.key(pygame.K_a):
            cam.strafe(-step)
        if inp.key(pygame.K_d):
            cam.strafe(step)
        if inp.key(pygame.K_w):
            cam.advance(step)
        if inp.key(pygame.K_s):
            cam.advance(-step)
        if inp.key_pressed(pygame.K_p):
            kind = cam.toggle_projection()
            logger.info("projection switched to %s", kind.value)

    def update(self, elapsed: float) -> None:
        self.scene.update(elapsed)

    def draw(self, drawer: Drawer, width: int, height: int) -> FrameStats:
        self.last_stats = draw_scene(self.camera.view, self.scene.models, drawer, width, height)
        return self.last_stats
