from __future__ import annotations

import logging

import pygame

from . import config
from .input import InputState
from .time import Time

logger = logging.getLogger(__name__)


class SurfaceDrawer:
    """Draws pixel-space segments onto a pygame surface.

    Pixel y grows upward in the pipeline's window mapping; pygame's origin is
    the top-left corner, so y is flipped here.
    """

    def __init__(self, surface: pygame.Surface) -> None:
        self.surface = surface

    def _flip(self, y: float) -> float:
        return self.surface.get_height() - y

    def draw_segment(self, x0: float, y0: float, x1: float, y1: float) -> None:
        a = (x0, self._flip(y0))
        b = (x1, self._flip(y1))
        pygame.draw.line(self.surface, config.LINE_COLOR, a, b, config.LINE_WIDTH)
        half = config.ENDPOINT_SIZE / 2.0
        for x, y in (a, b):
            pygame.draw.rect(
                self.surface,
                config.ENDPOINT_COLOR,
                pygame.Rect(int(x - half), int(y - half), config.ENDPOINT_SIZE, config.ENDPOINT_SIZE),
            )


class App:
    def __init__(self, width: int, height: int, title: str) -> None:
        pygame.init()
        self.surface = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)
        self.width = width
        self.height = height
        self.drawer = SurfaceDrawer(self.surface)
        self.clock = pygame.time.Clock()
        self.time = Time()
        self.input = InputState()
        logger.info("opened %dx%d window %r", width, height, title)

    def poll(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
        self.input.update()
        return True

    def clear(self) -> None:
        self.surface.fill(config.BACKGROUND_COLOR)

    def swap(self) -> None:
        pygame.display.flip()
        self.clock.tick(config.TARGET_FPS)

    def shutdown(self) -> None:
        pygame.quit()
