from __future__ import annotations

from dataclasses import dataclass

import pygame

from . import config


@dataclass
class HUDInfo:
    fps: float
    models: int
    segments: int
    drawn: int
    rejected: int
    projection: str


class HUD:
    """One-line status overlay blitted onto the display surface."""

    def __init__(self) -> None:
        self.font = pygame.font.SysFont(config.HUD_FONT, config.HUD_FONT_SIZE)
        self._surface_cache: dict[str, pygame.Surface] = {}

    def _text(self, s: str) -> pygame.Surface:
        surf = self._surface_cache.get(s)
        if surf is None:
            surf = self.font.render(s, True, config.HUD_COLOR)
            # Counters change every frame; keep the cache from growing unbounded.
            if len(self._surface_cache) > 256:
                self._surface_cache.clear()
            self._surface_cache[s] = surf
        return surf

    def render(self, surface: pygame.Surface, info: HUDInfo) -> None:
        line = (
            f"{info.projection.upper()} | models {info.models}"
            f" | segments {info.drawn}/{info.segments} drawn, {info.rejected} clipped away"
            f" | {info.fps:.0f} fps"
        )
        surface.blit(self._text(line), (config.HUD_MARGIN, config.HUD_MARGIN))
        hint = "arrows: turn  W/S: move  A/D: strafe  P: projection  Esc: quit"
        surf = self._text(hint)
        surface.blit(surf, (config.HUD_MARGIN, surface.get_height() - surf.get_height() - config.HUD_MARGIN))
