from __future__ import annotations

import argparse
import logging

from wireviewer import config as viewer_config
from wireviewer.ui import HUD, HUDInfo
from wireviewer.world import World
from wirepipe import config
from wirepipe.app import App
from wirepipe.scene import load_scene
from wirepipe.view import ProjectionKind


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Clip and draw a 3D wireframe scene.")
    parser.add_argument("--scene", help="JSON scene description (default: built-in house scene)")
    parser.add_argument("--width", type=int, default=config.DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=config.DEFAULT_HEIGHT)
    kind = parser.add_mutually_exclusive_group()
    kind.add_argument("--parallel", action="store_true", help="force a parallel projection")
    kind.add_argument("--perspective", action="store_true", help="force a perspective projection")
    parser.add_argument("-v", "--verbose", action="store_true", help="log per-frame clipping stats")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    world = World(load_scene(args.scene) if args.scene else None)
    if args.parallel:
        world.camera.set_projection(ProjectionKind.PARALLEL)
    elif args.perspective:
        world.camera.set_projection(ProjectionKind.PERSPECTIVE)

    app = App(args.width, args.height, viewer_config.WINDOW_TITLE)
    hud = HUD()

    running = True
    while running:
        running = app.poll()
        app.time.tick()

        world.handle_input(app.input, app.time.delta)
        # Model transforms are a pure function of time since start.
        world.update(app.time.elapsed)

        app.clear()
        stats = world.draw(app.drawer, app.width, app.height)

        info = HUDInfo(
            fps=app.time.fps,
            models=len(world.scene.models),
            segments=world.scene.segment_count(),
            drawn=stats.drawn,
            rejected=stats.rejected,
            projection=world.camera.view.projection.value,
        )
        hud.render(app.surface, info)

        app.swap()

    app.shutdown()


if __name__ == "__main__":
    main()
