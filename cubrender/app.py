"""The command: render a scene in a window or save a screenshot."""

from __future__ import annotations

import sys
from pathlib import Path

from cubrender.image import Image, save_bmp
from cubrender.movement import KeyAction, KeyHold, apply
from cubrender.parsing import Scene, SceneError, load_scene
from cubrender.raycast import caster_from_scene
from cubrender.render import Renderer, load_textures

USAGE = "usage: ./cub3d <map-path>"
SCREENSHOT = "screenshot.bmp"
TITLE = "Wolf 3d"
EXIT_FAILURE = 255


def _renderer(scene: Scene) -> Renderer:
    textures = load_textures(scene)
    return Renderer(caster_from_scene(scene), textures, scene.floor, scene.ceiling)


def save_screenshot(scene: Scene, path: str | Path) -> Image:
    """Render one frame of the scene, write it as a BMP and return it."""
    image = _renderer(scene).frame()
    save_bmp(image, path)
    return image


def _rgb(image: Image) -> bytes:
    return b"".join((pixel & 0xFFFFFF).to_bytes(3, "big") for pixel in image.pixels)


def run_window(scene: Scene) -> None:
    """Show the scene in a window until it is closed or Escape is pressed."""
    renderer = _renderer(scene)
    caster = renderer.caster
    keys = KeyHold()

    import pygame

    codes = {
        pygame.K_a: KeyAction.STRAFE_RIGHT,
        pygame.K_s: KeyAction.BACK,
        pygame.K_d: KeyAction.STRAFE_LEFT,
        pygame.K_w: KeyAction.FORWARD,
        pygame.K_ESCAPE: KeyAction.QUIT,
        pygame.K_LEFT: KeyAction.TURN_LEFT,
        pygame.K_RIGHT: KeyAction.TURN_RIGHT,
    }
    pygame.init()
    try:
        screen = pygame.display.set_mode((scene.width, scene.height))
        pygame.display.set_caption(TITLE)
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYDOWN and event.key in codes:
                    keys.press(codes[event.key])
                elif event.type == pygame.KEYUP and event.key in codes:
                    keys.release(codes[event.key])
            image = renderer.frame()
            for key in keys.held():
                if not apply(caster, key):
                    return
            surface = pygame.image.frombuffer(_rgb(image), (image.width, image.height), "RGB")
            screen.blit(surface, (0, 0))
            pygame.display.flip()
    finally:
        pygame.quit()


def _fail(message: str) -> int:
    sys.stderr.write(f"Error\n{message}")
    return EXIT_FAILURE


def main(argv: list[str] | None = None) -> int:
    """Entry point: ``<map-path> [--save]``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) not in (1, 2) or (len(args) == 2 and not args[1].startswith("--save")):
        return _fail(USAGE)
    try:
        scene = load_scene(args[0])
        if len(args) == 2:
            save_screenshot(scene, SCREENSHOT)
        else:
            run_window(scene)
    except SceneError as exc:
        return _fail(str(exc))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())