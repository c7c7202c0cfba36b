from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pygame

from ..sim.core.boid import Boid
from ..sim.core.config import Bounds, SimulationConfig
from ..sim.core.flock import Flock
from ..sim.core.rng import FlockRng
from . import controls

logger = logging.getLogger(__name__)

# Triangle in boid-local space, tip pointing along +x.
_SHAPE: Tuple[Tuple[float, float], ...] = ((6.0, 0.0), (-3.0, -3.0), (-3.0, 3.0))
SHOW_CONTROLS_HINT = "H: show controls"


def boid_polygon(boid: Boid) -> List[Tuple[float, float]]:
    angle = boid.heading()
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    px = boid.position.x
    py = boid.position.y
    return [(px + x * cos_a - y * sin_a, py + x * sin_a + y * cos_a) for x, y in _SHAPE]


class FlockViewer:
    """Interactive pygame front end that owns the live parameters and drives the flock."""

    def __init__(self, config: SimulationConfig):
        self.config = config
        self.params = config.params
        self.bounds = config.bounds
        self.flock = Flock(FlockRng(config.seed), neighbor_search=config.neighbor_search)
        self.flock.grow(self.params.boid_count, self.bounds)
        self.selected = 0
        self.show_controls = config.viewer.show_controls
        self.paused = False
        self.running = False

    def handle_key(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_SPACE:
            self.paused = not self.paused
        elif key == pygame.K_h:
            self.show_controls = not self.show_controls
        elif key == pygame.K_r:
            self.flock.reseed(self.params.boid_count, self.bounds)
        elif key == pygame.K_TAB:
            self.selected = (self.selected + 1) % len(controls.CONTROLS)
        elif key in (pygame.K_RIGHT, pygame.K_EQUALS, pygame.K_PLUS):
            self._adjust(1)
        elif key in (pygame.K_LEFT, pygame.K_MINUS):
            self._adjust(-1)

    def _adjust(self, direction: int) -> None:
        control = controls.CONTROLS[self.selected]
        self.params = controls.adjust(self.params, control, direction)
        if control.field == "boid_count":
            self.flock.resize(self.params.boid_count, self.bounds)

    def resize(self, width: int, height: int) -> None:
        self.bounds = Bounds(float(width), float(height))
        logger.debug("Bounds resized to %dx%d", width, height)

    def step(self) -> None:
        if not self.paused:
            self.flock.step_all(self.params, self.bounds)

    def draw(self, screen: pygame.Surface, fade: pygame.Surface, font: Optional[pygame.font.Font]) -> None:
        screen.blit(fade, (0, 0))
        color = self.config.viewer.boid_color
        for boid in self.flock:
            pygame.draw.polygon(screen, color, boid_polygon(boid))
        if font is None:
            return
        if self.show_controls:
            self._draw_panel(screen, font, controls.describe(self.params))
        else:
            hint = font.render(SHOW_CONTROLS_HINT, True, self.config.viewer.text_color)
            screen.blit(hint, (16, screen.get_height() - hint.get_height() - 16))

    def _draw_panel(self, screen: pygame.Surface, font: pygame.font.Font, lines: Sequence[str]) -> None:
        viewer = self.config.viewer
        line_height = font.get_linesize()
        hint = "Tab select  </> adjust  H hide  R reseed  Space pause"
        height = line_height * (len(lines) + 3)
        panel = pygame.Surface((320, height), pygame.SRCALPHA)
        panel.fill((*viewer.panel_color, 180))
        screen.blit(panel, (16, 16))
        y = 24
        title = font.render("Flock Controls", True, viewer.text_color)
        screen.blit(title, (28, y))
        y += line_height + 4
        for index, line in enumerate(lines):
            prefix = "> " if index == self.selected else "  "
            text = font.render(prefix + line, True, viewer.text_color)
            screen.blit(text, (28, y))
            y += line_height
        screen.blit(font.render(hint, True, viewer.text_color), (28, y + 4))

    def run(self) -> None:
        viewer = self.config.viewer
        pygame.init()
        try:
            screen = pygame.display.set_mode((int(self.bounds.width), int(self.bounds.height)), pygame.RESIZABLE)
            pygame.display.set_caption("Murmuration")
            font = pygame.font.Font(None, 20) if pygame.font.get_init() else None
            fade = self._make_fade(screen.get_size())
            screen.fill(viewer.background_color)
            clock = pygame.time.Clock()
            self.running = True
            logger.info("Viewer started with %d boids", len(self.flock))
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.KEYDOWN:
                        self.handle_key(event.key)
                    elif event.type == pygame.VIDEORESIZE:
                        screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                        fade = self._make_fade((event.w, event.h))
                        self.resize(event.w, event.h)
                self.step()
                self.draw(screen, fade, font)
                pygame.display.flip()
                clock.tick(viewer.fps)
        finally:
            pygame.quit()
        logger.info("Viewer stopped after %d ticks", self.flock.tick)

    def _make_fade(self, size: Tuple[int, int]) -> pygame.Surface:
        viewer = self.config.viewer
        fade = pygame.Surface(size, pygame.SRCALPHA)
        alpha = int(round(max(0.0, min(1.0, viewer.trail_alpha)) * 255))
        fade.fill((*viewer.background_color, alpha))
        return fade


def main() -> None:
    parser = argparse.ArgumentParser(description="Interactive boids viewer")
    parser.add_argument("--config", type=Path, default=None, help="YAML config file")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = SimulationConfig.from_yaml(args.config) if args.config else SimulationConfig()
    if args.seed is not None:
        config.seed = args.seed
    if args.width is not None:
        config.width = float(args.width)
    if args.height is not None:
        config.height = float(args.height)
    FlockViewer(config).run()


if __name__ == "__main__":
    main()
