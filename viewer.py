# FOLDER: /

# viewer.py

"""
================================================================================
TILEMAP VIEWER
================================================================================
A small pygame harness around the tilemap generator. It owns everything the
generator does not: the window, the input mapping and the decision to
regenerate. Each tile is drawn as a block of its colour, shaded by its sprite
index in place of a texture atlas.

Controls:
    Space       new random seed
    Up / Down   zoom in / out
    W A S D     pan

Usage:
    python viewer.py [--config path/to/config.json] [--workers N]
================================================================================
"""
import argparse
import json
import logging
import sys

import numpy as np
import pygame

from tilemap_generator import controls
from tilemap_generator.batch import generate_tile_map
from tilemap_generator.settings import ConfigurationError, GeneratorSettings

# --- Application Constants (Rule 1) ---
PIXELS_PER_TILE = 4
BACKGROUND_COLOR = (10, 10, 20)

# Brightness applied per sprite index (grass, scrub, desert, water, forest, ice).
SPRITE_SHADES = np.array([1.0, 0.9, 1.0, 1.0, 0.8, 1.0])


class ViewerApp:
    """The main application class for the tilemap viewer."""
    def __init__(self, settings: GeneratorSettings, workers: int = 1):
        self.logger = logging.getLogger(__name__)
        self.settings = settings
        self.workers = workers

        self.logger.info("Initializing Pygame...")
        pygame.init()

        tiles_per_axis = (settings.map_size // 2) * 2 + 1
        self.screen_size = tiles_per_axis * PIXELS_PER_TILE
        self.screen = pygame.display.set_mode((self.screen_size, self.screen_size))

        self.clock = pygame.time.Clock()
        self.is_running = True

        self.map_surface = None
        self._rendered_settings = None

    def run(self):
        """The main application loop."""
        while self.is_running:
            self.handle_events()
            self.update()
            self.draw()
            self.clock.tick(60)

        self.logger.info("Exiting viewer.")
        pygame.quit()
        sys.exit()

    def handle_events(self):
        """Translates key presses into new settings snapshots."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.is_running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.is_running = False
                elif event.key == pygame.K_SPACE:
                    self.settings = controls.reseed(self.settings)
                elif event.key == pygame.K_UP:
                    self.settings = controls.zoom_in(self.settings)
                elif event.key == pygame.K_DOWN:
                    self.settings = controls.zoom_out(self.settings)
                elif event.key == pygame.K_a:
                    self.settings = controls.pan(self.settings, -1, 0)
                elif event.key == pygame.K_d:
                    self.settings = controls.pan(self.settings, 1, 0)
                elif event.key == pygame.K_s:
                    self.settings = controls.pan(self.settings, 0, -1)
                elif event.key == pygame.K_w:
                    self.settings = controls.pan(self.settings, 0, 1)

    def update(self):
        """Regenerates the whole map when the settings snapshot changed."""
        if self._rendered_settings is not None and not controls.needs_regeneration(self._rendered_settings, self.settings):
            return

        self.logger.info(f"Regenerating map (seed {self.settings.seed}, zoom {self.settings.zoom:.2f})...")
        tile_map = generate_tile_map(self.settings, self.logger, workers=self.workers)

        shaded = tile_map.colors * SPRITE_SHADES[tile_map.indices][..., np.newaxis]
        pixels = (np.clip(shaded, 0.0, 1.0) * 255).astype(np.uint8)
        # Row 0 is the most negative y; flip so north is up, then transpose
        # to the (width, height, channels) layout surfarray expects.
        pixels = np.transpose(pixels[::-1], (1, 0, 2))

        surface = pygame.surfarray.make_surface(pixels)
        self.map_surface = pygame.transform.scale(surface, (self.screen_size, self.screen_size))
        self._rendered_settings = self.settings

    def draw(self):
        """Handles all rendering for the application."""
        self.screen.fill(BACKGROUND_COLOR)
        if self.map_surface is not None:
            self.screen.blit(self.map_surface, (0, 0))

        pygame.display.set_caption(
            f"Tilemap Viewer | Seed: {self.settings.seed} | Zoom: {self.settings.zoom:.2f} | "
            f"Pan: {self.settings.pan_x:+.2f}, {self.settings.pan_y:+.2f}"
        )
        pygame.display.flip()


def load_settings(config_path: str, logger: logging.Logger) -> GeneratorSettings:
    """Loads generator overrides from a JSON file, or the defaults when no path is given."""
    if not config_path:
        return GeneratorSettings()

    logger.info(f"Loading configuration from {config_path}")
    with open(config_path, 'r') as f:
        return GeneratorSettings.from_config(json.load(f), logger)


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    logger = logging.getLogger("TilemapViewer")

    parser = argparse.ArgumentParser(description="Interactive viewer for the tilemap generator.")
    parser.add_argument('--config', type=str, default=None, help="Path to a JSON file of generator settings.")
    parser.add_argument('--workers', type=int, default=1, help="Worker processes per regeneration.")
    args = parser.parse_args()

    try:
        settings = load_settings(args.config, logger)
    except FileNotFoundError:
        logger.critical(f"Configuration file not found at {args.config}. Exiting.")
        sys.exit(1)
    except json.JSONDecodeError:
        logger.critical(f"Error decoding JSON from {args.config}. Exiting.")
        sys.exit(1)
    except (ConfigurationError, TypeError) as e:
        logger.critical(f"Invalid configuration: {e}")
        sys.exit(1)

    ViewerApp(settings, workers=args.workers).run()


if __name__ == '__main__':
    main()
