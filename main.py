#!/usr/bin/env python3
"""
TideCurve - live tide-level curve with time scrubbing

A Pygame view that synthesizes a smooth tide curve from sparse high/low
water predictions, marks the current level, and lets the user drag or
scroll through the next and previous hours.

Run with: uv run python main.py [--predictions data/predictions.json]
"""

import sys
import argparse
import logging
from pathlib import Path
import time

import pygame

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import Settings, get_settings
from config.constants import HOUR
from tidecurve.core.clock import FrameClock
from tidecurve.core.event_bus import Event, EventBus, EventType
from tidecurve.core.interpolation import level_at
from tidecurve.core.state import PointerState, VisualizationState
from tidecurve.core.theme import Theme, ThemeTransition
from tidecurve.data.predictions import (
    PredictionLoadError,
    load_predictions,
    synthesize_predictions,
)
from tidecurve.data.stations import DEFAULT_STATION, Station, get_station, next_station
from tidecurve.visualization.renderer import Renderer

logger = logging.getLogger(__name__)


class Application:
    """Main application class."""

    def __init__(self, args: argparse.Namespace) -> None:
        self.args = args
        self.settings = Settings.load(Path(args.config)) if args.config else get_settings()
        self.running = False

        # Override settings from args
        display = self.settings.display
        if args.width:
            display.window_width = args.width
        if args.height:
            display.window_height = args.height
        if args.dpr:
            display.dpr = args.dpr

        self.predictions_path = Path(args.predictions) if args.predictions else None
        self.station: Station = get_station(args.station) or DEFAULT_STATION

        # Pygame setup
        pygame.init()
        pygame.display.set_caption(f"{display.title} - {self.station.name}")
        self.screen = pygame.display.set_mode(self._pixel_size(), pygame.RESIZABLE)

        self.clock = pygame.time.Clock()
        self.frame_clock = FrameClock(fps_target=display.fps_target)
        self.event_bus = EventBus()
        self.theme = ThemeTransition(
            Theme(self.settings.theme.initial),
            self.settings.theme.transition_seconds,
        )

        # Core components
        self.renderer: Renderer | None = None
        self.state = VisualizationState(
            width=display.window_width,
            height=display.window_height,
            dpr=display.dpr,
            station_id=self.station.id,
        )

    def _pixel_size(self) -> tuple[int, int]:
        display = self.settings.display
        return (
            int(round(display.window_width * display.dpr)),
            int(round(display.window_height * display.dpr)),
        )

    def initialize(self) -> None:
        """Load predictions and create the renderer."""
        self.state.predictions = self._load_predictions()

        self.renderer = Renderer(self.screen, self.settings, self.event_bus)
        self.renderer.initialize()

    def _load_predictions(self):
        """Predictions from file if given, else synthesized for the station."""
        if self.predictions_path:
            try:
                return load_predictions(self.predictions_path)
            except PredictionLoadError as e:
                logger.error(f"{e}; falling back to synthesized predictions")

        now = time.time()
        half_cycle = self.settings.curve.half_cycle_seconds
        # Stagger stations so switching visibly moves the curve
        phase = (sum(map(ord, self.station.id)) % 360) / 360 * half_cycle
        return synthesize_predictions(
            now - 2 * 24 * HOUR,
            now + 2 * 24 * HOUR,
            mean_level=self.station.mean_level,
            amplitude=self.station.amplitude,
            half_cycle=half_cycle,
            phase=phase,
        )

    def run(self) -> None:
        """Main application loop."""
        self.initialize()
        self.running = True

        while self.running:
            self._handle_events()
            self.event_bus.flush()

            if self.renderer and self.frame_clock.should_render(time.monotonic()):
                self._refresh_state()
                self.renderer.render(self.state)
                pygame.display.flip()

            # Poll faster than we render; FrameClock skips the extra wakeups
            self.clock.tick(self.settings.display.poll_rate)

        if self.renderer:
            self.renderer.teardown()
        pygame.quit()

    def _refresh_state(self) -> None:
        """Update the per-frame snapshot."""
        self.state.time = self.frame_clock.animation_time
        self.state.theme_blend = self.theme.blend

        # No observation feed here; the prediction curve stands in for it
        level = level_at(self.state.predictions, time.time())
        if level is not None:
            self.state.current_level = level

    def _handle_events(self) -> None:
        """Handle pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.VIDEORESIZE:
                self._handle_resize(event)

            else:
                self._track_pointer(event)
                if self.renderer:
                    self.renderer.handle_event(event, self.state)

    def _track_pointer(self, event: pygame.event.Event) -> None:
        dpr = self.state.dpr or 1.0
        if event.type == pygame.MOUSEMOTION:
            x, y = event.pos
            self.state.pointer = PointerState(x / dpr, y / dpr, True)
        elif event.type == pygame.WINDOWLEAVE:
            self.state.pointer = PointerState(self.state.pointer.x, self.state.pointer.y, False)

    def _handle_resize(self, event: pygame.event.Event) -> None:
        """Track window size changes (the cache key picks them up)."""
        dpr = self.state.dpr or 1.0
        self.state.width = int(event.w / dpr)
        self.state.height = int(event.h / dpr)
        self.screen = pygame.display.get_surface()
        if self.renderer:
            self.renderer.set_screen(self.screen)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press events."""
        if event.key == pygame.K_ESCAPE:
            self.running = False

        elif event.key == pygame.K_t:
            theme = self.theme.toggle()
            print(f"Theme: {theme.value}")

        elif event.key == pygame.K_n:
            self._switch_station(next_station(self.station))

        elif event.key == pygame.K_SPACE:
            self.event_bus.publish(Event(EventType.SCRUB_RESET, source="app"))

        elif event.key == pygame.K_i:
            if self.renderer:
                self.renderer.invalidate()
            print("Curve cache invalidated")

    def _switch_station(self, station: Station) -> None:
        """Swap the data source and tell the view its caches are stale."""
        self.station = station
        self.state.station_id = station.id
        self.predictions_path = None
        self.state.predictions = self._load_predictions()
        pygame.display.set_caption(f"{self.settings.display.title} - {station.name}")
        self.event_bus.publish(
            Event(EventType.STATION_CHANGED, {"station_id": station.id}, source="app")
        )
        print(f"Station: {station.name}")


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="TideCurve - live tide-level curve with time scrubbing"
    )

    parser.add_argument(
        "-p", "--predictions",
        type=str,
        help="Path to predictions JSON file"
    )

    parser.add_argument(
        "-s", "--station",
        type=str,
        default=DEFAULT_STATION.id,
        help="Station id for synthesized predictions"
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to settings YAML file"
    )

    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Window width"
    )

    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Window height"
    )

    parser.add_argument(
        "--dpr",
        type=float,
        default=None,
        help="Device pixel ratio"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    return parser.parse_args()


def main() -> None:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        app = Application(args)
        app.run()
    except KeyboardInterrupt:
        print("\nExiting...")
    except Exception as e:
        print(f"Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
