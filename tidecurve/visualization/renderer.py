"""Main render coordinator for the tide view."""

from typing import Dict, List, Optional
import pygame

from config.settings import Settings
from tidecurve.core.event_bus import EventBus
from tidecurve.core.state import VisualizationState

from .layers.base import BaseLayer
from .layers.background_layer import BackgroundLayer
from .layers.curve_layer import TideCurveLayer


class Renderer:
    """
    Main render coordinator.

    Manages the render layers and coordinates drawing to the screen.
    """

    def __init__(
        self,
        screen: pygame.Surface,
        settings: Settings,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.screen = screen
        self.settings = settings
        self.event_bus = event_bus

        # Layers (in draw order)
        self._layers: List[BaseLayer] = []
        self._layer_visibility: Dict[str, bool] = {}
        self.curve_layer: Optional[TideCurveLayer] = None

    def initialize(self) -> None:
        """Create all layers."""
        self.teardown()

        self.curve_layer = TideCurveLayer(self.settings, self.event_bus)
        self._layers.append(BackgroundLayer(self.settings))
        self._layers.append(self.curve_layer)

        for layer in self._layers:
            self._layer_visibility[layer.name] = True

    def render(self, state: VisualizationState) -> None:
        """Render the complete frame."""
        for layer in self._layers:
            if self._layer_visibility.get(layer.name, True):
                layer.render(self.screen, state)

    def handle_event(self, event: pygame.event.Event, state: VisualizationState) -> bool:
        """Offer an input event to layers top-down. Returns True if consumed."""
        for layer in reversed(self._layers):
            if layer.handle_event(event, state):
                return True
        return False

    def invalidate(self) -> None:
        """Force cached layers to rebuild on the next frame."""
        if self.curve_layer:
            self.curve_layer.invalidate()

    def set_screen(self, screen: pygame.Surface) -> None:
        """Swap the target surface (after a resize)."""
        self.screen = screen

    def toggle_layer(self, layer_name: str) -> bool:
        """Toggle layer visibility. Returns new state."""
        current = self._layer_visibility.get(layer_name, True)
        self._layer_visibility[layer_name] = not current
        return self._layer_visibility[layer_name]

    def get_layer_visibility(self) -> Dict[str, bool]:
        """Get all layer visibility states."""
        return dict(self._layer_visibility)

    def teardown(self) -> None:
        """Release layer timers and subscriptions."""
        for layer in self._layers:
            layer.teardown()
        self._layers.clear()
        self._layer_visibility.clear()
        self.curve_layer = None
