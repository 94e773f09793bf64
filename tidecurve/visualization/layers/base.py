"""Base class for visualization layers."""

from abc import ABC, abstractmethod
import pygame

from config.settings import Settings
from tidecurve.core.state import VisualizationState


class BaseLayer(ABC):
    """
    Abstract base class for visualization layers.

    Each layer renders one aspect of the view.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.visible = True
        self.opacity = 1.0

    @property
    @abstractmethod
    def name(self) -> str:
        """Layer name for identification."""
        pass

    @abstractmethod
    def render(self, surface: pygame.Surface, state: VisualizationState) -> None:
        """
        Render the layer to the surface.

        Args:
            surface: Surface to render to, in device pixels
            state: Current visualization snapshot
        """
        pass

    def handle_event(self, event: pygame.event.Event, state: VisualizationState) -> bool:
        """
        Offer an input event to the layer.

        Returns:
            True if the layer consumed the event
        """
        return False

    def teardown(self) -> None:
        """Release timers and subscriptions."""

    def set_visible(self, visible: bool) -> None:
        """Set layer visibility."""
        self.visible = visible

    def set_opacity(self, opacity: float) -> None:
        """Set layer opacity (0.0 - 1.0)."""
        self.opacity = max(0.0, min(1.0, opacity))
