"""Level-tinted background fill."""

import pygame

from config.colors import Colors
from config.settings import Settings
from tidecurve.core.state import VisualizationState
from .base import BaseLayer


class BackgroundLayer(BaseLayer):
    """Fills the surface with the background color for the current level."""

    def __init__(self, settings: Settings) -> None:
        super().__init__(settings)

    @property
    def name(self) -> str:
        return "background"

    def render(self, surface: pygame.Surface, state: VisualizationState) -> None:
        if not self.visible:
            return
        surface.fill(Colors.level_to_background(state.current_level, state.theme_blend))
