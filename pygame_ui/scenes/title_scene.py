"""Title screen scene with difficulty selection."""

import math
from typing import Optional

import pygame

from core.state import Difficulty
from pygame_ui.config import COLORS, DIMENSIONS
from pygame_ui.core.engine_adapter import DIFFICULTY_LABELS, EngineAdapter
from pygame_ui.scenes.base_scene import BaseScene
from pygame_ui.components.button import Button

DIFFICULTY_COLORS = {
    Difficulty.EASY: COLORS.EASY,
    Difficulty.MEDIUM: COLORS.MEDIUM,
    Difficulty.HARD: COLORS.HARD,
}


class TitleScene(BaseScene):
    """Title screen with a pulsing title and one button per difficulty.

    Hovering a difficulty shows its description; clicking it deals a new
    game and moves to the table.
    """

    def __init__(self, adapter: EngineAdapter):
        super().__init__()
        self.adapter = adapter

        self._time = 0.0
        self._hovered: Optional[Difficulty] = None

        # Fonts (initialized lazily)
        self._title_font: Optional[pygame.font.Font] = None
        self._desc_font: Optional[pygame.font.Font] = None

        self.buttons: dict[Difficulty, Button] = {}

    def _init_fonts(self) -> None:
        """Initialize fonts (must be called after pygame.init)."""
        if self._title_font is None:
            self._title_font = pygame.font.Font(None, 96)
            self._desc_font = pygame.font.Font(None, 32)

    def _init_buttons(self) -> None:
        if self.buttons:
            return
        spacing = DIMENSIONS.BUTTON_WIDTH + 40
        start_x = DIMENSIONS.CENTER_X - spacing
        for i, difficulty in enumerate(Difficulty):
            label, _ = DIFFICULTY_LABELS[difficulty]
            self.buttons[difficulty] = Button(
                x=start_x + i * spacing,
                y=DIMENSIONS.CENTER_Y + 40,
                text=label.upper(),
                bg_color=DIFFICULTY_COLORS[difficulty],
                on_click=lambda d=difficulty: self._start_game(d),
            )

    def _start_game(self, difficulty: Difficulty) -> None:
        self.adapter.start(difficulty)
        self.change_scene("game")

    def on_enter(self) -> None:
        super().on_enter()
        self._init_fonts()
        self._init_buttons()
        self._hovered = None

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self._hovered = next(
                (d for d, b in self.buttons.items() if b.rect.collidepoint(event.pos)),
                None,
            )
        for button in self.buttons.values():
            if button.handle_event(event):
                return True
        return False

    def update(self, dt: float) -> None:
        self._time += dt
        for button in self.buttons.values():
            button.update(dt)

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(COLORS.FELT_DARK)

        scale = 1.0 + 0.03 * math.sin(self._time * 2.0)
        title = self._title_font.render("CRAZY EIGHTS", True, COLORS.GOLD)
        title = pygame.transform.rotozoom(title, 0, scale)
        surface.blit(title, title.get_rect(center=(DIMENSIONS.CENTER_X, DIMENSIONS.CENTER_Y - 120)))

        for button in self.buttons.values():
            button.draw(surface)

        if self._hovered is not None:
            text = DIFFICULTY_LABELS[self._hovered][1]
            desc = self._desc_font.render(text, True, COLORS.TEXT_WHITE)
        else:
            desc = self._desc_font.render("Choose a difficulty", True, COLORS.TEXT_MUTED)
        surface.blit(desc, desc.get_rect(center=(DIMENSIONS.CENTER_X, DIMENSIONS.CENTER_Y + 120)))
