"""Card sprite with hover lift and playable glow."""

from enum import Enum, auto
from typing import Optional, Tuple

import pygame

from pygame_ui.config import COLORS, DIMENSIONS
from pygame_ui.core.engine_adapter import UICardInfo

SUIT_SYMBOLS = {
    "hearts": "♥",
    "diamonds": "♦",
    "clubs": "♣",
    "spades": "♠",
}


class CardState(Enum):
    """Visual state of a card."""

    IDLE = auto()
    HOVERED = auto()
    DISABLED = auto()


class CardSprite:
    """A card drawn face up or face down at a fixed position.

    Playable cards glow; hovering a playable card lifts it.
    """

    def __init__(
        self,
        x: float = 0,
        y: float = 0,
        info: Optional[UICardInfo] = None,
        face_up: bool = True,
    ):
        self.x = x
        self.y = y
        self.info = info
        self.face_up = face_up and info is not None
        self.state = CardState.IDLE

        self.glow_intensity = 0.0
        self._hover_offset = 0.0
        self._target_hover_offset = 0.0

    @property
    def playable(self) -> bool:
        return self.info is not None and self.info.playable

    @property
    def rect(self) -> pygame.Rect:
        """Rectangle centered on the card's position."""
        rect = pygame.Rect(0, 0, DIMENSIONS.CARD_WIDTH, DIMENSIONS.CARD_HEIGHT)
        rect.center = (int(self.x), int(self.y - self._hover_offset))
        return rect

    def contains_point(self, point: Tuple[float, float]) -> bool:
        return self.rect.collidepoint(point)

    def set_hovered(self, hovered: bool) -> None:
        if not self.playable:
            self.state = CardState.DISABLED
            self._target_hover_offset = 0.0
            return
        self.state = CardState.HOVERED if hovered else CardState.IDLE
        self._target_hover_offset = 20.0 if hovered else 0.0

    def update(self, dt: float) -> None:
        """Ease the hover lift and glow toward their targets."""
        self._hover_offset += (self._target_hover_offset - self._hover_offset) * min(1.0, 15.0 * dt)

        target_glow = 0.0
        if self.playable:
            target_glow = 1.0 if self.state == CardState.HOVERED else 0.5
        self.glow_intensity += (target_glow - self.glow_intensity) * min(1.0, 8.0 * dt)

    def _draw_face(self, surface: pygame.Surface, rect: pygame.Rect) -> None:
        pygame.draw.rect(surface, COLORS.CARD_WHITE, rect, border_radius=DIMENSIONS.CARD_CORNER_RADIUS)
        pygame.draw.rect(surface, COLORS.CARD_BLACK, rect, width=2, border_radius=DIMENSIONS.CARD_CORNER_RADIUS)

        is_red = self.info.suit in ("hearts", "diamonds")
        color = COLORS.CARD_RED if is_red else COLORS.CARD_BLACK
        symbol = SUIT_SYMBOLS.get(self.info.suit, "?")

        font_size = max(16, int(rect.height * 0.18))
        font = pygame.font.Font(None, font_size)
        surface.blit(font.render(self.info.value, True, color), (rect.x + 8, rect.y + 6))
        surface.blit(font.render(symbol, True, color), (rect.x + 8, rect.y + font_size))

        center_font = pygame.font.Font(None, int(rect.height * 0.45))
        center = center_font.render(symbol, True, color)
        surface.blit(center, center.get_rect(center=rect.center))

        if self.info.is_wild:
            pygame.draw.rect(surface, COLORS.GOLD, rect.inflate(-8, -8), width=2, border_radius=4)

    def _draw_back(self, surface: pygame.Surface, rect: pygame.Rect) -> None:
        pygame.draw.rect(surface, COLORS.CARD_BACK, rect, border_radius=DIMENSIONS.CARD_CORNER_RADIUS)
        pygame.draw.rect(surface, COLORS.CARD_BLACK, rect, width=2, border_radius=DIMENSIONS.CARD_CORNER_RADIUS)
        pygame.draw.rect(surface, COLORS.CARD_BACK_PATTERN, rect.inflate(-12, -12), border_radius=4)

    def draw(self, surface: pygame.Surface) -> None:
        """Draw shadow, glow, then the card itself."""
        rect = self.rect

        shadow = rect.move(DIMENSIONS.CARD_SHADOW_OFFSET, DIMENSIONS.CARD_SHADOW_OFFSET)
        pygame.draw.rect(surface, COLORS.FELT_DARK, shadow, border_radius=DIMENSIONS.CARD_CORNER_RADIUS)

        if self.glow_intensity > 0.05:
            glow = pygame.Surface((rect.width + 16, rect.height + 16), pygame.SRCALPHA)
            alpha = int(120 * self.glow_intensity)
            pygame.draw.rect(glow, (*COLORS.GLOW_HIGHLIGHT, alpha), glow.get_rect(), border_radius=12)
            surface.blit(glow, (rect.x - 8, rect.y - 8))

        if self.face_up:
            self._draw_face(surface, rect)
        else:
            self._draw_back(surface, rect)
