"""Interactive button component with hover and press states."""

from enum import Enum, auto
from typing import Callable, Optional, Tuple

import pygame

from pygame_ui.config import COLORS, DIMENSIONS


class ButtonState(Enum):
    """Visual state of a button."""

    NORMAL = auto()
    HOVERED = auto()
    PRESSED = auto()
    DISABLED = auto()


class Button:
    """A clickable button with hover scaling.

    The x/y position is the button's center.
    """

    def __init__(
        self,
        x: float,
        y: float,
        text: str,
        on_click: Optional[Callable[[], None]] = None,
        width: float = DIMENSIONS.BUTTON_WIDTH,
        height: float = DIMENSIONS.BUTTON_HEIGHT,
        font_size: int = 28,
        bg_color: Optional[Tuple[int, int, int]] = None,
        text_color: Tuple[int, int, int] = COLORS.TEXT_WHITE,
        enabled: bool = True,
    ):
        """Initialize a button.

        Args:
            x: Center x position
            y: Center y position
            text: Button text
            on_click: Callback function when clicked
            width: Button width
            height: Button height
            font_size: Text font size
            bg_color: Normal background color
            text_color: Text color
            enabled: Whether button is interactive
        """
        self.text = text
        self.on_click = on_click
        self.width = width
        self.height = height
        self.center_x = x
        self.center_y = y
        self.font_size = font_size
        self.bg_color = bg_color or COLORS.BUTTON_DEFAULT
        self.text_color = text_color
        self.enabled = enabled
        self.visible = True

        self.state = ButtonState.NORMAL
        self._is_pressed = False
        self._font: Optional[pygame.font.Font] = None

        # Animation
        self.scale = 1.0
        self.target_scale = 1.0

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, self.font_size)
        return self._font

    @property
    def rect(self) -> pygame.Rect:
        """Get the button's rectangle."""
        return pygame.Rect(
            int(self.center_x - self.width / 2),
            int(self.center_y - self.height / 2),
            int(self.width),
            int(self.height),
        )

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled
        self.state = ButtonState.NORMAL if enabled else ButtonState.DISABLED

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Handle a pygame event.

        Returns:
            True if the button was clicked
        """
        if not self.enabled or not self.visible:
            return False

        if event.type == pygame.MOUSEMOTION:
            hovered = self.rect.collidepoint(event.pos)
            if not self._is_pressed:
                self.state = ButtonState.HOVERED if hovered else ButtonState.NORMAL
                self.target_scale = 1.05 if hovered else 1.0

        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1 and self.rect.collidepoint(event.pos):
                self.state = ButtonState.PRESSED
                self._is_pressed = True
                self.target_scale = 0.95

        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button == 1 and self._is_pressed:
                self._is_pressed = False
                if self.rect.collidepoint(event.pos):
                    self.state = ButtonState.HOVERED
                    self.target_scale = 1.05
                    if self.on_click:
                        self.on_click()
                    return True
                self.state = ButtonState.NORMAL
                self.target_scale = 1.0

        return False

    def update(self, dt: float) -> None:
        self.scale += (self.target_scale - self.scale) * min(1.0, 15.0 * dt)

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the button."""
        if not self.visible:
            return

        if not self.enabled:
            bg_color = COLORS.BUTTON_DISABLED
            text_color = COLORS.TEXT_MUTED
        elif self.state == ButtonState.PRESSED:
            bg_color = COLORS.BUTTON_PRESSED
            text_color = self.text_color
        elif self.state == ButtonState.HOVERED:
            bg_color = COLORS.BUTTON_HOVER
            text_color = self.text_color
        else:
            bg_color = self.bg_color
            text_color = self.text_color

        width = int(self.width * self.scale)
        height = int(self.height * self.scale)
        rect = pygame.Rect(0, 0, width, height)
        rect.center = (int(self.center_x), int(self.center_y))
        pygame.draw.rect(surface, bg_color, rect, border_radius=DIMENSIONS.BUTTON_CORNER_RADIUS)

        text_surface = self.font.render(self.text, True, text_color)
        surface.blit(text_surface, text_surface.get_rect(center=rect.center))
