"""Configuration constants for the PyGame Crazy Eights UI."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Colors:
    """Color palette for the table."""

    # Felt and background
    FELT_GREEN: Tuple[int, int, int] = (34, 87, 59)
    FELT_DARK: Tuple[int, int, int] = (25, 65, 44)
    BACKGROUND: Tuple[int, int, int] = (18, 18, 24)

    # Card colors
    CARD_WHITE: Tuple[int, int, int] = (245, 243, 238)
    CARD_RED: Tuple[int, int, int] = (192, 57, 57)
    CARD_BLACK: Tuple[int, int, int] = (28, 28, 32)
    CARD_BACK: Tuple[int, int, int] = (65, 85, 130)
    CARD_BACK_PATTERN: Tuple[int, int, int] = (85, 105, 150)

    # UI accents
    GOLD: Tuple[int, int, int] = (255, 200, 87)
    GLOW_HIGHLIGHT: Tuple[int, int, int] = (255, 255, 200)

    # Difficulty accents
    EASY: Tuple[int, int, int] = (46, 160, 110)
    MEDIUM: Tuple[int, int, int] = (220, 150, 40)
    HARD: Tuple[int, int, int] = (200, 70, 90)

    # Text
    TEXT_WHITE: Tuple[int, int, int] = (240, 240, 240)
    TEXT_MUTED: Tuple[int, int, int] = (150, 150, 160)

    # Buttons
    BUTTON_DEFAULT: Tuple[int, int, int] = (60, 70, 90)
    BUTTON_HOVER: Tuple[int, int, int] = (80, 95, 120)
    BUTTON_PRESSED: Tuple[int, int, int] = (45, 55, 70)
    BUTTON_DISABLED: Tuple[int, int, int] = (50, 50, 55)


@dataclass(frozen=True)
class Dimensions:
    """Dimension constants for layout and sizing."""

    # Screen
    SCREEN_WIDTH: int = 1280
    SCREEN_HEIGHT: int = 720
    TARGET_FPS: int = 60

    # Cards
    CARD_WIDTH: int = 90
    CARD_HEIGHT: int = 126
    CARD_CORNER_RADIUS: int = 8
    CARD_SHADOW_OFFSET: int = 4

    # Layout
    HAND_SPACING: int = 30
    PLAYER_HAND_Y: int = 520
    AI_HAND_Y: int = 90
    PILE_Y: int = 300
    CENTER_X: int = SCREEN_WIDTH // 2
    CENTER_Y: int = SCREEN_HEIGHT // 2

    # UI Elements
    BUTTON_WIDTH: int = 140
    BUTTON_HEIGHT: int = 45
    BUTTON_CORNER_RADIUS: int = 6


# Global instances for easy import
COLORS = Colors()
DIMENSIONS = Dimensions()
