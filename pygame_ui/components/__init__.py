"""UI components for the Crazy Eights table."""

from pygame_ui.components.card import CardSprite, CardState
from pygame_ui.components.button import Button, ButtonState

__all__ = [
    "CardSprite",
    "CardState",
    "Button",
    "ButtonState",
]
