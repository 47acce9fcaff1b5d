"""Main game scene: the Crazy Eights table."""

from typing import Optional

import pygame

from core.state import Actor, GamePhase
from pygame_ui.config import COLORS, DIMENSIONS
from pygame_ui.core.engine_adapter import SUIT_MAP, EngineAdapter, GameSnapshot
from pygame_ui.scenes.base_scene import BaseScene
from pygame_ui.components.button import Button
from pygame_ui.components.card import SUIT_SYMBOLS, CardSprite


class GameScene(BaseScene):
    """The table.

    Layout, top to bottom: the computer's face-down hand, the draw and
    discard piles with the active suit, the status line, the human's hand
    with playable cards glowing, and the action buttons. While an eight is
    waiting for its suit, the four suit buttons replace the draw button.
    """

    def __init__(self, adapter: EngineAdapter):
        super().__init__()
        self.adapter = adapter
        self.snapshot: Optional[GameSnapshot] = None

        self.player_cards: list[CardSprite] = []
        self.ai_cards: list[CardSprite] = []
        self.draw_pile: Optional[CardSprite] = None
        self.discard_pile: Optional[CardSprite] = None

        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

        self.draw_button: Optional[Button] = None
        self.surrender_button: Optional[Button] = None
        self.menu_button: Optional[Button] = None
        self.suit_buttons: list[Button] = []

    def _init_ui(self) -> None:
        if self._font is not None:
            return
        self._font = pygame.font.Font(None, 30)
        self._big_font = pygame.font.Font(None, 72)

        bottom = DIMENSIONS.SCREEN_HEIGHT - 40
        self.draw_button = Button(
            x=DIMENSIONS.CENTER_X - 160, y=bottom, text="DRAW", on_click=self.adapter.draw
        )
        self.surrender_button = Button(
            x=DIMENSIONS.CENTER_X, y=bottom, text="SURRENDER",
            bg_color=COLORS.HARD, on_click=self.adapter.surrender,
        )
        self.menu_button = Button(
            x=DIMENSIONS.CENTER_X + 160, y=bottom, text="NEW GAME",
            on_click=self._back_to_title,
        )

        spacing = 110
        start_x = DIMENSIONS.CENTER_X - spacing * 1.5
        for i, suit_name in enumerate(SUIT_MAP.values()):
            button = Button(
                x=start_x + i * spacing,
                y=DIMENSIONS.PILE_Y + 110,
                text=f"{SUIT_SYMBOLS[suit_name]} {suit_name.capitalize()}",
                width=100,
                font_size=24,
                on_click=lambda s=suit_name: self.adapter.choose_suit(s),
            )
            self.suit_buttons.append(button)

    def _back_to_title(self) -> None:
        self.adapter.stop()
        self.change_scene("title")

    @property
    def _buttons(self) -> list[Button]:
        return [self.draw_button, self.surrender_button, self.menu_button, *self.suit_buttons]

    def on_enter(self) -> None:
        super().on_enter()
        self._init_ui()
        self._refresh()

    def on_exit(self) -> None:
        super().on_exit()
        self.adapter.stop()

    def _refresh(self) -> None:
        """Rebuild sprites and button states from the adapter."""
        snap = self.adapter.snapshot()
        self.snapshot = snap

        # Sprites survive while the hand is unchanged so hover easing carries over
        hand_key = [(c.card_id, c.playable) for c in snap.player_hand]
        if hand_key != [(c.info.card_id, c.info.playable) for c in self.player_cards]:
            self.player_cards = []
            spacing = DIMENSIONS.CARD_WIDTH + 10 if len(snap.player_hand) <= 10 else DIMENSIONS.HAND_SPACING + 20
            start_x = DIMENSIONS.CENTER_X - spacing * (len(snap.player_hand) - 1) / 2
            for i, info in enumerate(snap.player_hand):
                sprite = CardSprite(start_x + i * spacing, DIMENSIONS.PLAYER_HAND_Y, info)
                sprite.set_hovered(False)
                self.player_cards.append(sprite)

        start_x = DIMENSIONS.CENTER_X - DIMENSIONS.HAND_SPACING * (snap.ai_card_count - 1) / 2
        self.ai_cards = [
            CardSprite(start_x + i * DIMENSIONS.HAND_SPACING, DIMENSIONS.AI_HAND_Y, face_up=False)
            for i in range(snap.ai_card_count)
        ]

        self.draw_pile = (
            CardSprite(DIMENSIONS.CENTER_X - 120, DIMENSIONS.PILE_Y, face_up=False)
            if snap.deck_count
            else None
        )
        self.discard_pile = (
            CardSprite(DIMENSIONS.CENTER_X + 20, DIMENSIONS.PILE_Y, snap.top_card)
            if snap.top_card
            else None
        )

        playing = snap.phase == GamePhase.PLAYING
        self.draw_button.visible = not snap.choosing_suit
        self.draw_button.set_enabled(snap.can_draw)
        self.surrender_button.visible = playing
        self.surrender_button.set_enabled(snap.can_surrender)
        for button in self.suit_buttons:
            button.visible = snap.choosing_suit

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self._back_to_title()
                return True
            if event.key == pygame.K_d:
                self.adapter.draw()
                return True

        for button in self._buttons:
            if button.handle_event(event):
                self._refresh()
                return True

        if event.type == pygame.MOUSEMOTION:
            # Topmost card wins where cards overlap
            target = next(
                (c for c in reversed(self.player_cards) if c.contains_point(event.pos)), None
            )
            for card in self.player_cards:
                card.set_hovered(card is target)

        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            for index in range(len(self.player_cards) - 1, -1, -1):
                if self.player_cards[index].contains_point(event.pos):
                    self.adapter.play(index)
                    self._refresh()
                    return True
        return False

    def update(self, dt: float) -> None:
        self.adapter.update(dt)
        self._refresh()
        for card in self.player_cards:
            card.update(dt)
        for button in self._buttons:
            button.update(dt)

    def _draw_status(self, surface: pygame.Surface, snap: GameSnapshot) -> None:
        status = self._font.render(snap.status, True, COLORS.TEXT_WHITE)
        surface.blit(status, status.get_rect(center=(DIMENSIONS.CENTER_X, DIMENSIONS.PILE_Y + 170)))

        counts = self._font.render(
            f"Deck: {snap.deck_count}   Computer: {snap.ai_card_count} cards",
            True,
            COLORS.TEXT_MUTED,
        )
        surface.blit(counts, (20, 20))

        if snap.active_suit:
            color = COLORS.CARD_RED if snap.active_suit in ("hearts", "diamonds") else COLORS.TEXT_WHITE
            suit = self._font.render(
                f"Suit: {SUIT_SYMBOLS[snap.active_suit]} {snap.active_suit.capitalize()}", True, color
            )
            surface.blit(suit, (DIMENSIONS.CENTER_X + 90, DIMENSIONS.PILE_Y - 10))

    def _draw_game_over(self, surface: pygame.Surface, snap: GameSnapshot) -> None:
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 140))
        surface.blit(overlay, (0, 0))
        text = "YOU WIN!" if snap.winner == Actor.PLAYER else "COMPUTER WINS"
        banner = self._big_font.render(text, True, COLORS.GOLD)
        surface.blit(banner, banner.get_rect(center=(DIMENSIONS.CENTER_X, DIMENSIONS.CENTER_Y - 40)))
        self.menu_button.draw(surface)

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(COLORS.FELT_GREEN)
        snap = self.snapshot

        for card in self.ai_cards:
            card.draw(surface)
        if self.draw_pile:
            self.draw_pile.draw(surface)
        if self.discard_pile:
            self.discard_pile.draw(surface)
        for card in self.player_cards:
            card.draw(surface)

        self._draw_status(surface, snap)
        for button in self._buttons:
            button.draw(surface)

        if snap.phase == GamePhase.GAME_OVER:
            self._draw_game_over(surface, snap)
