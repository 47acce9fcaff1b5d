"""Pure state transitions for dealing, playing, drawing, and wild suits.

Every function takes a ``GameState`` snapshot and returns a ``Transition``
holding the next snapshot. A rejected move returns the input snapshot
untouched together with the reason, so nothing here raises on bad input
from a player.
"""

from dataclasses import dataclass, replace
from random import Random

from core.cards import Card, Suit, build_deck
from core.errors import GameRuleError, IllegalMove, InvalidPhaseTransition
from core.game.events import EventType
from core.hand import Hand
from core.rules import is_playable
from core.state import DECK_SIZE, Actor, Difficulty, GamePhase, GameState
from core.strategy.opponent import choose_wild_suit

HAND_SIZE = 8


@dataclass(frozen=True)
class Transition:
    """Result of applying a move to a snapshot."""

    state: GameState
    outcome: EventType
    actor: Actor | None = None
    card: Card | None = None
    suit: Suit | None = None
    error: GameRuleError | None = None

    @property
    def ok(self) -> bool:
        """Check if the move was accepted."""
        return self.error is None

    @classmethod
    def rejected(
        cls,
        state: GameState,
        error: GameRuleError,
        actor: Actor | None = None,
        card: Card | None = None,
    ) -> "Transition":
        """Build a failed transition that leaves the state unchanged."""
        return cls(
            state=state,
            outcome=EventType.INVALID_ACTION,
            actor=actor,
            card=card,
            error=error,
        )


def deal_new_game(
    difficulty: Difficulty = Difficulty.MEDIUM,
    rng: Random | None = None,
    hand_size: int = HAND_SIZE,
) -> GameState:
    """
    Shuffle a fresh deck and deal the opening position.

    The first ``hand_size`` cards go to the human and the next
    ``hand_size`` to the computer. The first non-eight left in the deck
    starts the discard pile and sets the active suit. The human moves first.

    Args:
        difficulty: Computer opponent strength
        rng: Random number generator for reproducible deals
        hand_size: Cards dealt to each player

    Returns:
        A snapshot in the PLAYING phase

    Raises:
        ValueError: If the hand size leaves too few cards to flip a starter
    """
    # Five cards left over guarantees at least one non-eight to flip.
    if hand_size < 1 or DECK_SIZE - 2 * hand_size < 5:
        raise ValueError(f"Cannot deal {hand_size} cards to each player")

    cards = list(build_deck(rng))
    player_cards = cards[:hand_size]
    ai_cards = cards[hand_size:2 * hand_size]
    remaining = cards[2 * hand_size:]

    starter_index = next(i for i, c in enumerate(remaining) if not c.is_wild)
    starter = remaining.pop(starter_index)

    return GameState(
        deck=tuple(remaining),
        player_hand=Hand.of(player_cards),
        ai_hand=Hand.of(ai_cards),
        discard_pile=(starter,),
        current_turn=Actor.PLAYER,
        status=GamePhase.PLAYING,
        winner=None,
        active_suit=starter.suit,
        difficulty=difficulty,
    )


def _turn_error(state: GameState, actor: Actor) -> GameRuleError | None:
    """Return why an actor may not play or draw right now, if anything."""
    if state.status != GamePhase.PLAYING:
        return InvalidPhaseTransition(f"Cannot act while the game is in {state.status}")
    if state.current_turn != actor:
        return IllegalMove(f"It is not {actor.name}'s turn")
    return None


def _with_hand(state: GameState, actor: Actor, hand: Hand, **changes) -> GameState:
    """Replace one actor's hand along with any other fields."""
    if actor == Actor.PLAYER:
        return replace(state, player_hand=hand, **changes)
    return replace(state, ai_hand=hand, **changes)


def apply_play(state: GameState, card: Card, actor: Actor) -> Transition:
    """
    Play a card from an actor's hand onto the discard pile.

    Emptying the hand ends the game with that actor as winner. An eight
    played by the human moves to WILD_SELECTION with the turn unchanged; an
    eight played by the computer has its suit chosen on the spot and passes
    the turn. Any other card sets the active suit and passes the turn.

    Args:
        state: Current snapshot
        card: Card to play
        actor: Who is playing

    Returns:
        The transition, rejected with ``IllegalMove`` or
        ``InvalidPhaseTransition`` when the play is not allowed
    """
    error = _turn_error(state, actor)
    if error is not None:
        return Transition.rejected(state, error, actor, card)

    hand = state.hand_for(actor)
    if card not in hand:
        return Transition.rejected(
            state, IllegalMove(f"{card} is not in {actor.name}'s hand"), actor, card
        )
    if not is_playable(card, state.top_card, state.active_suit):
        return Transition.rejected(
            state,
            IllegalMove(f"{card} cannot be played on {state.top_card} ({state.active_suit})"),
            actor,
            card,
        )

    remaining = hand.without_card(card)
    played = _with_hand(state, actor, remaining, discard_pile=state.discard_pile + (card,))

    if remaining.is_empty:
        return Transition(
            state=replace(played, status=GamePhase.GAME_OVER, winner=actor),
            outcome=EventType.GAME_OVER,
            actor=actor,
            card=card,
        )

    if card.is_wild:
        if actor == Actor.PLAYER:
            return Transition(
                state=replace(played, status=GamePhase.WILD_SELECTION),
                outcome=EventType.WILD_PLAYED,
                actor=actor,
                card=card,
            )
        suit = choose_wild_suit(remaining)
        return Transition(
            state=replace(played, active_suit=suit, current_turn=actor.opponent),
            outcome=EventType.WILD_PLAYED,
            actor=actor,
            card=card,
            suit=suit,
        )

    return Transition(
        state=replace(played, active_suit=card.suit, current_turn=actor.opponent),
        outcome=EventType.PLAYED,
        actor=actor,
        card=card,
        suit=card.suit,
    )


def apply_draw(state: GameState, actor: Actor) -> Transition:
    """
    Draw the top card of the deck into an actor's hand.

    A playable draw keeps the turn with the actor so they can play it;
    otherwise the turn passes. With an empty deck nothing is drawn and the
    turn passes.
    """
    error = _turn_error(state, actor)
    if error is not None:
        return Transition.rejected(state, error, actor)

    if not state.deck:
        return Transition(
            state=replace(state, current_turn=actor.opponent),
            outcome=EventType.DECK_EMPTY_SKIPPED,
            actor=actor,
        )

    drawn = state.deck[-1]
    hand = state.hand_for(actor).with_card(drawn)

    if is_playable(drawn, state.top_card, state.active_suit):
        return Transition(
            state=_with_hand(state, actor, hand, deck=state.deck[:-1]),
            outcome=EventType.DREW_PLAYABLE,
            actor=actor,
            card=drawn,
        )

    return Transition(
        state=_with_hand(state, actor, hand, deck=state.deck[:-1], current_turn=actor.opponent),
        outcome=EventType.DREW_UNPLAYABLE,
        actor=actor,
        card=drawn,
    )


def select_wild_suit(state: GameState, suit: Suit) -> Transition:
    """Declare the suit after the human's eight and pass the turn."""
    if state.status != GamePhase.WILD_SELECTION:
        return Transition.rejected(
            state,
            InvalidPhaseTransition(f"No wild suit to choose while the game is in {state.status}"),
            Actor.PLAYER,
        )

    return Transition(
        state=replace(
            state,
            active_suit=suit,
            status=GamePhase.PLAYING,
            current_turn=state.current_turn.opponent,
        ),
        outcome=EventType.WILD_SUIT_SELECTED,
        actor=state.current_turn,
        suit=suit,
    )


def surrender(state: GameState) -> Transition:
    """Concede the game on the human's behalf."""
    if state.status not in (GamePhase.PLAYING, GamePhase.WILD_SELECTION):
        return Transition.rejected(
            state,
            InvalidPhaseTransition(f"Cannot surrender while the game is in {state.status}"),
            Actor.PLAYER,
        )

    return Transition(
        state=replace(state, status=GamePhase.GAME_OVER, winner=Actor.AI),
        outcome=EventType.SURRENDERED,
        actor=Actor.PLAYER,
    )
