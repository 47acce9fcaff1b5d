"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal

DifficultyName = Literal["EASY", "MEDIUM", "HARD"]
SuitName = Literal["HEARTS", "DIAMONDS", "CLUBS", "SPADES"]


# Requests
class NewGameRequest(BaseModel):
    """Request to deal a new game."""

    difficulty: DifficultyName | None = None


class PlayRequest(BaseModel):
    """Request to play a card from the human's hand."""

    card_id: str = Field(..., min_length=3, description="Card id such as '8-HEARTS'")


class WildSuitRequest(BaseModel):
    """Request to declare the suit after playing an eight."""

    suit: SuitName


# Responses
class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    rank: str
    suit: str
    symbol: str
    is_red: bool
    playable: bool = False


class GameStateResponse(BaseModel):
    """Current game state as seen by the human player."""

    phase: str
    current_turn: str
    winner: str | None
    difficulty: str
    active_suit: str | None
    top_card: CardResponse | None
    player_hand: list[CardResponse]
    ai_hand_count: int
    deck_count: int
    discard_count: int
    can_surrender: bool
    ai_pending: bool
    last_event: str | None = None


class NewGameResponse(BaseModel):
    """Response for a freshly dealt game."""

    session_id: str
    state: GameStateResponse
