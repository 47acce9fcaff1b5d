"""Turn controller, transitions, and event system."""

from core.game.events import GameEvent, EventType
from core.game.moves import Transition
from core.game.timer import AIThinkingTimer, CancellationToken
from core.game.engine import CrazyEightsGame

__all__ = [
    "GameEvent",
    "EventType",
    "Transition",
    "AIThinkingTimer",
    "CancellationToken",
    "CrazyEightsGame",
]
