"""Rule violations reported by the rule engine."""


class GameRuleError(Exception):
    """Base class for rejected moves.

    Instances are returned inside a ``Transition`` rather than raised, so
    callers can inspect the reason without unwinding the stack.
    """

    @property
    def code(self) -> str:
        return type(self).__name__


class IllegalMove(GameRuleError):
    """The card is not held by the actor, not playable, or it is not their turn."""


class InvalidPhaseTransition(GameRuleError):
    """The command is not allowed in the current phase."""
