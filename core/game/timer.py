"""Cancellable countdown for the computer's deferred move."""

from dataclasses import dataclass


@dataclass
class CancellationToken:
    """
    Handle for one scheduled computer move.

    A scheduler (pygame loop, asyncio task) holds the token and presents it
    back when its delay elapses; the engine ignores any token that has been
    cancelled or superseded.
    """

    generation: int
    cancelled: bool = False

    def cancel(self) -> None:
        """Mark the scheduled move as void."""
        self.cancelled = True


class AIThinkingTimer:
    """
    Tracks the computer's simulated thinking time.

    Arming issues a fresh token and restarts the elapsed counter; cancelling
    voids the token and tears the counter down. The timer does no waiting
    itself: callers feed it elapsed time through ``advance``.
    """

    def __init__(self, delay: float = 1.5) -> None:
        """
        Initialize the timer.

        Args:
            delay: Seconds the computer "thinks" before moving
        """
        if delay < 0:
            raise ValueError("delay must not be negative")
        self.delay = delay
        self.elapsed = 0.0
        self._generation = 0
        self._token: CancellationToken | None = None

    @property
    def token(self) -> CancellationToken | None:
        """The live token, if a move is pending."""
        return self._token

    @property
    def pending(self) -> bool:
        """Check if a computer move is scheduled."""
        return self._token is not None

    @property
    def thinking_seconds(self) -> int:
        """Whole seconds spent thinking on the pending move."""
        return int(self.elapsed)

    @property
    def is_due(self) -> bool:
        """Check if the pending move's delay has elapsed."""
        return self.pending and self.elapsed >= self.delay

    def arm(self) -> CancellationToken:
        """Schedule a new move, voiding any earlier one."""
        self.cancel()
        self._generation += 1
        self._token = CancellationToken(generation=self._generation)
        return self._token

    def cancel(self) -> bool:
        """
        Void the pending move, if any.

        Returns:
            True if a pending move was cancelled
        """
        self.elapsed = 0.0
        if self._token is None:
            return False
        self._token.cancel()
        self._token = None
        return True

    def advance(self, dt: float) -> bool:
        """
        Add elapsed time to the pending move.

        Args:
            dt: Seconds since the last call

        Returns:
            True once the pending move is due
        """
        if not self.pending:
            return False
        self.elapsed += dt
        return self.is_due

    def is_current(self, token: CancellationToken | None) -> bool:
        """Check if a token still refers to the pending move."""
        return token is not None and token is self._token and not token.cancelled
