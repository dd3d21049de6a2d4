"""Match countdown timer service for the Kickoff game-day engine."""

import logging

from ..models import GameState, TimerState, TimerStatus
from ..utils import fmt_mmss

logger = logging.getLogger(__name__)


class TimerService:
    """Service for driving the match countdown clock.

    The clock does not read wall time; something outside calls :meth:`tick`
    once per second while it is running.
    """

    def __init__(self, game_state: GameState):
        self.game_state = game_state

    @property
    def timer(self) -> TimerState:
        return self.game_state.timer_state

    @property
    def full_duration(self) -> int:
        return self.game_state.settings.match_duration * 60

    # ------------------------------------------------------------------
    # Core timer controls
    # ------------------------------------------------------------------
    def start(self) -> bool:
        """Start or resume the countdown. Returns False if already running."""

        if self.timer.is_running:
            return False
        self.timer.is_running = True
        self.timer.is_paused = False
        return True

    def pause(self) -> bool:
        """Pause a running countdown; a no-op in any other state."""

        if not self.timer.is_running:
            return False
        self.timer.is_running = False
        self.timer.is_paused = True
        return True

    def reset(self) -> None:
        """Stop the clock and rewind it to the full match duration."""

        self.game_state.timer_state = TimerState(time_remaining=self.full_duration)

    def tick(self) -> bool:
        """Count down one second.

        Returns:
            True if the clock moved; a stopped or expired clock does not.
        """

        if not self.timer.is_running or self.timer.time_remaining <= 0:
            return False
        self.timer.time_remaining = max(0, self.timer.time_remaining - 1)
        if self.timer.time_remaining == 0:
            logger.info("Match clock expired")
        return True

    def set_remaining_to_duration(self) -> None:
        """Rewind the remaining time after the match duration changes, keeping run state."""

        self.timer.time_remaining = self.full_duration

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------
    def status(self) -> TimerStatus:
        return self.timer.status

    def is_expired(self) -> bool:
        return self.timer.time_remaining == 0

    def formatted_remaining(self) -> str:
        return fmt_mmss(self.timer.time_remaining)
