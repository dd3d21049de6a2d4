"""
Game store for the Kickoff game-day engine.

The store owns the authoritative :class:`GameState`, routes every operation to
the service responsible for it and writes the state to disk after each
mutation. It also implements the session lifecycle: resets, the daily
auto-reset and export/import.
"""
import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TypeVar

from ..models import GameSettings, GameState, Match, MatchStatus, Player, Standing, TeamColor, TimerState
from ..utils import DEFAULT_TOURNAMENT_NAME, today_str
from .persistence_service import PersistenceService, StateImportError, export_document, parse_export
from .roster_service import RosterService
from .schedule_service import ScheduleService
from .standings_service import calculate_standings
from .team_service import TeamService
from .timer_service import TimerService

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

ACTIVE_MATCH_REASON = "Cannot reset during active match. Complete or cancel the current match first."
TIMER_RUNNING_REASON = "Cannot reset while timer is running. Stop the timer first."


@dataclass
class ResetOutcome:
    """Result of a guarded reset; ``reason`` explains a refusal."""
    success: bool
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"success": self.success}
        if self.reason:
            data["reason"] = self.reason
        return data


def persists(method: F) -> F:
    """Save the store's state after the wrapped operation returns."""

    @functools.wraps(method)
    def wrapper(self: "GameStore", *args, **kwargs):
        result = method(self, *args, **kwargs)
        self.save()
        return result

    return wrapper  # type: ignore[return-value]


class GameStore:
    """
    Single state-holding service object for a session.

    The services all share one GameState instance. Lifecycle operations
    replace its contents in place so that shared reference stays valid.
    """

    def __init__(
        self,
        game_state: Optional[GameState] = None,
        persistence_service: Optional[PersistenceService] = None,
        *,
        team_service: Optional[TeamService] = None,
        roster_service: Optional[RosterService] = None,
        schedule_service: Optional[ScheduleService] = None,
        timer_service: Optional[TimerService] = None,
    ):
        """
        Initialize GameStore and run the daily auto-reset check.

        Args:
            game_state: Rehydrated state; a fresh session when omitted
            persistence_service: Storage backend; ``~/.kickoff`` when omitted
            team_service: Team balancer bound to ``game_state``
            roster_service: Roster manager bound to ``game_state``
            schedule_service: Schedule generator bound to ``game_state``
            timer_service: Match timer bound to ``game_state``
        """
        self.game_state = game_state or GameState()
        self.persistence_service = persistence_service or PersistenceService()
        self.team_service = team_service or TeamService(self.game_state)
        self.roster_service = roster_service or RosterService(self.game_state, self.team_service)
        self.schedule_service = schedule_service or ScheduleService(self.game_state)
        self.timer_service = timer_service or TimerService(self.game_state)

        self.check_daily_auto_reset()

    def save(self) -> bool:
        return self.persistence_service.save_state(self.game_state)

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------
    @persists
    def add_player(self, name: str, skill_level: int, is_waitlist: bool = False) -> Optional[Player]:
        return self.roster_service.add_player(name, skill_level, is_waitlist)

    @persists
    def remove_player(self, player_id: str) -> bool:
        return self.roster_service.remove_player(player_id)

    @persists
    def toggle_waitlist(self, player_id: str) -> bool:
        return self.roster_service.toggle_waitlist(player_id)

    @persists
    def update_player(self, player_id: str, name: Optional[str] = None, skill_level: Optional[int] = None) -> bool:
        return self.roster_service.update_player(player_id, name=name, skill_level=skill_level)

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------
    @persists
    def generate_teams(self) -> bool:
        return self.team_service.generate_teams()

    @persists
    def move_player(self, player_id: str, from_team_id: Optional[str], to_team_id: Optional[str]) -> bool:
        return self.team_service.move_player(player_id, from_team_id, to_team_id)

    @persists
    def set_captain(self, team_id: str, player_id: str) -> bool:
        return self.team_service.set_captain(team_id, player_id)

    @persists
    def toggle_player_captain(self, player_id: str) -> bool:
        return self.team_service.toggle_player_captain(player_id)

    @persists
    def update_team_color(self, team_id: str, color: TeamColor) -> bool:
        return self.team_service.update_team_color(team_id, color)

    @persists
    def reset_teams(self) -> None:
        self.team_service.reset_teams()

    # ------------------------------------------------------------------
    # Matches
    # ------------------------------------------------------------------
    @persists
    def generate_schedule(self, allow_back_to_back: bool = False) -> bool:
        return self.schedule_service.generate_schedule(allow_back_to_back=allow_back_to_back)

    @persists
    def add_match(self, team_a_id: str, team_b_id: str) -> Optional[Match]:
        return self.schedule_service.add_match(team_a_id, team_b_id)

    @persists
    def swap_teams_in_match(self, match_id: str, new_team_a_id: str, new_team_b_id: str) -> bool:
        return self.schedule_service.swap_teams_in_match(match_id, new_team_a_id, new_team_b_id)

    @persists
    def update_score(self, match_id: str, score_a: int, score_b: int) -> bool:
        return self.schedule_service.update_score(match_id, score_a, score_b)

    @persists
    def start_match(self, match_id: str) -> bool:
        return self.schedule_service.start_match(match_id)

    @persists
    def cancel_match(self, match_id: str) -> bool:
        return self.schedule_service.cancel_match(match_id)

    # Timer state is not persisted, so timer controls skip the save.

    def start_timer(self) -> bool:
        return self.timer_service.start()

    def pause_timer(self) -> bool:
        return self.timer_service.pause()

    def reset_timer(self) -> None:
        self.timer_service.reset()

    def tick_timer(self) -> bool:
        return self.timer_service.tick()

    # ------------------------------------------------------------------
    # Settings and standings
    # ------------------------------------------------------------------
    @persists
    def update_settings(self, changes: Optional[Dict[str, Any]] = None, **kwargs: Any) -> bool:
        """
        Apply a partial settings update.

        Changes come as a mapping, as keywords, or both. Unknown keys and
        values that are not integers in range are logged and skipped. When
        anything is applied the timer's remaining time is set to the
        (possibly new) match duration, whatever the timer is doing.

        Returns:
            True if at least one setting was applied
        """
        known = GameSettings.field_names()
        applied = False
        for key, value in {**(changes or {}), **kwargs}.items():
            if key not in known:
                logger.warning("Ignoring unknown setting %r", key)
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                logger.warning("Ignoring non-integer value %r for setting %s", value, key)
                continue
            if value < GameSettings.minimum_for(key):
                logger.warning("Ignoring out of range value %r for setting %s", value, key)
                continue
            setattr(self.game_state.settings, key, value)
            applied = True

        if applied:
            self.timer_service.set_remaining_to_duration()
            self.schedule_service.refresh_standings()
        return applied

    @persists
    def set_tournament_name(self, name: str) -> None:
        self.game_state.tournament_name = name

    @persists
    def calculate_standings(self) -> List[Standing]:
        self.schedule_service.refresh_standings()
        return self.game_state.standings

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def _clear_session(self) -> None:
        self.game_state.players = []
        self.game_state.teams = []
        self.game_state.matches = []
        self.game_state.standings = []
        self.game_state.current_match_id = None
        self.game_state.timer_state = TimerState(time_remaining=self.game_state.settings.match_duration * 60)

    @persists
    def reset_all(self) -> None:
        """Clear the session without any guard. Settings are kept."""
        self._clear_session()

    @persists
    def reset_all_safe(self) -> ResetOutcome:
        """
        Clear the session unless a game is under way.

        Refused while any match is in progress or the timer is running. On
        success the session is cleared, the timer reset and today recorded as
        the last reset date; settings are kept.
        """
        if any(m.status is MatchStatus.IN_PROGRESS for m in self.game_state.matches):
            logger.warning("Safe reset refused: a match is in progress")
            return ResetOutcome(False, ACTIVE_MATCH_REASON)
        if self.game_state.timer_state.is_running:
            logger.warning("Safe reset refused: the timer is running")
            return ResetOutcome(False, TIMER_RUNNING_REASON)

        self._clear_session()
        self.game_state.last_reset_date = today_str()
        return ResetOutcome(True)

    def check_daily_auto_reset(self) -> bool:
        """
        Clear the session when the calendar date has changed since the last reset.

        Unlike :meth:`reset_all_safe` this is unconditional. Settings are kept
        and the tournament name goes back to its default.

        Returns:
            True if a reset happened
        """
        today = today_str()
        if self.game_state.last_reset_date == today:
            return False

        logger.info("Auto-reset triggered: %s -> %s", self.game_state.last_reset_date, today)
        self._clear_session()
        self.game_state.tournament_name = DEFAULT_TOURNAMENT_NAME
        self.game_state.last_reset_date = today
        self.save()
        return True

    @persists
    def reset_app(self) -> None:
        """Clear the session and restore default settings and tournament name."""
        self.game_state.settings = GameSettings()
        self._clear_session()
        self.game_state.tournament_name = DEFAULT_TOURNAMENT_NAME

    def export_data(self) -> str:
        return export_document(self.game_state)

    @persists
    def import_data(self, text: str) -> bool:
        """
        Replace the session with an exported document.

        The new state is fully built before anything is assigned, so a bad
        document leaves the session untouched. The tournament name and last
        reset date are kept.

        Returns:
            True if the import was applied
        """
        try:
            imported = parse_export(text)
        except StateImportError as exc:
            logger.warning("Failed to import data: %s", exc)
            return False

        self.game_state.players = imported.players
        self.game_state.teams = imported.teams
        self.game_state.matches = imported.matches
        self.game_state.settings = imported.settings
        self.game_state.current_match_id = None
        self.game_state.timer_state = TimerState(time_remaining=imported.settings.match_duration * 60)
        self.game_state.standings = calculate_standings(imported.matches, imported.teams, imported.settings)
        logger.info(
            "Imported %d players, %d teams and %d matches",
            len(imported.players), len(imported.teams), len(imported.matches),
        )
        return True
