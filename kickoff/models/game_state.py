"""
GameState model for the Kickoff game-day engine.

This module contains the GameState aggregate which represents the complete
state of a pickup session (roster, teams, schedule, standings and the match
clock) together with its JSON codec.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .match import Match, Standing
from .player import Player
from .settings import GameSettings
from .team import Team
from ..utils import DEFAULT_MATCH_DURATION_MIN, DEFAULT_TOURNAMENT_NAME, today_str


class TimerStatus(Enum):
    """Derived state of the countdown clock."""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass
class TimerState:
    """
    Countdown clock for the current match.

    Attributes:
        time_remaining: Seconds left, never negative
        is_running: Whether the clock is counting down
        is_paused: Whether the clock was paused mid-match; never set together
            with is_running
    """
    time_remaining: int = DEFAULT_MATCH_DURATION_MIN * 60
    is_running: bool = False
    is_paused: bool = False

    @property
    def status(self) -> TimerStatus:
        if self.is_running:
            return TimerStatus.RUNNING
        if self.is_paused:
            return TimerStatus.PAUSED
        return TimerStatus.IDLE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time_remaining": self.time_remaining,
            "is_running": self.is_running,
            "is_paused": self.is_paused,
            "status": self.status.value,
        }


@dataclass
class GameState:
    """
    Represents the complete state of a pickup session.

    Attributes:
        players: Roster in signup order
        teams: Generated teams
        matches: Scheduled and played matches
        settings: Session settings
        standings: League table derived from completed matches
        timer_state: Countdown clock
        tournament_name: Display name for the session
        current_match_id: Match currently being played, if any
        last_reset_date: Calendar date (YYYY-MM-DD) of the last reset
    """
    players: List[Player] = field(default_factory=list)
    teams: List[Team] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)
    settings: GameSettings = field(default_factory=GameSettings)
    standings: List[Standing] = field(default_factory=list)
    timer_state: Optional[TimerState] = None
    tournament_name: str = DEFAULT_TOURNAMENT_NAME
    current_match_id: Optional[str] = None
    last_reset_date: str = field(default_factory=today_str)

    def __post_init__(self):
        if self.timer_state is None:
            self.timer_state = TimerState(time_remaining=self.settings.match_duration * 60)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def find_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def find_team(self, team_id: Optional[str]) -> Optional[Team]:
        return next((t for t in self.teams if t.id == team_id), None)

    def find_match(self, match_id: str) -> Optional[Match]:
        return next((m for m in self.matches if m.id == match_id), None)

    def team_for_player(self, player_id: str) -> Optional[Team]:
        """Return the team holding the player, if any."""
        return next((t for t in self.teams if t.has_player(player_id)), None)

    def team_players(self, team: Team) -> List[Player]:
        """Resolve a team's member ids through the roster, in team order."""
        by_id = {p.id: p for p in self.players}
        return [by_id[pid] for pid in team.player_ids if pid in by_id]

    @property
    def active_players(self) -> List[Player]:
        return [p for p in self.players if not p.is_waitlist]

    @property
    def waitlist(self) -> List[Player]:
        return [p for p in self.players if p.is_waitlist]

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_json(self) -> dict:
        """
        Convert the persisted subset of GameState to a JSON-serializable dictionary.

        The timer is not included; it rehydrates idle.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {
            "players": [p.to_dict() for p in self.players],
            "teams": [t.to_dict() for t in self.teams],
            "matches": [m.to_dict() for m in self.matches],
            "settings": self.settings.to_dict(),
            "standings": [s.to_dict() for s in self.standings],
            "tournament_name": self.tournament_name,
            "current_match_id": self.current_match_id,
            "last_reset_date": self.last_reset_date,
        }

    @staticmethod
    def from_json(data: dict) -> "GameState":
        """
        Create GameState from a current-shape JSON dictionary.

        Legacy shapes must be upgraded first with
        :func:`kickoff.services.migrations.migrate_state`.

        Args:
            data: Dictionary with game state data

        Returns:
            New GameState instance
        """
        settings = GameSettings.from_dict(data.get("settings"))
        gs = GameState(settings=settings)
        gs.players = [Player.from_dict(p) for p in data.get("players") or []]
        gs.teams = [Team.from_dict(t) for t in data.get("teams") or []]
        gs.matches = [Match.from_dict(m) for m in data.get("matches") or []]
        gs.standings = [Standing.from_dict(s) for s in data.get("standings") or []]
        gs.tournament_name = data.get("tournament_name") or DEFAULT_TOURNAMENT_NAME
        gs.current_match_id = data.get("current_match_id")
        gs.last_reset_date = data.get("last_reset_date") or today_str()
        gs.timer_state = TimerState(time_remaining=settings.match_duration * 60)
        return gs
