"""Game settings model for the Kickoff game-day engine."""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

from ..utils import (
    DEFAULT_TEAMS_COUNT, DEFAULT_PLAYERS_PER_TEAM, DEFAULT_GAMES_PER_TEAM,
    DEFAULT_MATCH_DURATION_MIN, DEFAULT_FIELD_NUMBER,
    WIN_POINTS, DRAW_POINTS, LOSS_POINTS,
)


@dataclass
class GameSettings:
    """
    Tunable settings for a session.

    Attributes:
        teams_count: Number of teams generated by the balancer
        players_per_team: Team capacity; overflow goes to the waitlist
        games_per_team: Target number of games each team plays
        match_duration: Match length in minutes
        field_number: Pitch the session is played on
        win_points: Standings points for a win
        draw_points: Standings points for a draw
        loss_points: Standings points for a loss
    """
    teams_count: int = DEFAULT_TEAMS_COUNT
    players_per_team: int = DEFAULT_PLAYERS_PER_TEAM
    games_per_team: int = DEFAULT_GAMES_PER_TEAM
    match_duration: int = DEFAULT_MATCH_DURATION_MIN
    field_number: int = DEFAULT_FIELD_NUMBER
    win_points: int = WIN_POINTS
    draw_points: int = DRAW_POINTS
    loss_points: int = LOSS_POINTS

    @classmethod
    def field_names(cls) -> set:
        return {f.name for f in fields(cls)}

    @staticmethod
    def minimum_for(name: str) -> int:
        """Smallest accepted value: point weights may be 0, everything else 1."""
        return 0 if name.endswith("_points") else 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'GameSettings':
        """
        Create settings from a (possibly partial) dictionary.

        Missing fields fall back to the defaults and unknown keys are ignored.

        Raises:
            ValueError: If a present field is not an integer or is out of range
        """
        if not data:
            return cls()
        known = cls.field_names()
        values = {key: int(value) for key, value in data.items() if key in known}
        for key, value in values.items():
            if value < cls.minimum_for(key):
                raise ValueError(f"Setting {key} out of range: {value}")
        return cls(**values)
