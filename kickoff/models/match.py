"""Match and standings models for the Kickoff game-day engine."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from ..utils import DEFAULT_MATCH_DURATION_MIN, format_timestamp, parse_timestamp


class MatchStatus(Enum):
    """Lifecycle of a single match."""
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


@dataclass
class Match:
    """
    A single game between two teams.

    Attributes:
        id: Unique identifier
        game_number: Position in the schedule, starting at 1
        team_a_id: First team; never equal to team_b_id
        team_b_id: Second team
        score_a: Goals for team A (non-negative)
        score_b: Goals for team B (non-negative)
        status: Scheduled, in progress or completed
        duration: Match length in minutes
        start_time: When the match was started
        end_time: When a result was first recorded
    """
    id: str
    game_number: int
    team_a_id: str
    team_b_id: str
    score_a: int = 0
    score_b: int = 0
    status: MatchStatus = MatchStatus.SCHEDULED
    duration: int = DEFAULT_MATCH_DURATION_MIN
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return self.status is MatchStatus.COMPLETED

    def involves(self, team_id: str) -> bool:
        return team_id in (self.team_a_id, self.team_b_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "game_number": self.game_number,
            "team_a_id": self.team_a_id,
            "team_b_id": self.team_b_id,
            "score_a": self.score_a,
            "score_b": self.score_b,
            "status": self.status.value,
            "duration": self.duration,
            "start_time": format_timestamp(self.start_time),
            "end_time": format_timestamp(self.end_time),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Match':
        """Create from dictionary, parsing serialized timestamps."""
        return cls(
            id=str(data["id"]),
            game_number=int(data["game_number"]),
            team_a_id=str(data["team_a_id"]),
            team_b_id=str(data["team_b_id"]),
            score_a=max(0, int(data.get("score_a", 0))),
            score_b=max(0, int(data.get("score_b", 0))),
            status=MatchStatus(data.get("status", MatchStatus.SCHEDULED.value)),
            duration=int(data.get("duration", DEFAULT_MATCH_DURATION_MIN)),
            start_time=parse_timestamp(data.get("start_time")),
            end_time=parse_timestamp(data.get("end_time")),
        )


@dataclass
class Standing:
    """League table row for one team, derived entirely from completed matches."""
    team_id: str
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    points: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team_id": self.team_id,
            "played": self.played,
            "won": self.won,
            "drawn": self.drawn,
            "lost": self.lost,
            "goals_for": self.goals_for,
            "goals_against": self.goals_against,
            "goal_difference": self.goal_difference,
            "points": self.points,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Standing':
        return cls(
            team_id=str(data["team_id"]),
            played=int(data.get("played", 0)),
            won=int(data.get("won", 0)),
            drawn=int(data.get("drawn", 0)),
            lost=int(data.get("lost", 0)),
            goals_for=int(data.get("goals_for", 0)),
            goals_against=int(data.get("goals_against", 0)),
            goal_difference=int(data.get("goal_difference", 0)),
            points=int(data.get("points", 0)),
        )
