"""Team model for the Kickoff game-day engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class TeamColor(Enum):
    """Bib colours available to teams."""
    BLACK = "black"
    WHITE = "white"
    ORANGE = "orange"
    BLUE = "blue"
    YELLOW = "yellow"
    RED = "red"
    GREEN = "green"
    PURPLE = "purple"
    PINK = "pink"
    TEAL = "teal"
    NO_PENNIES = "no-pennies"


@dataclass
class Team:
    """
    A generated team.

    Membership is stored as player ids and resolved through the roster, so a
    player is never shared between two team objects.

    Attributes:
        id: Stable identifier for this generation (``team-<index>``)
        name: Display name
        color: Bib colour
        player_ids: Ordered member ids, no duplicates
        captain_ids: Captain ids in election order, always a subset of player_ids
        average_skill: Mean member skill rounded to one decimal, 0 when empty
    """
    id: str
    name: str
    color: TeamColor = TeamColor.NO_PENNIES
    player_ids: List[str] = field(default_factory=list)
    captain_ids: List[str] = field(default_factory=list)
    average_skill: float = 0.0

    def has_player(self, player_id: str) -> bool:
        return player_id in self.player_ids

    def is_captain(self, player_id: str) -> bool:
        return player_id in self.captain_ids

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color.value,
            "player_ids": list(self.player_ids),
            "captain_ids": list(self.captain_ids),
            "average_skill": self.average_skill,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Team':
        """Create from a current-shape dictionary (see ``services.migrations``)."""
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            color=TeamColor(data.get("color", TeamColor.NO_PENNIES.value)),
            player_ids=[str(pid) for pid in data.get("player_ids", [])],
            captain_ids=[str(pid) for pid in data.get("captain_ids", [])],
            average_skill=float(data.get("average_skill", 0.0)),
        )
