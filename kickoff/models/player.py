"""
Player model for the Kickoff game-day engine.

This module contains the Player dataclass which represents a registered
player on the day's roster.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict

from ..utils import format_timestamp, now_dt, parse_timestamp


@dataclass
class Player:
    """
    Represents a player signed up for the pickup session.

    Attributes:
        id: Unique, stable identifier (never reused)
        name: Display name; names are not a key and may repeat
        skill_level: Self-reported skill on the 1-5 scale
        is_waitlist: Whether the player is excluded from team assignment
        is_captain: User-designated captain flag, independent of team captaincy
        signup_order: Position in the signup sequence, assigned at creation
        created_at: When the player signed up
    """
    id: str
    name: str
    skill_level: int
    is_waitlist: bool = False
    is_captain: bool = False
    signup_order: int = 0
    created_at: datetime = field(default_factory=now_dt)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert player to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the player
        """
        return {
            "id": self.id,
            "name": self.name,
            "skill_level": self.skill_level,
            "is_waitlist": self.is_waitlist,
            "is_captain": self.is_captain,
            "signup_order": self.signup_order,
            "created_at": format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        """
        Create player from dictionary for JSON deserialization.

        Args:
            data: Dictionary representation of player

        Returns:
            Player instance

        Raises:
            KeyError: If ``id``, ``name`` or ``skill_level`` is missing
            ValueError: If ``created_at`` is not a valid timestamp
        """
        created_at = parse_timestamp(data.get("created_at")) or now_dt()
        return cls(
            id=str(data["id"]),
            name=data["name"],
            skill_level=int(data["skill_level"]),
            is_waitlist=bool(data.get("is_waitlist", False)),
            is_captain=bool(data.get("is_captain", False)),
            signup_order=int(data.get("signup_order", 0)),
            created_at=created_at,
        )
