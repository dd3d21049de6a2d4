"""
Roster service for the Kickoff game-day engine.

This module provides the business logic for signing players up, removing
them and moving them on and off the waitlist.
"""
import logging
import uuid
from typing import List, Optional

from ..models import GameState, Player
from ..utils import MIN_SKILL_LEVEL, MAX_SKILL_LEVEL, now_dt
from .team_service import TeamService

logger = logging.getLogger(__name__)


class RosterService:
    """
    Service class for managing the session roster.

    Player ids are random and never reused; names are not a key, so two
    players may share a name.
    """

    def __init__(self, game_state: GameState, team_service: Optional[TeamService] = None):
        """
        Initialize RosterService.

        Args:
            game_state: Game state holding the roster
            team_service: Team service used to keep teams consistent on removal
        """
        self.game_state = game_state
        self.team_service = team_service or TeamService(game_state)

    def validate_player_data(self, name: str, skill_level: int) -> List[str]:
        """
        Validate player fields and return a list of validation errors.

        Args:
            name: Player name (already trimmed)
            skill_level: Skill rating

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []
        if not name:
            errors.append("Player name is required")
        if isinstance(skill_level, bool) or not isinstance(skill_level, int):
            errors.append("Skill level must be an integer")
        elif not MIN_SKILL_LEVEL <= skill_level <= MAX_SKILL_LEVEL:
            errors.append(f"Skill level must be between {MIN_SKILL_LEVEL} and {MAX_SKILL_LEVEL}")
        return errors

    def add_player(self, name: str, skill_level: int, is_waitlist: bool = False) -> Optional[Player]:
        """
        Sign a player up at the end of the roster.

        Args:
            name: Player name; surrounding whitespace is trimmed
            skill_level: Skill rating on the 1-5 scale
            is_waitlist: Whether the player starts on the waitlist

        Returns:
            The new Player, or None if the data was rejected
        """
        name = (name or "").strip()
        errors = self.validate_player_data(name, skill_level)
        if errors:
            logger.warning("Rejected player signup: %s", "; ".join(errors))
            return None

        player = Player(
            id=uuid.uuid4().hex,
            name=name,
            skill_level=skill_level,
            is_waitlist=is_waitlist,
            signup_order=self._next_signup_order(),
            created_at=now_dt(),
        )
        self.game_state.players.append(player)
        return player

    def _next_signup_order(self) -> int:
        if not self.game_state.players:
            return 0
        return max(p.signup_order for p in self.game_state.players) + 1

    def remove_player(self, player_id: str) -> bool:
        """
        Remove a player from the roster and from any team.

        Returns:
            True if the player existed and was removed
        """
        if self.game_state.find_player(player_id) is None:
            return False
        self.team_service.detach_player(player_id)
        self.game_state.players = [p for p in self.game_state.players if p.id != player_id]
        return True

    def toggle_waitlist(self, player_id: str) -> bool:
        """
        Flip a player's waitlist flag.

        Team membership is left as is, so a player on a team can be waitlisted
        without being removed from it.
        """
        player = self.game_state.find_player(player_id)
        if player is None:
            return False
        player.is_waitlist = not player.is_waitlist
        return True

    def update_player(
        self,
        player_id: str,
        name: Optional[str] = None,
        skill_level: Optional[int] = None,
    ) -> bool:
        """
        Edit a player's name and/or skill level.

        The average skill of the player's team is recomputed.

        Returns:
            True if the player was updated
        """
        player = self.game_state.find_player(player_id)
        if player is None:
            return False

        new_name = player.name if name is None else name.strip()
        new_skill = player.skill_level if skill_level is None else skill_level
        errors = self.validate_player_data(new_name, new_skill)
        if errors:
            logger.warning("Rejected update for player %s: %s", player_id, "; ".join(errors))
            return False

        player.name = new_name
        player.skill_level = new_skill
        team = self.game_state.team_for_player(player_id)
        if team is not None:
            self.team_service.refresh_average(team)
        return True
