"""Team balancing and team mutation service for the Kickoff game-day engine."""

from __future__ import annotations

import logging
import statistics
from typing import Dict, List, Optional

from ..models import GameState, Player, Team, TeamColor
from ..utils import TEAM_PALETTE

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def calculate_average_skill(players: List[Player]) -> float:
    """Mean skill level rounded to one decimal place, 0 for an empty list."""
    if not players:
        return 0.0
    total = sum(p.skill_level for p in players)
    return round(total / len(players), 1)


def snake_draft_order(pick_count: int, team_count: int) -> List[int]:
    """
    Return the team index that receives each pick of a snake draft.

    Picks run forward across the teams, then backward, reversing every time an
    end team is reached, so the end teams pick twice in a row:
    ``0, 1, 1, 0, 0, 1`` for two teams.

    Args:
        pick_count: Number of players being distributed
        team_count: Number of teams

    Returns:
        List of team indices, one per pick
    """
    if team_count <= 0:
        return []
    order: List[int] = []
    index = 0
    direction = 1
    for _ in range(pick_count):
        order.append(index)
        at_end = (direction == 1 and index == team_count - 1) or (direction == -1 and index == 0)
        if at_end:
            direction = -direction
        else:
            index += direction
    return order


def highest_skill_player(players: List[Player]) -> Player:
    """Highest skill player; ties go to the first in list order."""
    best = players[0]
    for player in players[1:]:
        if player.skill_level > best.skill_level:
            best = player
    return best


def calculate_team_balance(teams: List[Team]) -> float:
    """Population standard deviation of team average skills (lower is better)."""
    if not teams:
        return 0.0
    return statistics.pstdev(team.average_skill for team in teams)


def validate_team_balance(teams: List[Team], max_skill_difference: float = 1.0) -> Dict[str, object]:
    """
    Check generated teams for uneven sizes, skill gaps and empty teams.

    Returns:
        Dictionary with ``is_balanced``, ``issues`` and ``suggestions``
    """
    issues: List[str] = []
    suggestions: List[str] = []

    if not teams:
        return {"is_balanced": True, "issues": issues, "suggestions": suggestions}

    sizes = [len(team.player_ids) for team in teams]
    if max(sizes) - min(sizes) > 1:
        issues.append("Teams have uneven player counts")
        suggestions.append("Redistribute players to balance team sizes")

    averages = [team.average_skill for team in teams]
    gap = max(averages) - min(averages)
    if gap > max_skill_difference:
        issues.append(f"Skill gap too large ({gap:.1f} points)")
        suggestions.append("Consider swapping players between teams to balance skills")

    empty = [team for team in teams if not team.player_ids]
    if empty:
        issues.append(f"{len(empty)} team(s) have no players")
        suggestions.append("Add players to empty teams or reduce team count")

    return {"is_balanced": not issues, "issues": issues, "suggestions": suggestions}


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class TeamService:
    """Generates balanced teams and applies membership and captaincy changes."""

    def __init__(self, game_state: GameState):
        self.game_state = game_state

    # ---------- Generation ---------- #

    def generate_teams(self) -> bool:
        """
        Build ``teams_count`` teams from the active roster with a snake draft.

        Players beyond ``teams_count * players_per_team`` (the lowest rated)
        are moved to the waitlist. Each non-empty team gets one captain: the
        first player already flagged ``is_captain``, otherwise its highest
        skill player.

        Returns:
            True if teams were generated, False if there were no active players
        """
        settings = self.game_state.settings
        active = self.game_state.active_players
        if not active:
            logger.warning("No active players available for team generation")
            return False

        team_count = max(1, settings.teams_count)
        ranked = sorted(active, key=lambda p: (-p.skill_level, p.signup_order))
        capacity = team_count * settings.players_per_team
        assigned = ranked[:capacity]
        overflow = ranked[capacity:]

        teams = [self._new_team(i) for i in range(team_count)]
        members: List[List[Player]] = [[] for _ in teams]
        for player, team_index in zip(assigned, snake_draft_order(len(assigned), team_count)):
            members[team_index].append(player)

        for team, players in zip(teams, members):
            team.player_ids = [p.id for p in players]
            team.average_skill = calculate_average_skill(players)
            if players:
                designated = next((p for p in players if p.is_captain), None)
                captain = designated or highest_skill_player(players)
                team.captain_ids = [captain.id]

        for player in overflow:
            player.is_waitlist = True

        self.game_state.teams = teams

        logger.info("Generated %d teams", team_count)
        logger.info("- Assigned %d players to teams", len(assigned))
        if overflow:
            logger.info("- Moved %d players to waitlist", len(overflow))
        partial = sum(1 for players in members if len(players) < settings.players_per_team)
        if partial:
            logger.info("- %d team(s) are partially filled", partial)
        return True

    @staticmethod
    def _new_team(index: int) -> Team:
        name, color = TEAM_PALETTE[index % len(TEAM_PALETTE)]
        cycle = index // len(TEAM_PALETTE)
        if cycle:
            name = f"{name} {cycle + 1}"
        return Team(id=f"team-{index}", name=name, color=TeamColor(color))

    # ---------- Membership ---------- #

    def detach_player(self, player_id: str, keep_team_id: Optional[str] = None) -> List[Team]:
        """
        Remove a player from every team holding them, except ``keep_team_id``.

        Teams left with players but no captain re-elect their highest skill
        player as sole captain.

        Returns:
            The teams that were changed
        """
        touched = []
        for team in self.game_state.teams:
            if team.id == keep_team_id or not team.has_player(player_id):
                continue
            team.player_ids = [pid for pid in team.player_ids if pid != player_id]
            team.captain_ids = [pid for pid in team.captain_ids if pid != player_id]
            remaining = self.game_state.team_players(team)
            if remaining and not team.captain_ids:
                team.captain_ids = [highest_skill_player(remaining).id]
            self.refresh_average(team)
            touched.append(team)
        return touched

    def move_player(self, player_id: str, from_team_id: Optional[str], to_team_id: Optional[str]) -> bool:
        """
        Move a player onto a team, or to the waitlist when ``to_team_id`` is None.

        The player is removed from every team currently holding them, not just
        ``from_team_id``. Joining a team without captains makes the player captain.

        Returns:
            True if the move was applied
        """
        player = self.game_state.find_player(player_id)
        if player is None:
            logger.debug("move_player: unknown player %s", player_id)
            return False

        destination = None
        if to_team_id is not None:
            destination = self.game_state.find_team(to_team_id)
            if destination is None:
                logger.debug("move_player: unknown team %s", to_team_id)
                return False

        self.detach_player(player_id, keep_team_id=to_team_id)
        player.is_waitlist = destination is None

        if destination is not None and not destination.has_player(player_id):
            destination.player_ids.append(player_id)
            if not destination.captain_ids:
                destination.captain_ids = [player_id]
            self.refresh_average(destination)

        logger.debug("Moved player %s from %s to %s", player_id, from_team_id, to_team_id or "waitlist")
        return True

    def refresh_average(self, team: Team) -> None:
        team.average_skill = calculate_average_skill(self.game_state.team_players(team))

    # ---------- Captaincy ---------- #

    def set_captain(self, team_id: str, player_id: str) -> bool:
        """
        Toggle a team member in or out of the team's captain set.

        Removing the last captain of a team is rejected.

        Returns:
            True if the captain set changed
        """
        team = self.game_state.find_team(team_id)
        if team is None or not team.has_player(player_id):
            return False

        if team.is_captain(player_id):
            return self._remove_captain(team, player_id)
        team.captain_ids.append(player_id)
        return True

    def toggle_player_captain(self, player_id: str) -> bool:
        """
        Flip a player's captain flag and sync their team's captain set.

        If un-flagging would remove the last captain of the player's team the
        whole operation is rejected and nothing changes.

        Returns:
            True if the toggle was applied
        """
        player = self.game_state.find_player(player_id)
        if player is None:
            return False

        should_be_captain = not player.is_captain
        team = self.game_state.team_for_player(player_id)
        if team is not None:
            currently_captain = team.is_captain(player_id)
            if currently_captain and not should_be_captain:
                if not self._remove_captain(team, player_id):
                    return False
            elif should_be_captain and not currently_captain:
                team.captain_ids.append(player_id)

        player.is_captain = should_be_captain
        return True

    @staticmethod
    def _remove_captain(team: Team, player_id: str) -> bool:
        remaining = [pid for pid in team.captain_ids if pid != player_id]
        if not remaining and team.player_ids:
            logger.warning("Refusing to remove the last captain of team %s", team.id)
            return False
        team.captain_ids = remaining
        return True

    # ---------- Misc ---------- #

    def update_team_color(self, team_id: str, color: TeamColor) -> bool:
        team = self.game_state.find_team(team_id)
        if team is None:
            return False
        team.color = color
        return True

    def reset_teams(self) -> None:
        """Clear teams together with the schedule and standings built on them."""
        self.game_state.teams = []
        self.game_state.matches = []
        self.game_state.standings = []
        self.game_state.current_match_id = None
