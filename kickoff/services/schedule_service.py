"""Schedule generation and match mutation service for the Kickoff game-day engine."""

from __future__ import annotations

import logging
import uuid
from itertools import combinations
from typing import Dict, List, Optional, Set, Tuple

from ..models import GameSettings, GameState, Match, MatchStatus, Team
from ..utils import now_dt
from .standings_service import calculate_standings

logger = logging.getLogger(__name__)

Pairing = Tuple[str, str]


def all_pairings(team_ids: List[str]) -> List[Pairing]:
    """Every unordered pair of teams exactly once, in team order."""
    return list(combinations(team_ids, 2))


def validate_schedule(matches: List[Match], teams: List[Team], settings: GameSettings) -> Dict[str, object]:
    """
    Check a schedule for broken team references, numbering gaps, back-to-back
    games and uneven game counts.

    Returns:
        Dictionary with ``is_valid``, ``issues`` and ``warnings``
    """
    issues: List[str] = []
    warnings: List[str] = []

    if not matches:
        issues.append("No matches scheduled")
        return {"is_valid": False, "issues": issues, "warnings": warnings}

    team_ids = {team.id for team in teams}
    for match in matches:
        if match.team_a_id not in team_ids:
            issues.append(f"Match {match.game_number}: Invalid team A ID")
        if match.team_b_id not in team_ids:
            issues.append(f"Match {match.game_number}: Invalid team B ID")
        if match.team_a_id == match.team_b_id:
            issues.append(f"Match {match.game_number}: Team cannot play itself")

    numbers = sorted(match.game_number for match in matches)
    if numbers != list(range(1, len(numbers) + 1)):
        warnings.append("Game numbering is not sequential")

    stats = get_schedule_stats(matches, teams)
    if stats["back_to_back_games"]:
        warnings.append(f"{stats['back_to_back_games']} back-to-back appearance(s)")

    counts = list(stats["games_per_team"].values())
    if counts:
        if max(counts) - min(counts) > 1:
            warnings.append(f"Uneven games per team ({min(counts)}-{max(counts)})")
        if max(counts) > settings.games_per_team:
            warnings.append(
                f"Some teams exceed maximum games per team ({max(counts)} > {settings.games_per_team})"
            )

    return {"is_valid": not issues, "issues": issues, "warnings": warnings}


def get_schedule_stats(matches: List[Match], teams: List[Team]) -> Dict[str, object]:
    """Summarize a schedule: games per team, back-to-backs, unique matchups and length."""
    games_per_team: Dict[str, int] = {team.id: 0 for team in teams}
    last_game: Dict[str, int] = {}
    matchups: Set[Tuple[str, ...]] = set()
    back_to_back = 0

    for match in sorted(matches, key=lambda m: m.game_number):
        for team_id in (match.team_a_id, match.team_b_id):
            games_per_team[team_id] = games_per_team.get(team_id, 0) + 1
            previous = last_game.get(team_id)
            if previous is not None and match.game_number - previous == 1:
                back_to_back += 1
            last_game[team_id] = match.game_number
        matchups.add(tuple(sorted((match.team_a_id, match.team_b_id))))

    counts = list(games_per_team.values())
    # 5 minute changeover between games
    estimated = sum(m.duration for m in matches) + max(0, len(matches) - 1) * 5
    return {
        "total_games": len(matches),
        "games_per_team": games_per_team,
        "average_games_per_team": sum(counts) / len(counts) if counts else 0.0,
        "back_to_back_games": back_to_back,
        "unique_matchups": len(matchups),
        "estimated_duration": estimated,
    }


class ScheduleService:
    """Builds the round-robin schedule and applies match results."""

    def __init__(self, game_state: GameState):
        self.game_state = game_state

    # ------------------------------------------------------------------
    # Schedule generation
    # ------------------------------------------------------------------
    def generate_schedule(self, allow_back_to_back: bool = False) -> bool:
        """
        Replace the schedule with a round-robin that gives every team a rest game.

        Pairings are walked in order, repeatedly; a pair is placed in the next
        slot when it has not been used and neither team played in the previous
        slot. Generation stops at ``min(pairs, games_per_team * teams // 2)``
        matches, or earlier when a full sweep places nothing, in which case the
        schedule is simply shorter.

        Args:
            allow_back_to_back: When a strict sweep places nothing, place the
                first unused pair anyway instead of stopping

        Returns:
            True if a schedule was generated, False with fewer than two teams
        """
        teams = self.game_state.teams
        if len(teams) < 2:
            logger.debug("generate_schedule: need at least two teams, have %d", len(teams))
            return False

        settings = self.game_state.settings
        pairings = all_pairings([team.id for team in teams])
        target = min(len(pairings), settings.games_per_team * len(teams) // 2)

        scheduled: List[Pairing] = []
        used: Set[Pairing] = set()

        while len(scheduled) < target:
            placed = False
            for pair in pairings:
                if len(scheduled) >= target:
                    break
                if pair in used or self._played_last(scheduled, pair):
                    continue
                scheduled.append(pair)
                used.add(pair)
                placed = True

            if not placed and allow_back_to_back:
                pair = next(p for p in pairings if p not in used)
                scheduled.append(pair)
                used.add(pair)
                placed = True

            if not placed:
                break

        if len(scheduled) < target:
            logger.info(
                "Rest constraint limited the schedule to %d of %d matches",
                len(scheduled), target,
            )

        self.game_state.matches = [
            Match(
                id=f"match-{number}",
                game_number=number,
                team_a_id=team_a,
                team_b_id=team_b,
                duration=settings.match_duration,
            )
            for number, (team_a, team_b) in enumerate(scheduled, start=1)
        ]
        self.game_state.current_match_id = None
        self.refresh_standings()
        return True

    @staticmethod
    def _played_last(scheduled: List[Pairing], pair: Pairing) -> bool:
        if not scheduled:
            return False
        previous = scheduled[-1]
        return pair[0] in previous or pair[1] in previous

    # ------------------------------------------------------------------
    # Match mutations
    # ------------------------------------------------------------------
    def _valid_pair(self, team_a_id: str, team_b_id: str) -> bool:
        return (
            team_a_id != team_b_id
            and self.game_state.find_team(team_a_id) is not None
            and self.game_state.find_team(team_b_id) is not None
        )

    def add_match(self, team_a_id: str, team_b_id: str) -> Optional[Match]:
        """Append an ad-hoc match after the last game number."""
        if not self._valid_pair(team_a_id, team_b_id):
            logger.debug("add_match: invalid teams %s vs %s", team_a_id, team_b_id)
            return None

        last_number = max((m.game_number for m in self.game_state.matches), default=0)
        match = Match(
            id=uuid.uuid4().hex,
            game_number=last_number + 1,
            team_a_id=team_a_id,
            team_b_id=team_b_id,
            duration=self.game_state.settings.match_duration,
        )
        self.game_state.matches.append(match)
        return match

    def swap_teams_in_match(self, match_id: str, new_team_a_id: str, new_team_b_id: str) -> bool:
        """
        Reassign the teams playing a match.

        A scheduled match has its score reset; a completed match keeps its
        score, which now counts for the new teams.
        """
        match = self.game_state.find_match(match_id)
        if match is None or not self._valid_pair(new_team_a_id, new_team_b_id):
            return False

        match.team_a_id = new_team_a_id
        match.team_b_id = new_team_b_id
        if match.status is MatchStatus.SCHEDULED:
            match.score_a = 0
            match.score_b = 0
        if match.is_completed:
            self.refresh_standings()
        return True

    def update_score(self, match_id: str, score_a: int, score_b: int) -> bool:
        """
        Record a score.

        Any positive score completes the match, so a 0-0 result can never be
        completed. A 0-0 update returns a completed match to scheduled but
        leaves an in-progress match in progress, so clearing the score of the
        match being played does not stop it. Earlier releases sent every 0-0
        match back to scheduled.
        """
        match = self.game_state.find_match(match_id)
        if match is None:
            return False
        if min(score_a, score_b) < 0:
            logger.warning("Rejected negative score %s-%s for match %s", score_a, score_b, match_id)
            return False

        was_completed = match.is_completed
        match.score_a = score_a
        match.score_b = score_b

        if score_a > 0 or score_b > 0:
            match.status = MatchStatus.COMPLETED
            if not was_completed:
                match.end_time = now_dt()
            if self.game_state.current_match_id == match.id:
                self.game_state.current_match_id = None
        else:
            if match.status is not MatchStatus.IN_PROGRESS:
                match.status = MatchStatus.SCHEDULED
            match.end_time = None

        self.refresh_standings()
        return True

    def start_match(self, match_id: str) -> bool:
        """Kick off a scheduled match; only one match can be in progress."""
        match = self.game_state.find_match(match_id)
        if match is None or match.status is not MatchStatus.SCHEDULED:
            return False
        if any(m.status is MatchStatus.IN_PROGRESS for m in self.game_state.matches):
            logger.warning("Cannot start match %s while another match is in progress", match_id)
            return False

        match.status = MatchStatus.IN_PROGRESS
        match.start_time = now_dt()
        self.game_state.current_match_id = match.id
        return True

    def cancel_match(self, match_id: str) -> bool:
        """Return an in-progress match to the schedule."""
        match = self.game_state.find_match(match_id)
        if match is None or match.status is not MatchStatus.IN_PROGRESS:
            return False

        match.status = MatchStatus.SCHEDULED
        match.start_time = None
        if self.game_state.current_match_id == match.id:
            self.game_state.current_match_id = None
        return True

    def refresh_standings(self) -> None:
        self.game_state.standings = calculate_standings(
            self.game_state.matches, self.game_state.teams, self.game_state.settings
        )
