"""League table derivation for the Kickoff game-day engine."""

from typing import Dict, List, Optional

from ..models import GameSettings, Match, Standing, Team


def calculate_standings(
    matches: List[Match],
    teams: List[Team],
    settings: Optional[GameSettings] = None,
) -> List[Standing]:
    """Build the league table from completed matches.

    Every team starts from a zero record and each completed match is folded in
    exactly once. Matches naming a team that no longer exists are skipped.

    Args:
        matches: Match history in schedule order
        teams: Teams to rank
        settings: Source of the win/draw/loss point weights; defaults apply
            when omitted

    Returns:
        Standings ordered by points, then goal difference, then goals for,
        all descending. Remaining ties keep team order.
    """

    settings = settings or GameSettings()
    table: Dict[str, Standing] = {team.id: Standing(team_id=team.id) for team in teams}

    for match in matches:
        if not match.is_completed:
            continue
        home = table.get(match.team_a_id)
        away = table.get(match.team_b_id)
        if home is None or away is None:
            continue

        home.played += 1
        away.played += 1
        home.goals_for += match.score_a
        home.goals_against += match.score_b
        away.goals_for += match.score_b
        away.goals_against += match.score_a

        if match.score_a > match.score_b:
            _record_win(home, away, settings)
        elif match.score_b > match.score_a:
            _record_win(away, home, settings)
        else:
            home.drawn += 1
            away.drawn += 1
            home.points += settings.draw_points
            away.points += settings.draw_points

        home.goal_difference = home.goals_for - home.goals_against
        away.goal_difference = away.goals_for - away.goals_against

    return sorted(
        table.values(),
        key=lambda s: (-s.points, -s.goal_difference, -s.goals_for),
    )


def _record_win(winner: Standing, loser: Standing, settings: GameSettings) -> None:
    winner.won += 1
    winner.points += settings.win_points
    loser.lost += 1
    loser.points += settings.loss_points


def calculate_win_percentage(standing: Standing) -> float:
    """Percentage of played games won, rounded to one decimal."""
    if standing.played == 0:
        return 0.0
    return round(standing.won / standing.played * 100, 1)
