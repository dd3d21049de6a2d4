import unittest

from kickoff.models import GameSettings, Match, MatchStatus, Standing, Team
from kickoff.services import calculate_standings, calculate_win_percentage


def result(number: int, team_a: str, team_b: str, score_a: int, score_b: int,
           status: MatchStatus = MatchStatus.COMPLETED) -> Match:
    return Match(
        id=f"m{number}", game_number=number, team_a_id=team_a, team_b_id=team_b,
        score_a=score_a, score_b=score_b, status=status,
    )


class StandingsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.teams = [Team(id=t, name=t.upper()) for t in ("a", "b", "c", "d")]

    def test_every_team_gets_a_row(self) -> None:
        table = calculate_standings([], self.teams)
        self.assertEqual([s.team_id for s in table], ["a", "b", "c", "d"])
        self.assertTrue(all(s == Standing(team_id=s.team_id) for s in table))

    def test_records_and_ordering(self) -> None:
        matches = [
            result(1, "a", "b", 3, 0),
            result(2, "c", "d", 1, 1),
            result(3, "b", "c", 2, 1),
            result(4, "d", "a", 0, 0, status=MatchStatus.SCHEDULED),
            result(5, "a", "d", 2, 2),
        ]
        table = calculate_standings(matches, self.teams)
        by_team = {s.team_id: s for s in table}

        a = by_team["a"]
        self.assertEqual((a.played, a.won, a.drawn, a.lost), (2, 1, 1, 0))
        self.assertEqual((a.goals_for, a.goals_against, a.goal_difference, a.points), (5, 2, 3, 4))
        self.assertEqual(by_team["d"].points, 2)
        self.assertEqual(by_team["c"].lost, 1)

        self.assertEqual([s.team_id for s in table], ["a", "b", "d", "c"])
        keys = [(s.points, s.goal_difference, s.goals_for) for s in table]
        self.assertEqual(keys, sorted(keys, reverse=True))

    def test_goals_for_breaks_tie(self) -> None:
        matches = [result(1, "a", "c", 1, 0), result(2, "b", "d", 3, 2)]
        table = calculate_standings(matches, self.teams)
        self.assertEqual([s.team_id for s in table][:2], ["b", "a"])

    def test_full_ties_keep_team_order(self) -> None:
        matches = [result(1, "c", "d", 1, 1), result(2, "a", "b", 1, 1)]
        table = calculate_standings(matches, self.teams)
        self.assertEqual([s.team_id for s in table], ["a", "b", "c", "d"])

    def test_idempotent(self) -> None:
        matches = [result(1, "a", "b", 3, 0), result(2, "c", "d", 2, 2)]
        self.assertEqual(calculate_standings(matches, self.teams), calculate_standings(matches, self.teams))

    def test_unknown_team_is_skipped(self) -> None:
        table = calculate_standings([result(1, "a", "gone", 4, 0)], self.teams)
        self.assertTrue(all(s.played == 0 for s in table))

    def test_custom_point_weights(self) -> None:
        settings = GameSettings(win_points=2, draw_points=1, loss_points=1)
        matches = [result(1, "a", "b", 1, 0), result(2, "c", "d", 0, 0, status=MatchStatus.IN_PROGRESS)]
        by_team = {s.team_id: s for s in calculate_standings(matches, self.teams, settings)}
        self.assertEqual((by_team["a"].points, by_team["b"].points), (2, 1))
        self.assertEqual(by_team["c"].points, 0)

    def test_win_percentage(self) -> None:
        self.assertEqual(calculate_win_percentage(Standing(team_id="a")), 0.0)
        self.assertEqual(calculate_win_percentage(Standing(team_id="a", played=3, won=2)), 66.7)


if __name__ == "__main__":
    unittest.main()
