"""
Unit tests for team generation and team mutation.

Covers the snake draft, waitlist overflow, captain election and the
membership and captaincy rules enforced by TeamService.
"""
import unittest

from kickoff.models import GameSettings, GameState, Team, TeamColor
from kickoff.services import RosterService, TeamService
from kickoff.services.team_service import (
    calculate_average_skill, calculate_team_balance, snake_draft_order, validate_team_balance,
)


class SnakeDraftTests(unittest.TestCase):
    def test_two_teams(self) -> None:
        self.assertEqual(snake_draft_order(6, 2), [0, 1, 1, 0, 0, 1])

    def test_three_teams(self) -> None:
        self.assertEqual(snake_draft_order(7, 3), [0, 1, 2, 2, 1, 0, 0])

    def test_single_team_and_no_teams(self) -> None:
        self.assertEqual(snake_draft_order(3, 1), [0, 0, 0])
        self.assertEqual(snake_draft_order(3, 0), [])

    def test_team_sizes_differ_by_at_most_one(self) -> None:
        for picks in range(0, 23):
            for teams in range(1, 6):
                order = snake_draft_order(picks, teams)
                sizes = [order.count(i) for i in range(teams)]
                self.assertLessEqual(max(sizes) - min(sizes), 1, (picks, teams))


class TeamServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.state = GameState(settings=GameSettings(teams_count=2, players_per_team=5))
        self.teams = TeamService(self.state)
        self.roster = RosterService(self.state, self.teams)

    def add_players(self, *skills):
        return [self.roster.add_player(f"Player {i}", skill) for i, skill in enumerate(skills)]

    def assert_one_team_per_player(self) -> None:
        seen = []
        for team in self.state.teams:
            seen.extend(team.player_ids)
        self.assertEqual(len(seen), len(set(seen)))

    def assert_captains_valid(self) -> None:
        for team in self.state.teams:
            self.assertTrue(set(team.captain_ids) <= set(team.player_ids))
            if team.player_ids:
                self.assertTrue(team.captain_ids, team.id)


class GenerateTeamsTests(TeamServiceTestCase):
    def test_ten_player_scenario(self) -> None:
        players = self.add_players(5, 4, 4, 3, 3, 3, 2, 2, 1, 1)

        self.assertTrue(self.teams.generate_teams())

        black, white = self.state.teams
        self.assertEqual((black.name, black.color), ("Black", TeamColor.BLACK))
        self.assertEqual((white.name, white.color), ("White", TeamColor.WHITE))
        self.assertEqual(len(black.player_ids), 5)
        self.assertEqual(len(white.player_ids), 5)
        self.assertLessEqual(abs(black.average_skill - white.average_skill), 0.4)
        self.assertEqual(black.average_skill, 2.8)
        self.assertEqual(black.captain_ids, [players[0].id])
        self.assertEqual(white.captain_ids, [players[1].id])
        self.assert_one_team_per_player()

    def test_overflow_goes_to_waitlist(self) -> None:
        self.state.settings.players_per_team = 2
        players = self.add_players(3, 1, 5, 4, 2)

        self.teams.generate_teams()

        self.assertTrue(players[1].is_waitlist)
        self.assertEqual(sum(len(t.player_ids) for t in self.state.teams), 4)
        self.assertNotIn(players[1].id, self.state.teams[0].player_ids + self.state.teams[1].player_ids)

    def test_designated_captain_is_preferred(self) -> None:
        players = self.add_players(5, 4, 2, 1)
        players[3].is_captain = True

        self.teams.generate_teams()

        team = self.state.team_for_player(players[3].id)
        self.assertEqual(team.captain_ids, [players[3].id])

    def test_waitlisted_players_are_not_drafted(self) -> None:
        self.add_players(3, 3)
        benched = self.roster.add_player("Bench", 5, is_waitlist=True)

        self.teams.generate_teams()

        self.assertIsNone(self.state.team_for_player(benched.id))

    def test_partially_filled_and_empty_teams(self) -> None:
        self.state.settings.teams_count = 3
        self.add_players(4, 2)

        self.teams.generate_teams()

        self.assertEqual([len(t.player_ids) for t in self.state.teams], [1, 1, 0])
        self.assertEqual(self.state.teams[2].captain_ids, [])
        self.assertEqual(self.state.teams[2].average_skill, 0.0)

    def test_no_active_players(self) -> None:
        self.roster.add_player("Bench", 3, is_waitlist=True)
        with self.assertLogs("kickoff.services.team_service", level="WARNING"):
            self.assertFalse(self.teams.generate_teams())
        self.assertEqual(self.state.teams, [])

    def test_palette_names_cycle(self) -> None:
        self.assertEqual(TeamService._new_team(5).name, "No Pennies")
        team = TeamService._new_team(6)
        self.assertEqual((team.id, team.name, team.color), ("team-6", "Black 2", TeamColor.BLACK))


class MovePlayerTests(TeamServiceTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.players = self.add_players(5, 4, 4, 3, 3, 3, 2, 2, 1, 1)
        self.teams.generate_teams()
        self.black, self.white = self.state.teams

    def test_move_between_teams(self) -> None:
        mover = self.players[3]
        self.assertTrue(self.teams.move_player(mover.id, self.black.id, self.white.id))

        self.assertIn(mover.id, self.white.player_ids)
        self.assertNotIn(mover.id, self.black.player_ids)
        self.assertEqual(self.white.average_skill, 2.8)
        self.assertEqual(self.black.average_skill, calculate_average_skill(self.state.team_players(self.black)))
        self.assertEqual(len(self.black.player_ids), 4)
        self.assert_one_team_per_player()

    def test_stale_from_team_still_removes_everywhere(self) -> None:
        mover = self.players[3]
        self.teams.move_player(mover.id, "team-9", self.white.id)
        self.assertNotIn(mover.id, self.black.player_ids)
        self.assert_one_team_per_player()

    def test_move_to_waitlist(self) -> None:
        mover = self.players[5]
        self.assertTrue(self.teams.move_player(mover.id, None, None))
        self.assertTrue(mover.is_waitlist)
        self.assertIsNone(self.state.team_for_player(mover.id))

    def test_moving_captain_out_elects_new_captain(self) -> None:
        captain = self.players[0]
        self.teams.move_player(captain.id, self.black.id, None)

        self.assertEqual(len(self.black.captain_ids), 1)
        remaining = self.state.team_players(self.black)
        self.assertEqual(self.black.captain_ids[0], max(remaining, key=lambda p: p.skill_level).id)
        self.assert_captains_valid()

    def test_joining_empty_team_becomes_captain(self) -> None:
        empty = Team(id="team-2", name="Orange", color=TeamColor.ORANGE)
        self.state.teams.append(empty)
        mover = self.players[9]
        self.teams.move_player(mover.id, None, empty.id)
        self.assertEqual(empty.captain_ids, [mover.id])
        self.assertEqual(empty.average_skill, 1.0)

    def test_unknown_destination_is_noop(self) -> None:
        mover = self.players[3]
        before = [list(t.player_ids) for t in self.state.teams]
        self.assertFalse(self.teams.move_player(mover.id, self.black.id, "team-9"))
        self.assertEqual([t.player_ids for t in self.state.teams], before)

    def test_unknown_player_is_noop(self) -> None:
        self.assertFalse(self.teams.move_player("nobody", None, self.black.id))

    def test_waitlisted_player_joins_team(self) -> None:
        extra = self.roster.add_player("Late", 3, is_waitlist=True)
        self.teams.move_player(extra.id, None, self.black.id)
        self.assertFalse(extra.is_waitlist)
        self.assertIn(extra.id, self.black.player_ids)

    def test_many_moves_keep_invariants(self) -> None:
        for i, player in enumerate(self.players * 2):
            target = [self.black.id, self.white.id, None][i % 3]
            self.teams.move_player(player.id, None, target)
            self.assert_one_team_per_player()
            self.assert_captains_valid()


class CaptaincyTests(TeamServiceTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.players = self.add_players(5, 4, 4, 3)
        self.teams.generate_teams()
        self.black = self.state.teams[0]

    def test_set_captain_adds_and_removes(self) -> None:
        other = self.state.team_players(self.black)[1]
        self.assertTrue(self.teams.set_captain(self.black.id, other.id))
        self.assertEqual(len(self.black.captain_ids), 2)
        self.assertTrue(self.teams.set_captain(self.black.id, other.id))
        self.assertEqual(self.black.captain_ids, [self.players[0].id])

    def test_removing_last_captain_is_refused(self) -> None:
        with self.assertLogs("kickoff.services.team_service", level="WARNING"):
            self.assertFalse(self.teams.set_captain(self.black.id, self.players[0].id))
        self.assertEqual(self.black.captain_ids, [self.players[0].id])

    def test_set_captain_requires_membership(self) -> None:
        outsider = self.state.team_players(self.state.teams[1])[0]
        self.assertFalse(self.teams.set_captain(self.black.id, outsider.id))
        self.assertFalse(self.teams.set_captain("team-9", self.players[0].id))

    def test_toggle_player_captain_syncs_team(self) -> None:
        member = self.state.team_players(self.black)[1]
        self.assertTrue(self.teams.toggle_player_captain(member.id))
        self.assertTrue(member.is_captain)
        self.assertIn(member.id, self.black.captain_ids)

        self.assertTrue(self.teams.toggle_player_captain(member.id))
        self.assertFalse(member.is_captain)
        self.assertNotIn(member.id, self.black.captain_ids)

    def test_toggle_off_last_captain_changes_nothing(self) -> None:
        captain = self.players[0]
        captain.is_captain = True
        self.assertFalse(self.teams.toggle_player_captain(captain.id))
        self.assertTrue(captain.is_captain)
        self.assertEqual(self.black.captain_ids, [captain.id])

    def test_toggle_for_player_without_team(self) -> None:
        bench = self.roster.add_player("Bench", 2, is_waitlist=True)
        self.assertTrue(self.teams.toggle_player_captain(bench.id))
        self.assertTrue(bench.is_captain)
        self.assertFalse(self.teams.toggle_player_captain("nobody"))


class TeamMiscTests(TeamServiceTestCase):
    def test_update_color_and_reset(self) -> None:
        self.add_players(3, 3)
        self.teams.generate_teams()
        self.state.current_match_id = "match-1"

        self.assertTrue(self.teams.update_team_color("team-0", TeamColor.RED))
        self.assertEqual(self.state.teams[0].color, TeamColor.RED)
        self.assertFalse(self.teams.update_team_color("team-9", TeamColor.RED))

        self.teams.reset_teams()
        self.assertEqual(self.state.teams, [])
        self.assertEqual(self.state.matches, [])
        self.assertIsNone(self.state.current_match_id)
        self.assertEqual(len(self.state.players), 2)

    def test_balance_helpers(self) -> None:
        teams = [
            Team(id="a", name="A", player_ids=["1", "2"], average_skill=4.0),
            Team(id="b", name="B", player_ids=["3"], average_skill=2.0),
            Team(id="c", name="C", average_skill=0.0),
        ]
        self.assertAlmostEqual(calculate_team_balance(teams[:2]), 1.0)

        report = validate_team_balance(teams)
        self.assertFalse(report["is_balanced"])
        self.assertEqual(len(report["issues"]), 3)
        self.assertTrue(validate_team_balance(teams[:1])["is_balanced"])


if __name__ == "__main__":
    unittest.main()
