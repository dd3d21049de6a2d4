import unittest

from kickoff.models import GameSettings, GameState, TimerStatus
from kickoff.services import TimerService


class TimerServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.state = GameState(settings=GameSettings(match_duration=2))
        self.service = TimerService(self.state)

    def test_starts_idle_with_full_duration(self) -> None:
        self.assertEqual(self.service.status(), TimerStatus.IDLE)
        self.assertEqual(self.state.timer_state.time_remaining, 120)
        self.assertEqual(self.service.formatted_remaining(), "02:00")

    def test_start_pause_resume(self) -> None:
        self.assertTrue(self.service.start())
        self.assertEqual(self.service.status(), TimerStatus.RUNNING)
        self.assertFalse(self.service.start())

        self.assertTrue(self.service.pause())
        self.assertEqual(self.service.status(), TimerStatus.PAUSED)
        self.assertFalse(self.state.timer_state.is_running)
        self.assertFalse(self.service.pause())

        self.assertTrue(self.service.start())
        self.assertFalse(self.state.timer_state.is_paused)

    def test_pause_when_idle_is_noop(self) -> None:
        self.assertFalse(self.service.pause())
        self.assertEqual(self.service.status(), TimerStatus.IDLE)

    def test_tick_only_while_running(self) -> None:
        self.assertFalse(self.service.tick())
        self.assertEqual(self.state.timer_state.time_remaining, 120)

        self.service.start()
        self.assertTrue(self.service.tick())
        self.assertEqual(self.service.formatted_remaining(), "01:59")

        self.service.pause()
        self.service.tick()
        self.assertEqual(self.state.timer_state.time_remaining, 119)

    def test_tick_floors_at_zero(self) -> None:
        self.state.timer_state.time_remaining = 1
        self.service.start()
        with self.assertLogs("kickoff.services.timer_service", level="INFO"):
            self.assertTrue(self.service.tick())
        self.assertTrue(self.service.is_expired())
        self.assertFalse(self.service.tick())
        self.assertEqual(self.state.timer_state.time_remaining, 0)

    def test_reset_returns_to_idle(self) -> None:
        self.service.start()
        for _ in range(30):
            self.service.tick()

        self.service.reset()

        self.assertEqual(self.service.status(), TimerStatus.IDLE)
        self.assertEqual(self.state.timer_state.time_remaining, 120)
        self.assertFalse(self.service.is_expired())

    def test_duration_change_keeps_run_state(self) -> None:
        self.service.start()
        self.service.tick()
        self.state.settings.match_duration = 5

        self.service.set_remaining_to_duration()

        self.assertEqual(self.state.timer_state.time_remaining, 300)
        self.assertEqual(self.service.status(), TimerStatus.RUNNING)


if __name__ == "__main__":
    unittest.main()
