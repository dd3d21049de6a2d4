"""
Service factory for the Kickoff game-day engine.

This module wires a GameStore together with its services, all bound to one
shared GameState.
"""
from typing import Optional

from ..models import GameState
from .game_store import GameStore
from .persistence_service import PersistenceService
from .roster_service import RosterService
from .schedule_service import ScheduleService
from .team_service import TeamService
from .timer_service import TimerService


class ServiceFactory:
    """Factory for creating service instances with their dependencies injected."""

    def __init__(self, storage_dir: Optional[str] = None):
        """
        Initialize factory.

        Args:
            storage_dir: Directory for the storage file; ``~/.kickoff`` when omitted
        """
        self.storage_dir = storage_dir
        self._persistence_service: Optional[PersistenceService] = None

    def create_team_service(self, game_state: GameState) -> TeamService:
        return TeamService(game_state)

    def create_roster_service(
        self,
        game_state: GameState,
        team_service: Optional[TeamService] = None,
    ) -> RosterService:
        """
        Create RosterService with injected dependencies.

        Args:
            game_state: Game state holding the roster
            team_service: Team service sharing the same game state

        Returns:
            Configured RosterService instance
        """
        return RosterService(game_state, team_service or self.create_team_service(game_state))

    def create_schedule_service(self, game_state: GameState) -> ScheduleService:
        return ScheduleService(game_state)

    def create_timer_service(self, game_state: GameState) -> TimerService:
        return TimerService(game_state)

    def create_complete_service_suite(self, game_state: GameState) -> dict:
        """
        Create a complete suite of services bound to one game state.

        Args:
            game_state: Game state for the services

        Returns:
            Dictionary containing all configured services
        """
        team_service = self.create_team_service(game_state)
        return {
            'team': team_service,
            'roster': self.create_roster_service(game_state, team_service),
            'schedule': self.create_schedule_service(game_state),
            'timer': self.create_timer_service(game_state),
            'persistence': self._get_persistence_service(),
        }

    def create_game_store(self, game_state: Optional[GameState] = None) -> GameStore:
        """
        Create a GameStore, rehydrating stored state when none is given.

        Args:
            game_state: State to start from instead of the stored one

        Returns:
            Configured GameStore instance
        """
        persistence_service = self._get_persistence_service()
        if game_state is None:
            game_state = persistence_service.load_state() or GameState()

        services = self.create_complete_service_suite(game_state)
        return GameStore(
            game_state,
            persistence_service,
            team_service=services['team'],
            roster_service=services['roster'],
            schedule_service=services['schedule'],
            timer_service=services['timer'],
        )

    def _get_persistence_service(self) -> PersistenceService:
        """Get singleton persistence service."""
        if self._persistence_service is None:
            self._persistence_service = PersistenceService(self.storage_dir)
        return self._persistence_service

    def configure_custom_persistence_service(self, persistence_service: PersistenceService) -> None:
        self._persistence_service = persistence_service
