"""
Services package for the Kickoff game-day engine.

This package contains service classes that handle business logic.
"""
from .persistence_service import PersistenceService, StateImportError, export_document, parse_export
from .migrations import migrate_state
from .standings_service import calculate_standings, calculate_win_percentage
from .team_service import (
    TeamService, calculate_average_skill, calculate_team_balance,
    snake_draft_order, validate_team_balance,
)
from .roster_service import RosterService
from .schedule_service import ScheduleService, all_pairings, get_schedule_stats, validate_schedule
from .timer_service import TimerService
from .game_store import GameStore, ResetOutcome
from .service_factory import ServiceFactory

__all__ = [
    "PersistenceService", "StateImportError", "export_document", "parse_export",
    "migrate_state", "calculate_standings", "calculate_win_percentage",
    "TeamService", "calculate_average_skill", "calculate_team_balance",
    "snake_draft_order", "validate_team_balance", "RosterService",
    "ScheduleService", "all_pairings", "get_schedule_stats", "validate_schedule",
    "TimerService", "GameStore", "ResetOutcome", "ServiceFactory",
]
