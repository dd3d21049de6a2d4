"""
Models package for the Kickoff game-day engine.

This package contains the core data models used throughout the application.
"""
from .player import Player
from .team import Team, TeamColor
from .match import Match, MatchStatus, Standing
from .settings import GameSettings
from .game_state import GameState, TimerState, TimerStatus

__all__ = [
    "Player", "Team", "TeamColor", "Match", "MatchStatus", "Standing",
    "GameSettings", "GameState", "TimerState", "TimerStatus",
]
