"""
Utilities package for the Kickoff game-day engine.

This package contains utility functions and constants used throughout the application.
"""
from .time_utils import fmt_mmss, now_dt, today_str, format_timestamp, parse_timestamp
from .constants import (
    APP_TITLE, APP_VERSION, DEFAULT_TOURNAMENT_NAME,
    DEFAULT_TEAMS_COUNT, DEFAULT_PLAYERS_PER_TEAM, DEFAULT_GAMES_PER_TEAM,
    DEFAULT_MATCH_DURATION_MIN, DEFAULT_FIELD_NUMBER,
    WIN_POINTS, DRAW_POINTS, LOSS_POINTS,
    MIN_SKILL_LEVEL, MAX_SKILL_LEVEL, SKILL_LEVEL_LABELS, TEAM_PALETTE,
    STORAGE_KEY, STORAGE_VERSION, DEFAULT_STORAGE_DIR,
)

__all__ = [
    "fmt_mmss", "now_dt", "today_str", "format_timestamp", "parse_timestamp",
    "APP_TITLE", "APP_VERSION", "DEFAULT_TOURNAMENT_NAME",
    "DEFAULT_TEAMS_COUNT", "DEFAULT_PLAYERS_PER_TEAM", "DEFAULT_GAMES_PER_TEAM",
    "DEFAULT_MATCH_DURATION_MIN", "DEFAULT_FIELD_NUMBER",
    "WIN_POINTS", "DRAW_POINTS", "LOSS_POINTS",
    "MIN_SKILL_LEVEL", "MAX_SKILL_LEVEL", "SKILL_LEVEL_LABELS", "TEAM_PALETTE",
    "STORAGE_KEY", "STORAGE_VERSION", "DEFAULT_STORAGE_DIR",
]
