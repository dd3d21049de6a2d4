"""
Constants for the Kickoff pickup game-day engine.

This module contains configuration constants used throughout the application.
"""

# Application metadata
APP_TITLE = "Kickoff"
APP_VERSION = "1.0.0"

DEFAULT_TOURNAMENT_NAME = "Pickup Games"

# Default game settings
DEFAULT_TEAMS_COUNT = 2
DEFAULT_PLAYERS_PER_TEAM = 5
DEFAULT_GAMES_PER_TEAM = 3
DEFAULT_MATCH_DURATION_MIN = 8
DEFAULT_FIELD_NUMBER = 1

# Scoring weights
WIN_POINTS = 3
DRAW_POINTS = 1
LOSS_POINTS = 0

# Skill scale
MIN_SKILL_LEVEL = 1
MAX_SKILL_LEVEL = 5
SKILL_LEVEL_LABELS = {
    1: "Beginner",
    2: "Casual",
    3: "Regular",
    4: "Skilled",
    5: "Expert",
}

# Team palette used when generating teams (name, colour value)
TEAM_PALETTE = [
    ("Black", "black"),
    ("White", "white"),
    ("Orange", "orange"),
    ("Blue", "blue"),
    ("Yellow", "yellow"),
    ("No Pennies", "no-pennies"),
]

# Persistence
STORAGE_KEY = "kickoff-storage"
STORAGE_VERSION = 1
DEFAULT_STORAGE_DIR = "~/.kickoff"
