"""
Kickoff

A game-day engine for pickup football: sign players up, balance them into
teams, generate a round-robin schedule, track scores and the match clock, and
keep the standings.

The engine is driven through :class:`GameStore`; a Flask JSON adapter is
provided for web front ends.
"""
from .models import Player, Team, Match, GameSettings, GameState
from .services import GameStore, ResetOutcome, ServiceFactory
from .ui import create_app, run_web_app
from .utils import fmt_mmss, APP_TITLE, APP_VERSION

__version__ = APP_VERSION

__all__ = [
    "Player", "Team", "Match", "GameSettings", "GameState",
    "GameStore", "ResetOutcome", "ServiceFactory",
    "create_app", "run_web_app", "fmt_mmss", "APP_TITLE",
]
