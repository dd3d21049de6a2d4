"""
UI package for the Kickoff game-day engine.

This package contains the Flask JSON adapter.
"""
from .web_app import create_app, run_web_app

__all__ = ["create_app", "run_web_app"]
