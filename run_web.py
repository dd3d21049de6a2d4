#!/usr/bin/env python3
"""
Main entry point for the Kickoff web adapter.

This script launches the Flask-based JSON server.
"""
import logging
import os

from kickoff.ui.web_app import run_web_app

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_web_app(storage_dir=os.environ.get("KICKOFF_STORAGE_DIR"))
