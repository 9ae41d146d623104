"""
UI package for the handball scoreboard.

This package contains the Flask JSON API and the event-loop runtime that
hosts the scoreboard session behind it.
"""
from .runtime import ScoreboardRuntime
from .web_app import create_app, run_web_app

__all__ = ["ScoreboardRuntime", "create_app", "run_web_app"]
