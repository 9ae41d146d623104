"""
Handball Scoreboard

A live scoreboard for a two-team handball match: countdown clock with
period tracking, score entry, saved match history, spoken score
announcements and venue lookup for team names.

This package provides the scoreboard core and a Flask JSON API around it.
"""
from .models import MatchState, MatchRecord, Team
from .services import ScoreboardSession, ServiceFactory
from .ui import create_app, run_web_app, ScoreboardRuntime
from .utils import format_time, now_ts

__version__ = "1.0.0"

__all__ = [
    "MatchState", "MatchRecord", "Team", "ScoreboardSession", "ServiceFactory",
    "create_app", "run_web_app", "ScoreboardRuntime", "format_time", "now_ts",
]
