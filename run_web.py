#!/usr/bin/env python3
"""
Main entry point for the handball scoreboard web API.

This script configures logging and launches the Flask server.
"""
import logging

from scoreboard.config import AppConfig
from scoreboard.ui.web_app import run_web_app

if __name__ == "__main__":
    config = AppConfig()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_web_app(config)
