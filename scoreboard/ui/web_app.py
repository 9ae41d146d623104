"""
Web application module for the handball scoreboard.

This module contains the Flask server exposing the scoreboard as a JSON
API. Every handler hands its work to the ScoreboardRuntime so that the
match state is only touched from the session's loop thread.
"""
import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..config import AppConfig
from ..models import Team
from ..services import ServiceFactory
from .runtime import ScoreboardRuntime


def _payload() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _int_field(data: Dict[str, Any], key: str, default: Optional[int] = None) -> int:
    """Read an integer field from a JSON body, raising ValueError when invalid."""
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer")
    return value


def create_app(runtime: ScoreboardRuntime) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        runtime: A started runtime hosting the scoreboard session

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)

    def session_call(method: str, *args):
        session = runtime.session
        return runtime.call(getattr(session, method), *args)

    def state_response(**extra):
        body = {"success": True, "state": session_call("snapshot")}
        body.update(extra)
        return jsonify(body)

    @app.errorhandler(ValueError)
    def handle_bad_request(e):
        return jsonify({"success": False, "error": str(e)}), 400

    @app.errorhandler(Exception)
    def handle_failure(e):
        if isinstance(e, HTTPException):
            return jsonify({"success": False, "error": e.description}), e.code
        app.logger.exception("Request failed")
        return jsonify({"success": False, "error": str(e)}), 500

    # ==================== Scoreboard ==================== #

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """Get the current scoreboard."""
        return state_response()

    @app.route("/api/score/<team>", methods=["POST"])
    def change_score(team: str):
        """Add or remove goals for a team."""
        delta = _int_field(_payload(), "delta")
        changed = session_call("change_score", Team.parse(team), delta)
        return state_response(changed=changed)

    @app.route("/api/team/<team>/name", methods=["PUT"])
    def set_team_name(team: str):
        """Rename a team; triggers a debounced venue lookup."""
        name = _payload().get("name")
        if not isinstance(name, str):
            raise ValueError("'name' must be a string")
        changed = session_call("set_team_name", Team.parse(team), name)
        return state_response(changed=changed)

    # ==================== Clock ==================== #

    @app.route("/api/timer/start", methods=["POST"])
    def start_timer():
        return state_response(changed=session_call("start"))

    @app.route("/api/timer/pause", methods=["POST"])
    def pause_timer():
        return state_response(changed=session_call("pause"))

    @app.route("/api/timer/initial-time", methods=["POST"])
    def adjust_initial_time():
        """Lengthen or shorten the period by whole minutes (clock must be paused)."""
        delta = _int_field(_payload(), "delta_minutes")
        return state_response(changed=session_call("adjust_initial_time", delta))

    # ==================== Confirmed operations ==================== #

    @app.route("/api/period/request", methods=["POST"])
    def request_period_change():
        delta = _int_field(_payload(), "delta", 1)
        session_call("request_period_change", delta)
        return state_response(changed=False)

    @app.route("/api/period/<action>", methods=["POST"])
    def resolve_period_change(action: str):
        if action == "confirm":
            return state_response(changed=session_call("confirm_period_change"))
        if action == "cancel":
            return state_response(changed=session_call("cancel_period_change"))
        return jsonify({"success": False, "error": f"Unknown action: {action}"}), 404

    @app.route("/api/reset/<action>", methods=["POST"])
    def reset(action: str):
        if action == "request":
            session_call("request_reset")
            return state_response(changed=False)
        if action == "confirm":
            return state_response(changed=session_call("confirm_reset"))
        if action == "cancel":
            return state_response(changed=session_call("cancel_reset"))
        return jsonify({"success": False, "error": f"Unknown action: {action}"}), 404

    # ==================== History ==================== #

    @app.route("/api/history", methods=["GET"])
    def get_history():
        return jsonify({"success": True, "history": session_call("history_snapshot")})

    @app.route("/api/history", methods=["POST"])
    def save_match():
        """Save the current scoreboard as a new history entry."""
        record = session_call("save_match")
        return jsonify({
            "success": True,
            "record": record.to_json(),
            "history": session_call("history_snapshot"),
        }), 201

    @app.route("/api/history/clear/<action>", methods=["POST"])
    def clear_history(action: str):
        if action == "request":
            session_call("request_clear_history")
            changed = False
        elif action == "confirm":
            changed = session_call("confirm_clear_history")
        elif action == "cancel":
            changed = session_call("cancel_clear_history")
        else:
            return jsonify({"success": False, "error": f"Unknown action: {action}"}), 404
        return jsonify({
            "success": True,
            "changed": changed,
            "pending": session_call("snapshot")["pending"],
            "history": session_call("history_snapshot"),
        })

    return app


def run_web_app(config: Optional[AppConfig] = None) -> None:
    """
    Run the web application until interrupted.

    Args:
        config: Application configuration (read from the environment if omitted)
    """
    config = config or AppConfig()
    runtime = ScoreboardRuntime(ServiceFactory(config))
    runtime.start()
    try:
        app = create_app(runtime)
        # Bind only to localhost by default
        app.run(host=config.host, port=config.port, debug=False, use_reloader=False)
    finally:
        runtime.stop()
        logging.getLogger(__name__).info("Scoreboard stopped")
