"""
Web application module for the Kickoff game-day engine.

This module contains the Flask server that exposes the GameStore operations
as JSON API endpoints for a presentation layer.
"""
import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

from ..models import TeamColor
from ..services import GameStore, ServiceFactory, calculate_win_percentage, get_schedule_stats
from ..utils import APP_TITLE, APP_VERSION, SKILL_LEVEL_LABELS

logger = logging.getLogger(__name__)


def _payload() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _int_field(data: Dict[str, Any], key: str) -> int:
    """Read a required integer from a request body, raising ValueError otherwise."""
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer")
    return value


def _failure(error: str, status: int = 400):
    return jsonify({"success": False, "error": error}), status


def create_app(store: Optional[GameStore] = None) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        store: GameStore to serve; one backed by ``~/.kickoff`` when omitted

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    store = store or ServiceFactory().create_game_store()
    app.config["GAME_STORE"] = store

    def _state_data() -> Dict[str, Any]:
        data = store.game_state.to_json()
        data["timer"] = store.game_state.timer_state.to_dict()
        data["timer"]["formatted"] = store.timer_service.formatted_remaining()
        return data

    # ==================== State ==================== #

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """Return the full session state."""
        return jsonify({
            "success": True,
            "app": APP_TITLE,
            "version": APP_VERSION,
            "skill_levels": {str(level): label for level, label in SKILL_LEVEL_LABELS.items()},
            "state": _state_data(),
        })

    @app.route("/api/standings", methods=["GET"])
    def get_standings():
        standings = store.calculate_standings()
        rows = []
        for standing in standings:
            row = standing.to_dict()
            row["win_percentage"] = calculate_win_percentage(standing)
            rows.append(row)
        return jsonify({
            "success": True,
            "standings": rows,
            "schedule": get_schedule_stats(store.game_state.matches, store.game_state.teams),
        })

    # ==================== Players ==================== #

    @app.route("/api/players", methods=["POST"])
    def create_player():
        data = _payload()
        try:
            skill_level = _int_field(data, "skill_level")
        except ValueError as e:
            return _failure(str(e))

        player = store.add_player(
            str(data.get("name", "")), skill_level, bool(data.get("is_waitlist", False))
        )
        if player is None:
            return _failure("Invalid player data")
        return jsonify({"success": True, "player": player.to_dict()}), 201

    @app.route("/api/players/<player_id>", methods=["PATCH"])
    def update_player(player_id: str):
        data = _payload()
        skill_level = None
        if "skill_level" in data:
            try:
                skill_level = _int_field(data, "skill_level")
            except ValueError as e:
                return _failure(str(e))
        name = data.get("name")
        if not store.update_player(player_id, name=None if name is None else str(name), skill_level=skill_level):
            return _failure("Player not updated")
        return jsonify({"success": True, "player": store.game_state.find_player(player_id).to_dict()})

    @app.route("/api/players/<player_id>", methods=["DELETE"])
    def delete_player(player_id: str):
        if not store.remove_player(player_id):
            return _failure("Player not found", 404)
        return jsonify({"success": True})

    @app.route("/api/players/<player_id>/waitlist", methods=["POST"])
    def toggle_waitlist(player_id: str):
        if not store.toggle_waitlist(player_id):
            return _failure("Player not found", 404)
        return jsonify({"success": True, "player": store.game_state.find_player(player_id).to_dict()})

    @app.route("/api/players/<player_id>/captain", methods=["POST"])
    def toggle_player_captain(player_id: str):
        if not store.toggle_player_captain(player_id):
            return _failure("Captain flag not changed")
        return jsonify({"success": True, "player": store.game_state.find_player(player_id).to_dict()})

    # ==================== Teams ==================== #

    @app.route("/api/teams/generate", methods=["POST"])
    def generate_teams():
        if not store.generate_teams():
            return _failure("No active players available for team generation")
        return jsonify({"success": True, "teams": [t.to_dict() for t in store.game_state.teams]})

    @app.route("/api/teams/move", methods=["POST"])
    def move_player():
        data = _payload()
        if not store.move_player(data.get("player_id"), data.get("from_team_id"), data.get("to_team_id")):
            return _failure("Player not moved")
        return jsonify({"success": True, "teams": [t.to_dict() for t in store.game_state.teams]})

    @app.route("/api/teams/<team_id>/captain", methods=["POST"])
    def set_captain(team_id: str):
        if not store.set_captain(team_id, _payload().get("player_id")):
            return _failure("Captains not changed")
        return jsonify({"success": True, "team": store.game_state.find_team(team_id).to_dict()})

    @app.route("/api/teams/<team_id>/color", methods=["PUT"])
    def update_team_color(team_id: str):
        try:
            color = TeamColor(_payload().get("color"))
        except ValueError:
            return _failure("Unknown team color")
        if not store.update_team_color(team_id, color):
            return _failure("Team not found", 404)
        return jsonify({"success": True, "team": store.game_state.find_team(team_id).to_dict()})

    @app.route("/api/teams/reset", methods=["POST"])
    def reset_teams():
        store.reset_teams()
        return jsonify({"success": True})

    # ==================== Matches ==================== #

    @app.route("/api/schedule/generate", methods=["POST"])
    def generate_schedule():
        allow_back_to_back = bool(_payload().get("allow_back_to_back", False))
        if not store.generate_schedule(allow_back_to_back=allow_back_to_back):
            return _failure("At least two teams are needed to build a schedule")
        return jsonify({"success": True, "matches": [m.to_dict() for m in store.game_state.matches]})

    @app.route("/api/matches", methods=["POST"])
    def add_match():
        data = _payload()
        match = store.add_match(data.get("team_a_id"), data.get("team_b_id"))
        if match is None:
            return _failure("Invalid teams for match")
        return jsonify({"success": True, "match": match.to_dict()}), 201

    @app.route("/api/matches/<match_id>/score", methods=["POST"])
    def update_score(match_id: str):
        data = _payload()
        try:
            score_a = _int_field(data, "score_a")
            score_b = _int_field(data, "score_b")
        except ValueError as e:
            return _failure(str(e))
        if not store.update_score(match_id, score_a, score_b):
            return _failure("Score not recorded")
        return jsonify({
            "success": True,
            "match": store.game_state.find_match(match_id).to_dict(),
            "standings": [s.to_dict() for s in store.game_state.standings],
        })

    @app.route("/api/matches/<match_id>/swap", methods=["POST"])
    def swap_teams(match_id: str):
        data = _payload()
        if not store.swap_teams_in_match(match_id, data.get("team_a_id"), data.get("team_b_id")):
            return _failure("Teams not swapped")
        return jsonify({"success": True, "match": store.game_state.find_match(match_id).to_dict()})

    @app.route("/api/matches/<match_id>/start", methods=["POST"])
    def start_match(match_id: str):
        if not store.start_match(match_id):
            return _failure("Match not started")
        return jsonify({"success": True, "match": store.game_state.find_match(match_id).to_dict()})

    @app.route("/api/matches/<match_id>/cancel", methods=["POST"])
    def cancel_match(match_id: str):
        if not store.cancel_match(match_id):
            return _failure("Match not cancelled")
        return jsonify({"success": True, "match": store.game_state.find_match(match_id).to_dict()})

    # ==================== Timer ==================== #

    @app.route("/api/timer/<action>", methods=["POST"])
    def timer_action(action: str):
        actions = {
            "start": store.start_timer,
            "pause": store.pause_timer,
            "reset": store.reset_timer,
            "tick": store.tick_timer,
        }
        if action not in actions:
            return _failure(f"Unknown timer action '{action}'", 404)
        changed = actions[action]()
        return jsonify({
            "success": changed is not False,
            "timer": _state_data()["timer"],
        })

    # ==================== Settings ==================== #

    @app.route("/api/settings", methods=["PUT"])
    def update_settings():
        if not store.update_settings(_payload()):
            return _failure("No settings changed")
        return jsonify({"success": True, "settings": store.game_state.settings.to_dict()})

    @app.route("/api/tournament", methods=["PUT"])
    def set_tournament_name():
        name = str(_payload().get("name", "")).strip()
        if not name:
            return _failure("Tournament name is required")
        store.set_tournament_name(name)
        return jsonify({"success": True, "tournament_name": name})

    # ==================== Lifecycle ==================== #

    @app.route("/api/reset", methods=["POST"])
    def reset_all_safe():
        outcome = store.reset_all_safe()
        return jsonify(outcome.to_dict()), 200 if outcome.success else 409

    @app.route("/api/reset/app", methods=["POST"])
    def reset_app():
        store.reset_app()
        return jsonify({"success": True})

    @app.route("/api/export", methods=["GET"])
    def export_data():
        return app.response_class(store.export_data(), mimetype="application/json")

    @app.route("/api/import", methods=["POST"])
    def import_data():
        if not store.import_data(request.get_data(as_text=True)):
            return _failure("Import failed; existing data kept")
        return jsonify({"success": True, "state": _state_data()})

    return app


def run_web_app(host: str = "127.0.0.1", port: int = 7122, storage_dir: Optional[str] = None) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
        storage_dir: Directory for the storage file
    """
    app = create_app(ServiceFactory(storage_dir).create_game_store())
    logger.info("Serving %s on http://%s:%d", APP_TITLE, host, port)
    app.run(host=host, port=port, debug=False)
