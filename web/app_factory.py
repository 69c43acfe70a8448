"""Flask application factory for the dashboard API."""
from __future__ import annotations

from typing import Any, Callable

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from achievements.catalog import CatalogState
from achievements.models import NormalizedGame
from routes import dashboard as routes_dashboard


def create_app(
    *,
    get_catalog: Callable[[], CatalogState],
    build_game_payload: Callable[[NormalizedGame], dict[str, Any]],
    secret_key: str,
    import_name: str = "app",
) -> Flask:
    """Return a Flask application serving the dashboard endpoints."""

    flask_app = Flask(import_name)
    flask_app.secret_key = secret_key
    flask_app.json.sort_keys = False

    routes_dashboard.configure({
        'get_catalog': get_catalog,
        'build_game_payload': build_game_payload,
    })
    if 'dashboard' not in flask_app.blueprints:
        flask_app.register_blueprint(routes_dashboard.dashboard_blueprint)

    @flask_app.errorhandler(404)
    def handle_not_found(e):
        if request.path.startswith('/api/'):
            return jsonify({'error': 'not found'}), 404
        return "Not Found", 404

    @flask_app.errorhandler(Exception)
    def handle_exception(e):
        if isinstance(e, HTTPException):
            return e
        flask_app.logger.exception("Unhandled exception")
        if request.path.startswith('/api/'):
            return jsonify({'error': 'internal server error'}), 500
        return "Internal Server Error", 500

    return flask_app


__all__ = ["create_app"]
