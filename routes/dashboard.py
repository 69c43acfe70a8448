"""Dashboard JSON API routes."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from flask import Blueprint, jsonify, request

from achievements.catalog import CatalogState
from achievements.filters import FilterCriteria
from achievements.tags import tag_frequency
from routes.api_utils import (
    NotFoundError,
    ServiceUnavailableError,
    handle_api_errors,
)

dashboard_blueprint = Blueprint("dashboard", __name__)

_context: dict[str, Any] = {}


def configure(context: Mapping[str, Any]) -> None:
    """Provide shared state required by the dashboard endpoints."""
    _context.update(context)


def _ctx(key: str) -> Any:
    if key not in _context:
        raise RuntimeError(f"dashboard routes missing context value: {key}")
    return _context[key]


def _get_catalog() -> CatalogState:
    getter: Callable[[], CatalogState] = _ctx("get_catalog")
    return getter()


def _require_catalog() -> CatalogState:
    catalog = _get_catalog()
    if not catalog.is_loaded:
        raise ServiceUnavailableError(
            payload={"reason": catalog.load_error} if catalog.load_error else None
        )
    return catalog


def _criteria_from_request() -> FilterCriteria:
    return FilterCriteria.from_mapping(request.args)


@dashboard_blueprint.route('/api/health')
@handle_api_errors
def api_health():
    catalog = _get_catalog()
    return jsonify(
        {
            'loaded': catalog.is_loaded,
            'games': catalog.total_games,
            'platforms': catalog.get_platforms(),
            'error': catalog.load_error,
        }
    )


@dashboard_blueprint.route('/api/games')
@handle_api_errors
def api_games():
    catalog = _require_catalog()
    criteria = _criteria_from_request()
    visible = catalog.view(criteria)
    build_game_payload = _ctx('build_game_payload')
    return jsonify(
        {
            'games': [build_game_payload(game) for game in visible],
            'count': len(visible),
            'total': catalog.total_games,
            'stats': catalog.summarize(criteria).to_dict(),
            'criteria': criteria.to_dict(),
        }
    )


@dashboard_blueprint.route('/api/games/<platform>/<effective_id>')
@handle_api_errors
def api_game(platform: str, effective_id: str):
    catalog = _require_catalog()
    game = catalog.find(platform, effective_id)
    if game is None:
        raise NotFoundError(f'no {platform} game with id {effective_id}')
    return jsonify(_ctx('build_game_payload')(game))


@dashboard_blueprint.route('/api/tags')
@handle_api_errors
def api_tags():
    catalog = _require_catalog()
    return jsonify(
        {
            'tags': catalog.get_tags(),
            'frequency': [
                {'tag': tag, 'games': count} for tag, count in tag_frequency(catalog.games)
            ],
        }
    )


@dashboard_blueprint.route('/api/stats')
@handle_api_errors
def api_stats():
    catalog = _require_catalog()
    criteria = _criteria_from_request()
    return jsonify(
        {
            'stats': catalog.summarize(criteria).to_dict(),
            'criteria': criteria.to_dict(),
        }
    )


@dashboard_blueprint.route('/api/charts')
@handle_api_errors
def api_charts():
    catalog = _require_catalog()
    return jsonify(catalog.charts())
