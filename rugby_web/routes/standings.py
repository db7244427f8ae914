"""Standings routes - live provider tables as JSON"""
import requests
from flask import Blueprint, current_app, jsonify, request
from loguru import logger

from rugby_etl.leagues import UnknownLeagueError
from rugby_etl.sports.standings import fetch_standings
from ..extensions import cache, get_services

bp = Blueprint('standings', __name__)


def _only_success(response):
    """Cache successful responses only"""
    status = response[1] if isinstance(response, tuple) else getattr(response, 'status_code', 200)
    return status == 200


@bp.route('')
@bp.route('/')
@cache.cached(query_string=True, response_filter=_only_success)
def league_standings():
    """Normalized table for ?league=<key or id>&season=<year>"""
    league = request.args.get('league', '')
    season = request.args.get('season', current_app.config['DEFAULT_SEASON'], type=int)

    try:
        rows = fetch_standings(get_services().sports_client, league, season)
    except UnknownLeagueError as e:
        logger.warning(f"Standings request for unknown league: {league!r}")
        return jsonify({'error': str(e)}), 500
    except requests.exceptions.RequestException as e:
        logger.error(f"Error fetching standings for {league} ({season}): {e}")
        return jsonify({'error': 'Failed to fetch standings'}), 500

    return jsonify({
        'league': league,
        'season': season,
        'table': [row.to_dict() for row in rows],
    })
