"""Main routes (status)"""
from flask import Blueprint, jsonify

bp = Blueprint('main', __name__)


@bp.route('/')
def index():
    """Liveness marker"""
    return jsonify({'status': 'ok', 'source': 'Rugby AI backend'})
