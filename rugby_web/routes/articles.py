"""Article routes - JSON API for the frontend"""
from flask import Blueprint, jsonify

from ..extensions import get_services

bp = Blueprint('articles', __name__)


@bp.route('')
@bp.route('/')
def list_articles():
    """All articles, newest first"""
    articles = get_services().store.get_all()
    return jsonify([a.to_dict() for a in articles])


@bp.route('/<int:article_id>')
def article_detail(article_id):
    """One article by ID"""
    article = get_services().store.get_by_id(article_id)
    if article is None:
        return jsonify({'error': 'Article not found'}), 404
    return jsonify(article.to_dict())
