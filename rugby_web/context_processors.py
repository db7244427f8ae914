"""
Context processors for the application.

Context processors make variables available to all templates automatically.
"""
from flask import current_app

from rugby_etl.leagues import all_leagues
from .services.article_service import ARTICLE_TYPE_OPTIONS


def inject_blog_context():
    """
    Inject the league list, article type options and display season.

    Returns:
        dict: blog_leagues, article_type_options, display_season
    """
    return {
        'blog_leagues': all_leagues(),
        'article_type_options': ARTICLE_TYPE_OPTIONS,
        'display_season': current_app.config['DEFAULT_SEASON'],
    }
