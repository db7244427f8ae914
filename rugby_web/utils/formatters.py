"""Custom Jinja2 template filters"""
import re
from datetime import datetime

from ..services.article_service import article_league_key, article_type_tag, league_label


def format_date(value):
    """Format an ISO timestamp as dd/mm/yyyy

    Returns 'No date' for missing or unparsable values.
    """
    if not value:
        return 'No date'
    try:
        parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        return 'No date'
    return parsed.strftime('%d/%m/%Y')


def split_paragraphs(content):
    """Split article body on blank lines"""
    if not content:
        return []
    return [p.strip() for p in re.split(r'\n{2,}', content) if p.strip()]


def type_css_class(tag):
    """CSS class for an article type tag"""
    lowered = (tag or '').lower()
    if 'vlog' in lowered:
        return 'tag-type-vlog'
    if 'round' in lowered:
        return 'tag-type-roundup'
    if 'intro' in lowered:
        return 'tag-type-intro'
    return 'tag-default'


def register_filters(app):
    """Register custom template filters with Flask app"""

    app.add_template_filter(format_date, 'format_date')
    app.add_template_filter(split_paragraphs, 'paragraphs')
    app.add_template_filter(type_css_class, 'type_class')
    app.add_template_filter(article_type_tag, 'type_tag')

    @app.template_filter('article_league_label')
    def article_league_label(article):
        """League display name for an article, or None"""
        return league_label(article_league_key(article))

    @app.template_filter('stat')
    def stat(value):
        """Standings cell value ('-' when missing)"""
        return '-' if value is None else value
