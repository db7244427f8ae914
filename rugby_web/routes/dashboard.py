"""Dashboard routes - server-rendered blog pages"""
from flask import Blueprint, abort, current_app, redirect, render_template, request, url_for
from slugify import slugify

from rugby_etl.leagues import all_leagues
from ..extensions import get_services
from ..services.article_service import filter_articles, select_article
from ..services.standings_service import find_next_available_index, league_index, load_all_standings

bp = Blueprint('dashboard', __name__)

WIDGET_ROWS = 8


def _standings_context(active_index):
    """Carousel state for the standings widget"""
    leagues = all_leagues()
    rows_by_league = load_all_standings(
        current_app.config['STANDINGS_SNAPSHOT_DIR'],
        current_app.config['STANDINGS_SNAPSHOT_FILES'],
        leagues,
    )
    active_index = active_index % len(leagues)
    active_league = leagues[active_index]

    return {
        'active_league': active_league,
        'active_index': active_index,
        'standings': rows_by_league.get(active_league.key, []),
        'prev_index': find_next_available_index(leagues, rows_by_league, active_index, -1),
        'next_index': find_next_available_index(leagues, rows_by_league, active_index, 1),
        'leagues': leagues,
    }


@bp.route('')
@bp.route('/')
def index():
    """Blog homepage: filtered article list, reader pane and standings widget"""
    type_filter = request.args.get('type', 'ALL')
    league_filter = request.args.get('league', 'ALL').upper()

    articles = get_services().store.get_all()
    filtered = filter_articles(articles, type_filter, league_filter)
    selected = select_article(articles, request.args.get('article', type=int))

    return render_template(
        'dashboard/index.html',
        articles=filtered,
        selected_article=selected,
        type_filter=type_filter,
        league_filter=league_filter,
        standings_limit=WIDGET_ROWS,
        **_standings_context(request.args.get('standings', 0, type=int))
    )


@bp.route('/article/<int:article_id>')
@bp.route('/article/<int:article_id>/<slug>')
def article_detail(article_id, slug=None):
    """Permalink page for one article"""
    article = get_services().store.get_by_id(article_id)
    if article is None:
        abort(404)

    canonical_slug = slugify(article.title) or 'article'
    if slug != canonical_slug:
        return redirect(url_for('dashboard.article_detail', article_id=article_id, slug=canonical_slug), code=301)

    return render_template('dashboard/article.html', article=article)


@bp.route('/standings/<league_key>')
def full_standings(league_key):
    """Full standings table for one league, with prev/next navigation"""
    leagues = all_leagues()
    index = league_index(leagues, league_key.upper())
    if index is None:
        abort(404)

    return render_template('dashboard/standings.html', standings_limit=None, **_standings_context(index))
