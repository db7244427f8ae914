"""Article service layer for the dashboard (filters, tags, selection)."""
from typing import List, Optional, Sequence, Tuple

from rugby_etl.leagues import get_league
from rugby_etl.newspaper.article_store import Article

ARTICLE_TYPE_OPTIONS: List[Tuple[str, str]] = [
    ('ALL', 'All types'),
    ('intro', 'Intro'),
    ('roundup', 'Round-up'),
    ('vlog', 'Vlog / Opinion'),
]

TYPE_TAGS = {
    'vlog': 'VLOG',
    'roundup': 'ROUND-UP',
    'intro': 'INTRO',
}


def article_league_key(article: Article) -> Optional[str]:
    """Upper-cased league key, or None when the article has no league."""
    if not article.league:
        return None
    return str(article.league).upper()


def article_type_tag(article: Article) -> str:
    """Display tag for the article type ('OTHER' when untyped)."""
    if not article.type:
        return 'OTHER'
    return TYPE_TAGS.get(article.type, article.type.upper())


def league_label(league_key: Optional[str]) -> Optional[str]:
    """Registry display name for a league key; unknown keys are shown as-is."""
    if not league_key or league_key == 'OTHER':
        return None
    league = get_league(league_key)
    return league.name if league else league_key


def filter_articles(
    articles: Sequence[Article],
    type_filter: str = 'ALL',
    league_filter: str = 'ALL'
) -> List[Article]:
    """
    Apply the dashboard's type and league filters.

    Args:
        articles: Articles (already sorted)
        type_filter: 'ALL' or an article type ('roundup', 'vlog', ...)
        league_filter: 'ALL' or a league key (compared upper-cased)

    Returns:
        Matching articles, order preserved
    """
    league_filter = (league_filter or 'ALL').upper()
    type_filter = type_filter or 'ALL'

    matches = []
    for article in articles:
        if type_filter != 'ALL' and (article.type or 'OTHER') != type_filter:
            continue
        if league_filter != 'ALL' and article_league_key(article) != league_filter:
            continue
        matches.append(article)
    return matches


def select_article(articles: Sequence[Article], article_id: Optional[int]) -> Optional[Article]:
    """The requested article, falling back to the newest one."""
    if article_id is not None:
        for article in articles:
            if article.id == article_id:
                return article
    return articles[0] if articles else None
