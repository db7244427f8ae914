"""
Article Generation Pipeline

End-to-end orchestration of the two article kinds:

Weekly round-ups (one per league with games in the simulated week):
1. Fetch the full historic season (cached)
2. Keep the games of the historical window
3. Fetch standings and build the summary
4. Generate the article and save it

Vlog pieces:
1. Pick a topic not covered yet (or any topic once all are used)
2. Summarize recent vlogs so the model can avoid repeating itself
3. Generate the article and save it
"""

import random
from datetime import date
from typing import Dict, List, Optional, Sequence

from loguru import logger

from rugby_etl.config import ARTICLES_CONFIG, LLM_CONFIG, RUGBY_API_CONFIG, VLOG_TOPICS
from rugby_etl.leagues import League, roundup_leagues
from rugby_etl.newspaper.article_generator import ArticleGenerator
from rugby_etl.newspaper.article_store import Article, ArticleStore
from rugby_etl.newspaper.llm_client import create_llm_client
from rugby_etl.newspaper.summary_builder import STANDINGS_LIMIT, build_summary
from rugby_etl.sports.client import RugbyApiClient, create_client
from rugby_etl.sports.games import GamesCache, filter_to_window, parse_games
from rugby_etl.sports.standings import fetch_standings

ROUNDUP_TITLE_PREFIX = "{league_name} {season} – Weekly Round-Up: "


class NewspaperPipeline:
    """Runs the round-up and vlog pipelines against injected collaborators."""

    def __init__(
        self,
        store: ArticleStore,
        sports_client: RugbyApiClient,
        games_cache: GamesCache,
        generator: ArticleGenerator,
        leagues: Optional[Sequence[League]] = None,
        vlog_topics: Optional[Sequence[str]] = None
    ):
        """
        Args:
            store: Article store (one per process)
            sports_client: Rugby API client used for standings
            games_cache: Season games cache (one per process)
            generator: Article generator
            leagues: Leagues covered by round-ups (default: registry round-up leagues)
            vlog_topics: Vlog topic pool (default: VLOG_TOPICS)
        """
        self.store = store
        self.sports_client = sports_client
        self.games_cache = games_cache
        self.generator = generator
        self.leagues = list(leagues) if leagues is not None else roundup_leagues()
        self.vlog_topics = list(vlog_topics) if vlog_topics is not None else list(VLOG_TOPICS)

    # ------------------------------------------------------------------
    # Weekly round-ups
    # ------------------------------------------------------------------

    def build_league_summary(self, league: League, days_back: int = 7, today: Optional[date] = None) -> Optional[Dict]:
        """
        Build the round-up summary for one league.

        Returns:
            Dict with league_key, league_name, season, summary_text, or None
            when the historical window has no games
        """
        raw_games = self.games_cache.fetch_all_games_for_season(league.external_id, league.season)
        games = filter_to_window(parse_games(raw_games), league.season, days_back, today)

        if not games:
            logger.info(f"No games in the historic week for {league.key} (season {league.season}), league skipped")
            return None

        standings = fetch_standings(self.sports_client, league.external_id, league.season)
        league_name = games[0].league_name or league.key

        summary_text = build_summary(league.key, league_name, league.season, games, standings[:STANDINGS_LIMIT])
        logger.debug(f"Summary for {league.key}: {len(games)} games, {len(standings)} standings rows")

        return {
            'league_key': league.key,
            'league_name': league_name,
            'season': league.season,
            'summary_text': summary_text,
        }

    def run_roundup_for_league(self, league: League, days_back: int = 7, today: Optional[date] = None) -> Optional[Article]:
        """Generate and store one league's round-up. None if the league was skipped."""
        summary = self.build_league_summary(league, days_back, today)
        if summary is None:
            return None

        generated = self.generator.generate_roundup_article(summary['summary_text'])
        prefix = ROUNDUP_TITLE_PREFIX.format(league_name=summary['league_name'], season=summary['season'])

        saved = self.store.add_article({
            'title': prefix + generated.title,
            'content': generated.content,
            'type': 'roundup',
            'league': summary['league_key'],
            'season': summary['season'],
        })
        logger.success(f"Round-up article saved for {league.key}: {saved.title}")
        return saved

    def run_weekly_roundups(self, days_back: int = 7, today: Optional[date] = None) -> List[Article]:
        """
        Run the round-up pipeline for every configured league, in order.

        A failure in one league is logged and the remaining leagues still run.

        Returns:
            Articles saved in this run
        """
        logger.info(f"Historic weekly round-ups for {len(self.leagues)} leagues")
        saved = []

        for league in self.leagues:
            try:
                article = self.run_roundup_for_league(league, days_back, today)
            except Exception as e:
                logger.error(f"Error building round-up for {league.key}: {e}")
                continue
            if article:
                saved.append(article)

        logger.info(f"Round-up run complete: {len(saved)} articles saved")
        return saved

    # ------------------------------------------------------------------
    # Vlog pieces
    # ------------------------------------------------------------------

    def pick_next_vlog_topic(self, rng: Optional[random.Random] = None) -> str:
        """
        Pick a vlog topic, preferring topics no stored vlog has used.

        Once every topic has been used, any topic may repeat.
        """
        rng = rng or random.Random()
        used_topics = {a.topic for a in self.store.vlog_articles() if a.topic}
        unused = [t for t in self.vlog_topics if t not in used_topics]

        if unused:
            return rng.choice(unused)

        logger.info("All vlog topics used already, repeating one")
        return rng.choice(self.vlog_topics)

    def build_previous_vlogs_summary(self, max_items: int = 10) -> str:
        """
        Bullet list of the most recent vlogs.

        Example line: - Title: "Why defense wins titles" | Topic: Pendulum defense ...
        """
        recent = self.store.vlog_articles()[:max_items]
        return "\n".join(
            f'- Title: "{a.title}" | Topic: {a.topic or "unknown topic"}' for a in recent
        )

    def run_vlog(self, rng: Optional[random.Random] = None, max_previous: int = 10) -> Article:
        """
        Generate and store one vlog-style article.

        Raises:
            Any generation or storage error (handled by the trigger)
        """
        topic = self.pick_next_vlog_topic(rng)
        previous_vlogs_summary = self.build_previous_vlogs_summary(max_previous)
        logger.info(f"Chosen vlog topic: {topic}")

        generated = self.generator.generate_vlog_article(topic, previous_vlogs_summary)

        saved = self.store.add_article({
            'title': generated.title,
            'content': generated.content,
            'type': 'vlog',
            'topic': topic,
        })
        logger.success(f"Vlog article saved: {saved.title}")
        return saved


def create_pipeline(
    store: Optional[ArticleStore] = None,
    sports_client: Optional[RugbyApiClient] = None,
    games_cache: Optional[GamesCache] = None
) -> NewspaperPipeline:
    """
    Build a pipeline from configuration.

    Pass existing store/client/cache objects to share them with the web app.
    """
    if store is None:
        store = ArticleStore(ARTICLES_CONFIG['path'])
    if sports_client is None:
        sports_client = create_client(RUGBY_API_CONFIG)
    if games_cache is None:
        games_cache = GamesCache(sports_client)
    generator = ArticleGenerator(create_llm_client(LLM_CONFIG))

    return NewspaperPipeline(store, sports_client, games_cache, generator)
