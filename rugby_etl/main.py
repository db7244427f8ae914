#! /usr/bin/env python3
"""
Rugby Blog ETL Entry Point
"""
import sys
import time
from pathlib import Path

import click
from loguru import logger

from rugby_etl.config import ARTICLES_CONFIG, LLM_CONFIG, LOG_DIR, RUGBY_API_CONFIG, SCHEDULE_CONFIG, STANDINGS_CONFIG


def configure_logging(debug=False):
    """Configure loguru for the ETL commands"""
    logger.remove()
    logger.add(
        str(LOG_DIR / "etl_{time:YYYY-MM-DD}.log"),
        rotation="1 day",
        retention="30 days",
        level="DEBUG",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
    )
    logger.add(sys.stderr, level="DEBUG" if debug else "INFO")


@click.group()
@click.option('--debug/--no-debug', default=False, help='Enable debug logging')
def cli(debug):
    """Rugby Blog ETL Pipeline"""
    configure_logging(debug)
    logger.debug("Starting Rugby Blog ETL")


@cli.command('run-roundups')
@click.option('--days-back', default=SCHEDULE_CONFIG['days_back'], show_default=True, help='Length of the historical window')
def run_roundups(days_back):
    """Generate this week's historic round-ups for every league"""
    from rugby_etl.newspaper.pipeline import create_pipeline

    saved = create_pipeline().run_weekly_roundups(days_back=days_back)
    click.echo(f"✓ {len(saved)} round-up article(s) saved")
    for article in saved:
        click.echo(f"  [{article.id}] {article.title}")


@cli.command('run-vlog')
def run_vlog():
    """Generate one vlog-style opinion article"""
    from rugby_etl.newspaper.pipeline import create_pipeline

    try:
        article = create_pipeline().run_vlog(max_previous=SCHEDULE_CONFIG['previous_vlogs_max'])
    except Exception as e:
        logger.exception(f"Error generating vlog article: {e}")
        click.echo("✗ Vlog generation failed")
        sys.exit(1)

    click.echo(f"✓ Vlog article saved: [{article.id}] {article.title}")


@cli.command('schedule')
def schedule():
    """Run the weekly round-up and vlog triggers until interrupted"""
    from rugby_etl.newspaper.pipeline import create_pipeline
    from rugby_etl.scheduler import ArticleScheduler

    scheduler = ArticleScheduler.from_config(create_pipeline())
    scheduler.start()
    click.echo("Scheduler running - press Ctrl+C to stop")

    try:
        while scheduler.is_running:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        scheduler.stop()


@cli.command('snapshot-standings')
@click.option('--season', default=STANDINGS_CONFIG['default_season'], show_default=True, type=int)
@click.option('--league', '-l', multiple=True, help='Specific league keys (default: all)')
def snapshot_standings(season, league):
    """Save provider standings to the local snapshot directory"""
    import requests

    from rugby_etl.leagues import LEAGUES
    from rugby_etl.sports.client import create_client
    from rugby_etl.sports.standings import save_snapshot

    client = create_client(RUGBY_API_CONFIG)
    keys = league or tuple(LEAGUES)
    failures = 0

    for key in keys:
        if key not in LEAGUES:
            click.echo(f"✗ Unknown league key: {key}")
            failures += 1
            continue
        try:
            path = save_snapshot(client, key, season, STANDINGS_CONFIG['snapshot_dir'], STANDINGS_CONFIG['snapshot_files'])
            click.echo(f"✓ {key} -> {path}")
        except requests.exceptions.RequestException as e:
            logger.error(f"Snapshot failed for {key}: {e}")
            click.echo(f"✗ {key}: {e}")
            failures += 1

    if failures:
        sys.exit(1)


@cli.command('add-article')
@click.option('--title', required=True)
@click.option('--content-file', required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--type', 'article_type', default='intro', show_default=True)
@click.option('--league', default=None, help='League key, e.g. TOP14')
@click.option('--season', default=None, type=int)
def add_article(title, content_file, article_type, league, season):
    """Store a hand-written article (intro posts and similar)"""
    from rugby_etl.newspaper.article_store import ArticleStore, ArticleStoreError

    store = ArticleStore(ARTICLES_CONFIG['path'])
    try:
        article = store.add_article({
            'title': title,
            'content': content_file.read_text(encoding='utf-8'),
            'type': article_type,
            'league': league.upper() if league else None,
            'season': season,
        })
    except ArticleStoreError as e:
        logger.error(str(e))
        click.echo(f"✗ Article not saved: {e}")
        sys.exit(1)
    click.echo(f"✓ Article saved: [{article.id}] {article.title}")


@cli.command('list-articles')
@click.option('--type', 'article_type', default=None, help='Only this article type')
def list_articles(article_type):
    """List stored articles, newest first"""
    from rugby_etl.newspaper.article_store import ArticleStore

    articles = ArticleStore(ARTICLES_CONFIG['path']).get_all()
    if article_type:
        articles = [a for a in articles if a.type == article_type]

    for article in articles:
        click.echo(f"{article.id:>4}  {(article.date or '')[:10]}  {article.type or '-':<8}  {article.title}")
    click.echo(f"{len(articles)} article(s)")


@cli.command('check-status')
def check_status():
    """Check ETL configuration and article storage"""
    from rugby_etl.newspaper.article_store import ArticleStore

    logger.info('Checking ETL status')

    click.echo(f"{'✓' if RUGBY_API_CONFIG['api_key'] else '✗'} API_RUGBY_KEY configured")
    click.echo(f"{'✓' if LLM_CONFIG['api_key'] else '✗'} HF_ACCESS_TOKEN configured (model: {LLM_CONFIG['model']})")

    store = ArticleStore(ARTICLES_CONFIG['path'])
    click.echo(f"Articles file: {store.path} ({store.count()} articles)")
    click.echo(f"Standings snapshots: {STANDINGS_CONFIG['snapshot_dir']}")


if __name__ == '__main__':
    cli()
