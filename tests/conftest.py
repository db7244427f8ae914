"""Shared fixtures: fake provider, fake LLM, temporary article store, Flask app"""
import json

import pytest
import requests

from rugby_etl.newspaper.article_generator import ArticleGenerator
from rugby_etl.newspaper.article_store import ArticleStore
from rugby_etl.newspaper.pipeline import NewspaperPipeline
from rugby_etl.sports.games import GamesCache
from rugby_web import create_app
from rugby_web.extensions import BlogServices


def make_raw_game(game_date, home, away, home_score, away_score, league_name='Top 14', status='FT'):
    """Provider-shaped /games record"""
    return {
        'date': game_date,
        'status': {'short': status, 'long': 'Finished'},
        'league': {'name': league_name},
        'teams': {'home': {'name': home}, 'away': {'name': away}},
        'scores': {'home': home_score, 'away': away_score},
    }


def make_raw_standings_row(position, team, points, played=10, wins=6, draws=1, losses=3):
    """Provider-shaped /standings row"""
    return {
        'position': position,
        'team': {'name': team, 'logo': f'https://media.example/{position}.png'},
        'games': {
            'played': played,
            'win': {'total': wins},
            'draw': {'total': draws},
            'lose': {'total': losses},
        },
        'goals': {'for': 250, 'against': 180},
        'points': points,
        'form': 'WWLWD',
    }


class FakeSportsClient:
    """Stands in for RugbyApiClient; payloads keyed by provider league ID"""

    def __init__(self, games=None, standings=None, failing_leagues=()):
        self.games = games or {}
        self.standings = standings or {}
        self.failing_leagues = set(failing_leagues)
        self.games_calls = []
        self.standings_calls = []

    def get_games(self, league_id, season):
        self.games_calls.append((league_id, season))
        if league_id in self.failing_leagues:
            raise requests.exceptions.ConnectionError(f"league {league_id} unreachable")
        return {'response': self.games.get(league_id, [])}

    def get_standings(self, league_id, season):
        self.standings_calls.append((league_id, season))
        if league_id in self.failing_leagues:
            raise requests.exceptions.ConnectionError(f"league {league_id} unreachable")
        if league_id in self.standings:
            return {'response': [self.standings[league_id]]}
        return {'response': []}


class FakeLLMClient:
    """Stands in for LLMClient; replays canned replies and records prompts"""

    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.calls = []

    def chat(self, system_prompt, user_prompt, model=None, max_tokens=None, temperature=None):
        self.calls.append((system_prompt, user_prompt))
        if self.error:
            raise self.error
        if self.replies:
            return self.replies.pop(0)
        return "Generated title\n\nGenerated body paragraph."


@pytest.fixture
def store(tmp_path):
    return ArticleStore(tmp_path / 'articles.json')


@pytest.fixture
def sports_client():
    return FakeSportsClient()


@pytest.fixture
def llm_client():
    return FakeLLMClient()


@pytest.fixture
def pipeline(store, sports_client, llm_client):
    return NewspaperPipeline(
        store=store,
        sports_client=sports_client,
        games_cache=GamesCache(sports_client),
        generator=ArticleGenerator(llm_client),
    )


@pytest.fixture
def snapshot_dir(tmp_path):
    path = tmp_path / 'standings'
    path.mkdir()
    return path


def write_snapshot(snapshot_dir, filename, rows):
    """Write a provider-shaped standings snapshot"""
    path = snapshot_dir / filename
    path.write_text(json.dumps({'response': [rows]}), encoding='utf-8')
    return path


@pytest.fixture
def app(store, sports_client, snapshot_dir):
    services = BlogServices(
        store=store,
        sports_client=sports_client,
        games_cache=GamesCache(sports_client),
    )
    app = create_app('testing', services=services)
    app.config['STANDINGS_SNAPSHOT_DIR'] = snapshot_dir
    return app


@pytest.fixture
def client(app):
    return app.test_client()
