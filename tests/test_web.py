"""Tests for the Flask app: JSON API and blog pages"""
import pytest
import requests

from conftest import make_raw_standings_row, write_snapshot
from rugby_web import attach_scheduler
from rugby_web.extensions import cache


def _seed(store):
    store.add_article({'title': 'Welcome to the blog', 'content': 'First.\n\nSecond.', 'type': 'intro',
                       'date': '2025-01-01T10:00:00.000Z'})
    store.add_article({'title': 'Top 14 2022 – Weekly Round-Up: Toulouse top', 'content': 'Round-up body',
                       'type': 'roundup', 'league': 'TOP14', 'season': 2022, 'date': '2025-02-01T10:00:00.000Z'})
    store.add_article({'title': 'Pendulum defense explained', 'content': 'Vlog body', 'type': 'vlog',
                       'topic': 'Pendulum defense', 'date': '2025-03-01T10:00:00.000Z'})


def test_status(client):
    response = client.get('/')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok', 'source': 'Rugby AI backend'}


def test_cors_header(client):
    response = client.get('/articles')
    assert response.headers['Access-Control-Allow-Origin'] == '*'


def test_list_articles_newest_first(client, store):
    _seed(store)

    response = client.get('/articles')

    assert response.status_code == 200
    data = response.get_json()
    assert [a['id'] for a in data] == [3, 2, 1]
    assert set(data[0]) == {'id', 'title', 'content', 'type', 'league', 'season', 'topic', 'createdAt', 'date'}
    assert data[0]['topic'] == 'Pendulum defense'


def test_list_articles_empty(client):
    assert client.get('/articles').get_json() == []


def test_article_detail(client, store):
    _seed(store)

    response = client.get('/articles/2')
    assert response.status_code == 200
    assert response.get_json()['league'] == 'TOP14'


def test_article_not_found(client):
    response = client.get('/articles/99')
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Article not found'}


def test_standings(client, sports_client):
    sports_client.standings[16] = [make_raw_standings_row(1, 'Toulouse', 86)]

    response = client.get('/standings?league=TOP14&season=2022')

    assert response.status_code == 200
    data = response.get_json()
    assert data['league'] == 'TOP14'
    assert data['season'] == 2022
    assert data['table'][0]['team'] == 'Toulouse'
    assert data['table'][0]['for'] == 250


def test_standings_default_season_and_numeric_id(client, sports_client):
    response = client.get('/standings?league=16')

    assert response.status_code == 200
    assert response.get_json()['table'] == []
    assert sports_client.standings_calls == [(16, 2022)]


def test_standings_unknown_league(client, sports_client):
    response = client.get('/standings?league=NOPE')

    assert response.status_code == 500
    assert 'NOPE' in response.get_json()['error']
    assert sports_client.standings_calls == []


def test_standings_provider_failure(client, sports_client):
    sports_client.failing_leagues.add(16)

    response = client.get('/standings?league=TOP14')

    assert response.status_code == 500
    assert response.get_json() == {'error': 'Failed to fetch standings'}


def test_standings_provider_http_error(client, monkeypatch, sports_client):
    def unauthorized(league_id, season):
        raise requests.exceptions.HTTPError("401 Client Error")

    monkeypatch.setattr(sports_client, 'get_standings', unauthorized)

    assert client.get('/standings?league=TOP14').status_code == 500


def test_blog_index(client, store):
    _seed(store)

    response = client.get('/blog/')

    assert response.status_code == 200
    html = response.get_data(as_text=True)
    assert 'Pendulum defense explained' in html
    assert 'Welcome to the blog' in html
    assert 'Vlog body' in html, "Newest article is shown in the reader"
    assert 'tag-type-vlog' in html


def test_blog_type_filter(client, store):
    _seed(store)

    html = client.get('/blog/?type=roundup').get_data(as_text=True)

    assert 'Top 14 2022 – Weekly Round-Up: Toulouse top' in html
    assert 'Welcome to the blog' not in html


def test_blog_league_filter_empty_state(client, store):
    _seed(store)

    html = client.get('/blog/?league=urc').get_data(as_text=True)

    assert 'No articles match this filter.' in html


def test_blog_selected_article(client, store):
    _seed(store)

    html = client.get('/blog/?article=1').get_data(as_text=True)

    assert '<p>First.</p>' in html
    assert '<p>Second.</p>' in html
    assert '01/01/2025' in html


def test_blog_empty(client):
    response = client.get('/blog/')
    assert response.status_code == 200
    assert 'No articles published yet.' in response.get_data(as_text=True)


def test_blog_standings_widget(client, snapshot_dir):
    write_snapshot(snapshot_dir, 'Premiership.json', [make_raw_standings_row(1, 'Saracens', 60)])

    html = client.get('/blog/?standings=1').get_data(as_text=True)

    assert 'Premiership Rugby' in html
    assert 'Saracens' in html


def test_article_permalink_redirects_to_slug(client, store):
    _seed(store)

    response = client.get('/blog/article/1')

    assert response.status_code == 301
    assert response.headers['Location'].endswith('/blog/article/1/welcome-to-the-blog')

    page = client.get('/blog/article/1/welcome-to-the-blog')
    assert page.status_code == 200
    assert 'Welcome to the blog' in page.get_data(as_text=True)


def test_article_permalink_not_found(client):
    assert client.get('/blog/article/42').status_code == 404


def test_full_standings_page(client, snapshot_dir):
    write_snapshot(snapshot_dir, 'Top14.json', [
        make_raw_standings_row(1, 'Toulouse', 86),
        make_raw_standings_row(2, 'La Rochelle', 80),
    ])

    response = client.get('/blog/standings/top14')

    assert response.status_code == 200
    html = response.get_data(as_text=True)
    assert 'Toulouse' in html
    assert 'La Rochelle' in html


def test_full_standings_missing_snapshot(client):
    html = client.get('/blog/standings/URC').get_data(as_text=True)
    assert 'No standings available for United Rugby Championship.' in html


def test_full_standings_unknown_league(client):
    assert client.get('/blog/standings/NOPE').status_code == 404


def test_attach_scheduler_shares_services(app):
    scheduler = attach_scheduler(app)

    assert set(scheduler.triggers) == {'roundup', 'vlog'}
    assert not scheduler.is_running
    assert app.extensions['rugby_blog'].scheduler is scheduler


@pytest.fixture
def cached_client(app):
    cache.init_app(app, config={'CACHE_TYPE': 'SimpleCache'})
    return app.test_client()


def test_standings_cached_by_query_string(cached_client, sports_client):
    sports_client.standings[16] = [make_raw_standings_row(1, 'Toulouse', 86)]

    first = cached_client.get('/standings?league=TOP14')
    second = cached_client.get('/standings?league=TOP14')

    assert first.status_code == second.status_code == 200
    assert second.get_json() == first.get_json()
    assert sports_client.standings_calls == [(16, 2022)], "Repeat request is served from the cache"

    cached_client.get('/standings?league=TOP14&season=2021')
    assert sports_client.standings_calls == [(16, 2022), (16, 2021)]


def test_standings_failures_not_cached(cached_client, sports_client):
    sports_client.failing_leagues.add(13)

    assert cached_client.get('/standings?league=PREMIERSHIP').status_code == 500
    assert cached_client.get('/standings?league=PREMIERSHIP').status_code == 500

    assert sports_client.standings_calls == [(13, 2022), (13, 2022)]


def test_untyped_legacy_article(client, store):
    store.path.write_text(
        '[{"id": 1, "title": "Legacy post", "content": "Old body", "createdAt": "2024-05-01T10:00:00.000Z"}]',
        encoding='utf-8',
    )

    assert client.get('/articles/1').get_json()['type'] is None

    html = client.get('/blog/?type=OTHER').get_data(as_text=True)
    assert 'Legacy post' in html
    assert 'OTHER' in html
    assert 'tag-default' in html
