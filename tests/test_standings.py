"""Tests for standings normalization and snapshots"""
import json

import pytest
import requests

from conftest import FakeSportsClient, make_raw_standings_row, write_snapshot
from rugby_etl.leagues import UnknownLeagueError
from rugby_etl.sports.games import UnrecognizedResponseError
from rugby_etl.sports.standings import (
    StandingsRow,
    fetch_standings,
    load_snapshot_rows,
    parse_standings_response,
    parse_standings_row,
    save_snapshot,
    snapshot_path,
)


def test_parse_provider_row():
    row = parse_standings_row(make_raw_standings_row(1, 'Toulouse', 86, played=26, wins=19, draws=1, losses=6))

    assert row == StandingsRow(
        position=1,
        team='Toulouse',
        logo='https://media.example/1.png',
        played=26,
        wins=19,
        draws=1,
        losses=6,
        points=86,
        points_for=250,
        points_against=180,
        form='WWLWD',
    )


def test_parse_alternate_field_names():
    """rank/all.win/lost style rows normalize to the same fields."""
    row = parse_standings_row({
        'rank': '3',
        'team': 'Leinster',
        'all': {'played': 18, 'win': 14, 'lose': 4},
        'points_total': 70,
    })

    assert row.position == 3
    assert row.team == 'Leinster'
    assert row.logo == ''
    assert (row.played, row.wins, row.draws, row.losses) == (18, 14, 0, 4)
    assert row.points == 70
    assert row.points_for is None


def test_parse_row_without_team():
    with pytest.raises(UnrecognizedResponseError):
        parse_standings_row({'position': 1, 'points': 10})


def test_parse_nested_response_shape():
    payload = {'response': [{'league': {'standings': [[
        make_raw_standings_row(1, 'Saracens', 60),
        make_raw_standings_row(2, 'Sale', 58),
    ]]}}]}

    rows = parse_standings_response(payload)
    assert [r.team for r in rows] == ['Saracens', 'Sale']


def test_parse_normalized_table_shape():
    payload = {'table': [StandingsRow(position=1, team='Crusaders', points=55).to_dict()]}
    rows = parse_standings_response(payload)
    assert rows[0].team == 'Crusaders'
    assert rows[0].points == 55


def test_parse_response_skips_rows_without_team():
    payload = {'response': [[make_raw_standings_row(1, 'Toulouse', 86), {'position': 2}]]}
    assert len(parse_standings_response(payload)) == 1


@pytest.mark.parametrize('payload', [
    {'response': []},
    {'response': [{'league': {}}]},
    {'errors': ['bad key']},
    [],
    None,
])
def test_parse_unrecognized_payloads(payload):
    with pytest.raises(UnrecognizedResponseError):
        parse_standings_response(payload)


def test_row_wire_keys():
    data = StandingsRow(position=1, team='Toulouse', points_for=10, points_against=5).to_dict()
    assert list(data) == [
        'position', 'team', 'logo', 'played', 'wins', 'draws', 'losses', 'points', 'for', 'against', 'form'
    ]
    assert data['for'] == 10
    assert data['against'] == 5


def test_fetch_standings_by_key_and_id():
    client = FakeSportsClient(standings={16: [make_raw_standings_row(1, 'Toulouse', 86)]})

    assert fetch_standings(client, 'TOP14', 2022)[0].team == 'Toulouse'
    assert fetch_standings(client, '16', 2022)[0].team == 'Toulouse'
    assert fetch_standings(client, 16)[0].team == 'Toulouse'
    assert client.standings_calls == [(16, 2022)] * 3


def test_fetch_standings_unrecognized_payload_is_empty():
    """A payload with no table yields an empty list, not an error."""
    client = FakeSportsClient()
    assert fetch_standings(client, 'URC', 2022) == []


def test_fetch_standings_unknown_league():
    client = FakeSportsClient()
    with pytest.raises(UnknownLeagueError):
        fetch_standings(client, 'NOT_A_LEAGUE', 2022)
    assert client.standings_calls == [], "Unknown leagues must not reach the provider"


def test_fetch_standings_transport_error():
    client = FakeSportsClient(failing_leagues=[16])
    with pytest.raises(requests.exceptions.RequestException):
        fetch_standings(client, 'TOP14', 2022)


def test_snapshot_path_uses_configured_filename(tmp_path):
    files = {'CN_HONRA_PORTUGAL': 'CN_Honra.json'}
    assert snapshot_path('CN_HONRA_PORTUGAL', tmp_path, files) == tmp_path / 'CN_Honra.json'
    assert snapshot_path('URC', tmp_path, files) == tmp_path / 'URC.json'


def test_save_and_load_snapshot(tmp_path):
    client = FakeSportsClient(standings={16: [make_raw_standings_row(1, 'Toulouse', 86)]})
    files = {'TOP14': 'Top14.json'}

    path = save_snapshot(client, 'TOP14', 2022, tmp_path / 'snapshots', files)

    assert path == tmp_path / 'snapshots' / 'Top14.json'
    assert json.loads(path.read_text(encoding='utf-8'))['response'][0][0]['team']['name'] == 'Toulouse'

    rows = load_snapshot_rows('TOP14', tmp_path / 'snapshots', files)
    assert [r.team for r in rows] == ['Toulouse']


def test_load_snapshot_missing_or_broken(tmp_path):
    assert load_snapshot_rows('URC', tmp_path) == []

    (tmp_path / 'URC.json').write_text('{not json', encoding='utf-8')
    assert load_snapshot_rows('URC', tmp_path) == []

    write_snapshot(tmp_path, 'PREMIERSHIP.json', [])
    assert load_snapshot_rows('PREMIERSHIP', tmp_path) == []


def test_minimal_rugby_row():
    """rank/team.name/points is enough for a usable row."""
    rows = parse_standings_response({'response': [[{'rank': 1, 'team': {'name': 'A'}, 'points': 50}]]})
    assert (rows[0].position, rows[0].team, rows[0].points) == (1, 'A', 50)


def test_form_is_always_text():
    row = parse_standings_row({'position': 1, 'team': 'Toulouse', 'form': 11010})
    assert row.form == '11010'

    row = parse_standings_row({'position': 1, 'team': 'Toulouse'})
    assert row.form == ''
