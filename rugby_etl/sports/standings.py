"""
Standings

Normalizes the provider's standings payloads into StandingsRow objects.

The provider is inconsistent: the rugby endpoint returns
response: [[row, ...]], older snapshots nest rows under
response[0].league.standings[0], and rows name the same field several ways
(rank/position, games.win.total/all.win/won, ...). All of that is resolved
here, once, in parse_standings_row / parse_standings_response.

Snapshots: the raw payload saved to disk so the dashboard can render tables
without spending provider quota.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from loguru import logger

from rugby_etl.leagues import resolve_league_id
from rugby_etl.sports.client import RugbyApiClient
from rugby_etl.sports.games import UnrecognizedResponseError, as_int


@dataclass(frozen=True)
class StandingsRow:
    position: Optional[int]
    team: str
    logo: str = ''
    played: Optional[int] = None
    wins: Optional[int] = None
    draws: Optional[int] = 0
    losses: Optional[int] = None
    points: Optional[int] = None
    points_for: Optional[int] = None
    points_against: Optional[int] = None
    form: str = ''

    def to_dict(self) -> Dict:
        """Wire shape used by the HTTP API and the dashboard."""
        return {
            'position': self.position,
            'team': self.team,
            'logo': self.logo,
            'played': self.played,
            'wins': self.wins,
            'draws': self.draws,
            'losses': self.losses,
            'points': self.points,
            'for': self.points_for,
            'against': self.points_against,
            'form': self.form,
        }


def _lookup(raw: Dict, *paths: str) -> Any:
    """Return the first non-None value among dotted paths."""
    for path in paths:
        value: Any = raw
        for part in path.split('.'):
            if not isinstance(value, dict):
                value = None
                break
            value = value.get(part)
        if value is not None:
            return value
    return None


def parse_standings_row(raw: Dict) -> StandingsRow:
    """
    Parse one standings row (provider or already-normalized shape).

    Raises:
        UnrecognizedResponseError: If the row has no team name
    """
    if not isinstance(raw, dict):
        raise UnrecognizedResponseError(f"Standings row is not an object: {raw!r}")

    team = raw.get('team')
    if isinstance(team, dict):
        team_name, logo = team.get('name'), team.get('logo') or ''
    else:
        team_name, logo = team, raw.get('logo') or ''

    if not team_name:
        raise UnrecognizedResponseError(f"Standings row has no team name: {raw!r}")

    draws = as_int(_lookup(raw, 'games.draw.total', 'all.draw', 'drawn', 'draws'))
    form = _lookup(raw, 'form')

    return StandingsRow(
        position=as_int(_lookup(raw, 'position', 'rank')),
        team=str(team_name),
        logo=logo,
        played=as_int(_lookup(raw, 'games.played', 'all.played', 'played')),
        wins=as_int(_lookup(raw, 'games.win.total', 'all.win', 'won', 'wins')),
        draws=draws if draws is not None else 0,
        losses=as_int(_lookup(raw, 'games.lose.total', 'all.lose', 'lost', 'losses')),
        points=as_int(_lookup(raw, 'points', 'points_total', 'pointsTotal')),
        points_for=as_int(_lookup(raw, 'goals.for', 'points_for', 'for')),
        points_against=as_int(_lookup(raw, 'goals.against', 'points_against', 'against')),
        form=str(form) if form is not None else '',
    )


def _extract_rows(payload: Dict) -> List:
    response = payload.get('response')

    if isinstance(response, list) and response:
        first = response[0]
        # Rugby endpoint: response: [[row, ...]]
        if isinstance(first, list):
            return first
        # Nested shape: response: [{league: {standings: [[row, ...]]}}]
        nested = _lookup(first, 'league.standings') if isinstance(first, dict) else None
        if isinstance(nested, list) and nested and isinstance(nested[0], list):
            return nested[0]

    # Already normalized (snapshot written by us)
    if isinstance(payload.get('table'), list):
        return payload['table']

    raise UnrecognizedResponseError("No standings array found in payload")


def parse_standings_response(payload: Any) -> List[StandingsRow]:
    """
    Parse a full /standings envelope.

    Args:
        payload: Decoded JSON from the provider or a snapshot file

    Returns:
        List of StandingsRow (rows without a team are skipped)

    Raises:
        UnrecognizedResponseError: If no standings array can be located
    """
    if not isinstance(payload, dict):
        raise UnrecognizedResponseError(f"Standings payload is not an object: {type(payload).__name__}")

    rows = []
    for raw in _extract_rows(payload):
        try:
            rows.append(parse_standings_row(raw))
        except UnrecognizedResponseError as e:
            logger.warning(f"Skipping standings row: {e}")
    return rows


def fetch_standings(
    client: RugbyApiClient,
    league_key_or_id: Union[str, int],
    season: int = 2022
) -> List[StandingsRow]:
    """
    Fetch and normalize a league table.

    Args:
        client: Rugby API client
        league_key_or_id: Registry key ('TOP14') or provider ID (16 / '16')
        season: Season year (default: 2022)

    Returns:
        List of StandingsRow; empty if the payload has no recognizable table

    Raises:
        UnknownLeagueError: If the league cannot be resolved
        requests.exceptions.RequestException: On transport failure
    """
    league_id = resolve_league_id(league_key_or_id)
    payload = client.get_standings(league_id, season)

    try:
        rows = parse_standings_response(payload)
    except UnrecognizedResponseError as e:
        logger.warning(f"No standings for league {league_id}, season {season}: {e}")
        return []

    logger.info(f"Fetched {len(rows)} standings rows for league {league_id}, season {season}")
    return rows


def snapshot_path(league_key: str, snapshot_dir: Path, snapshot_files: Optional[Dict[str, str]] = None) -> Path:
    """Location of a league's standings snapshot file."""
    filename = (snapshot_files or {}).get(league_key, f"{league_key}.json")
    return Path(snapshot_dir) / filename


def save_snapshot(
    client: RugbyApiClient,
    league_key: str,
    season: int,
    snapshot_dir: Path,
    snapshot_files: Optional[Dict[str, str]] = None
) -> Path:
    """
    Fetch a league's standings and save the raw payload to disk.

    Returns:
        Path of the written snapshot
    """
    payload = client.get_standings(resolve_league_id(league_key), season)

    path = snapshot_path(league_key, snapshot_dir, snapshot_files)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)

    logger.info(f"Saved standings snapshot for {league_key} ({season}) to {path}")
    return path


def load_snapshot_rows(
    league_key: str,
    snapshot_dir: Path,
    snapshot_files: Optional[Dict[str, str]] = None
) -> List[StandingsRow]:
    """
    Read a league's standings snapshot.

    Returns:
        Parsed rows; empty if the file is missing or unusable
    """
    path = snapshot_path(league_key, snapshot_dir, snapshot_files)
    if not path.exists():
        logger.debug(f"No standings snapshot for {league_key} at {path}")
        return []

    try:
        with open(path, 'r', encoding='utf-8') as f:
            payload = json.load(f)
        return parse_standings_response(payload)
    except (OSError, json.JSONDecodeError, UnrecognizedResponseError) as e:
        logger.warning(f"Unusable standings snapshot {path}: {e}")
        return []
