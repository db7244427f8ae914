"""
Historical Results

Fetches full-season results through an in-memory cache and narrows them to
a simulated "this week" window: today's month/day replayed in a past season.

Example: today 2025-12-09, season 2022 -> window 2022-12-02 .. 2022-12-09
"""

import threading
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from loguru import logger

from rugby_etl.sports.client import RugbyApiClient


class UnrecognizedResponseError(ValueError):
    """Raised when a provider payload does not match any known shape."""


@dataclass(frozen=True)
class Game:
    date: Optional[str]
    home: Optional[str]
    away: Optional[str]
    home_score: Optional[int]
    away_score: Optional[int]
    status: Optional[str]
    league_name: Optional[str] = None

    @property
    def game_date(self) -> Optional[date]:
        return parse_calendar_date(self.date)


def parse_calendar_date(value: Any) -> Optional[date]:
    """
    Extract the calendar date from a provider timestamp.

    Args:
        value: ISO string such as '2022-10-15T15:00:00+00:00' or '2022-10-15'

    Returns:
        date, or None if missing/unparsable
    """
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
    except ValueError:
        pass

    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        logger.warning(f"Could not parse game date: {value}")
        return None


def as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str) and value.strip().lstrip('-').isdigit():
        return int(value.strip())
    return None


def _parse_score(scores: Any, side: str) -> Optional[int]:
    if not isinstance(scores, dict):
        return None

    value = scores.get(side)
    if isinstance(value, dict):
        value = value.get('total')
    score = as_int(value)
    if score is not None:
        return score

    full = scores.get('full')
    if isinstance(full, dict):
        return as_int(full.get(side))
    return None


def _parse_status(status: Any) -> Optional[str]:
    if isinstance(status, dict):
        return status.get('short') or status.get('long')
    if isinstance(status, str) and status:
        return status
    return None


def parse_game(raw: Dict) -> Game:
    """
    Parse one record of the /games response.

    Args:
        raw: Provider game dict

    Returns:
        Game

    Raises:
        UnrecognizedResponseError: If the record is not an object
    """
    if not isinstance(raw, dict):
        raise UnrecognizedResponseError(f"Game record is not an object: {raw!r}")

    game_date = raw.get('date')
    if not game_date and isinstance(raw.get('game'), dict):
        game_date = raw['game'].get('date')

    teams = raw.get('teams') if isinstance(raw.get('teams'), dict) else {}
    home = teams.get('home') if isinstance(teams.get('home'), dict) else {}
    away = teams.get('away') if isinstance(teams.get('away'), dict) else {}
    league = raw.get('league') if isinstance(raw.get('league'), dict) else {}

    return Game(
        date=game_date or None,
        home=home.get('name'),
        away=away.get('name'),
        home_score=_parse_score(raw.get('scores'), 'home'),
        away_score=_parse_score(raw.get('scores'), 'away'),
        status=_parse_status(raw.get('status')),
        league_name=league.get('name'),
    )


def parse_games(raw_games: Iterable[Dict]) -> List[Game]:
    """Parse a list of raw game records, skipping unrecognized entries."""
    games = []
    for raw in raw_games:
        try:
            games.append(parse_game(raw))
        except UnrecognizedResponseError as e:
            logger.warning(f"Skipping game record: {e}")
    return games


class GamesCache:
    """
    Full-season results keyed by (provider league ID, season).

    Lives for the whole process and never expires. The first fetch for a
    key is kept, including an empty result. Concurrent misses for the same
    key may both hit the provider; the last write wins.
    """

    def __init__(self, client: RugbyApiClient):
        self.client = client
        self._games: Dict[Tuple[int, int], List[Dict]] = {}
        self._lock = threading.Lock()

    def fetch_all_games_for_season(self, external_id: int, season: int) -> List[Dict]:
        """
        Return every raw game of a league season.

        Args:
            external_id: Provider league ID
            season: Season year

        Returns:
            List of raw provider game dicts (copy of the cached list)
        """
        key = (external_id, season)

        with self._lock:
            cached = self._games.get(key)
        if cached is not None:
            logger.debug(f"Games cache hit for {external_id}-{season}")
            return list(cached)

        payload = self.client.get_games(external_id, season)
        games = payload.get('response') if isinstance(payload, dict) else None
        if not isinstance(games, list):
            games = []

        with self._lock:
            self._games[key] = games

        logger.info(f"Cached {len(games)} games for league {external_id}, season {season}")
        return list(games)

    def invalidate(self, external_id: int, season: int) -> bool:
        """Drop one cached season. Returns True if it was cached."""
        with self._lock:
            return self._games.pop((external_id, season), None) is not None

    def clear(self):
        """Drop every cached season."""
        with self._lock:
            self._games.clear()

    def __contains__(self, key: Tuple[int, int]) -> bool:
        with self._lock:
            return key in self._games

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)


def compute_historical_window(
    target_year: int,
    days_back: int = 7,
    today: Optional[date] = None
) -> Tuple[date, date]:
    """
    Build the [from, to] window for the simulated week.

    'to' is today's month/day in target_year; 'from' is days_back days
    earlier. Month and year underflow follow normal date arithmetic.

    Args:
        target_year: Historical season year to replay
        days_back: Window length in days (default: 7)
        today: Reference date (default: date.today())

    Returns:
        Tuple of (from_date, to_date), both inclusive
    """
    today = today or date.today()

    try:
        to_date = date(target_year, today.month, today.day)
    except ValueError:
        # Feb 29 in a non-leap target year rolls over to Mar 1
        to_date = date(target_year, 3, 1)

    from_date = to_date - timedelta(days=days_back)
    return from_date, to_date


def filter_to_window(
    games: Iterable[Game],
    target_year: int,
    days_back: int = 7,
    today: Optional[date] = None
) -> List[Game]:
    """
    Keep only games inside the historical window (both ends inclusive).

    Games without a usable date are dropped.
    """
    from_date, to_date = compute_historical_window(target_year, days_back, today)

    in_window = []
    for game in games:
        game_date = game.game_date
        if game_date is None:
            continue
        if from_date <= game_date <= to_date:
            in_window.append(game)

    logger.debug(f"Historical window {from_date} .. {to_date}: {len(in_window)} games")
    return in_window
