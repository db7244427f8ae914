"""
League Registry

Static mapping from internal league keys (e.g. 'TOP14') to API-Sports
league IDs, the historical season each league is replayed from, and the
display label used by the blog.
"""

from dataclasses import dataclass
from typing import List, Optional, Union


class UnknownLeagueError(ValueError):
    """Raised when a league key or ID cannot be resolved."""


@dataclass(frozen=True)
class League:
    key: str
    external_id: int
    season: int
    name: str
    weekly_roundup: bool = True


LEAGUES = {
    'TOP14': League('TOP14', 16, 2022, 'Top 14'),
    'PREMIERSHIP': League('PREMIERSHIP', 13, 2022, 'Premiership Rugby'),
    'URC': League('URC', 76, 2022, 'United Rugby Championship'),
    'SUPER_RUGBY': League('SUPER_RUGBY', 71, 2022, 'Super Rugby'),
    'SIX_NATIONS': League('SIX_NATIONS', 51, 2022, 'Six Nations'),
    'RUGBY_CHAMPIONSHIP': League('RUGBY_CHAMPIONSHIP', 85, 2022, 'Rugby Championship'),
    # Standings only - no weekly round-ups
    'RUGBY_WORLD_CUP': League('RUGBY_WORLD_CUP', 69, 2022, 'Rugby World Cup', weekly_roundup=False),
    'CHAMPIONS_CUP': League('CHAMPIONS_CUP', 54, 2022, 'Champions Cup'),
    'CN_HONRA_PORTUGAL': League('CN_HONRA_PORTUGAL', 31, 2022, 'CN Honra Portugal'),
}


def get_league(key: str) -> Optional[League]:
    """Look up a league by registry key. Returns None when unknown."""
    return LEAGUES.get(key)


def all_leagues() -> List[League]:
    """All registered leagues, in registry order."""
    return list(LEAGUES.values())


def roundup_leagues() -> List[League]:
    """Leagues covered by the weekly round-up trigger."""
    return [league for league in LEAGUES.values() if league.weekly_roundup]


def resolve_league_id(key_or_id: Union[str, int, None]) -> int:
    """
    Resolve a registry key or a raw provider ID to a provider league ID.

    Accepts 'TOP14', 16 or '16'.

    Args:
        key_or_id: Registry key, or a positive numeric league ID

    Returns:
        Provider league ID

    Raises:
        UnknownLeagueError: If neither a key nor a positive number was given
    """
    if isinstance(key_or_id, str):
        league = LEAGUES.get(key_or_id.strip())
        if league:
            return league.external_id
        candidate = key_or_id.strip()
        if candidate.isdigit() and int(candidate) > 0:
            return int(candidate)
    elif isinstance(key_or_id, int) and not isinstance(key_or_id, bool) and key_or_id > 0:
        return key_or_id

    raise UnknownLeagueError(f"Unknown league key or id: {key_or_id}")
