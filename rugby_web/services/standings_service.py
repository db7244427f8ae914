"""Standings service layer for the dashboard widget and full table page.

Tables come from the on-disk snapshots, never from a live provider call,
so browsing the blog does not use API quota.
"""
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from rugby_etl.leagues import League, all_leagues
from rugby_etl.sports.standings import StandingsRow, load_snapshot_rows


def load_all_standings(
    snapshot_dir: Path,
    snapshot_files: Optional[Dict[str, str]] = None,
    leagues: Optional[Sequence[League]] = None
) -> Dict[str, List[StandingsRow]]:
    """Snapshot rows for every league, keyed by league key (empty list if missing)."""
    leagues = leagues if leagues is not None else all_leagues()
    return {
        league.key: load_snapshot_rows(league.key, snapshot_dir, snapshot_files)
        for league in leagues
    }


def find_next_available_index(
    leagues: Sequence[League],
    rows_by_league: Dict[str, List[StandingsRow]],
    from_index: int,
    direction: int
) -> int:
    """
    Step through the league carousel, skipping leagues without a table.

    Args:
        leagues: Carousel order
        rows_by_league: Standings rows per league key
        from_index: Current position
        direction: 1 for next, -1 for previous

    Returns:
        Index of the next league with rows, or from_index if none has any
    """
    count = len(leagues)
    if count == 0:
        return from_index

    index = from_index
    for _ in range(count):
        index = (index + direction) % count
        if rows_by_league.get(leagues[index].key):
            return index
    return from_index


def league_index(leagues: Sequence[League], league_key: str) -> Optional[int]:
    """Position of a league key in the carousel, or None."""
    for index, league in enumerate(leagues):
        if league.key == league_key:
            return index
    return None
