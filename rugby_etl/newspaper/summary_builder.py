"""
Summary Builder Module

Renders the data block handed to the LLM for a weekly round-up: the games
of the simulated week and the top of the standings table.

Output shape:
    League: Top 14 (TOP14)
    Historic season: 2022
    Week simulated around the current calendar date, but using historical data.

    Results in this simulated week:
    - 2022-10-15: Toulouse 27 - 20 Racing 92 (FT)

    Standings (top 6) for this historic season (likely final table):
    1. Toulouse - 50 pts (P:20, W:15, L:5)
"""

from typing import Any, List, Sequence

from rugby_etl.sports.games import Game
from rugby_etl.sports.standings import StandingsRow

STANDINGS_LIMIT = 6
NO_STANDINGS_LINE = "Standings data not available for this league."
CLOSING_INSTRUCTION = (
    "Use this data to write a weekly round-up for this league, as if it was happening "
    "this week, but clearly based on the historic season."
)


def _value(value: Any) -> str:
    return '?' if value is None else str(value)


def format_game_line(game: Game) -> str:
    """
    Format one result line.

    Example: "- 2022-10-15: Toulouse 27 - 20 Racing 92 (FT)"
    """
    short_date = game.date[:10] if game.date else "Unknown date"
    home = game.home or "Home Team"
    away = game.away or "Away Team"
    status = game.status or "FT/Played"

    return f"- {short_date}: {home} {_value(game.home_score)} - {_value(game.away_score)} {away} ({status})"


def format_standings_line(row: StandingsRow) -> str:
    """
    Format one standings line.

    Example: "1. Toulouse - 50 pts (P:20, W:15, L:5)"
    """
    return (
        f"{_value(row.position)}. {row.team} - {_value(row.points)} pts "
        f"(P:{_value(row.played)}, W:{_value(row.wins)}, L:{_value(row.losses)})"
    )


def _sort_key(game: Game):
    return (game.game_date is None, game.game_date, game.date or '')


def build_summary(
    league_key: str,
    league_name: str,
    season: int,
    games: Sequence[Game],
    standings: Sequence[StandingsRow]
) -> str:
    """
    Build the round-up prompt data for one league.

    Args:
        league_key: Registry key (e.g. 'TOP14')
        league_name: Display name (from the games payload or the registry)
        season: Historical season year
        games: Games in the simulated week
        standings: Standings rows (only the first 6 are used)

    Returns:
        Multi-line summary text
    """
    lines: List[str] = [
        f"League: {league_name} ({league_key})",
        f"Historic season: {season}",
        "Week simulated around the current calendar date, but using historical data.",
        "",
        "Results in this simulated week:",
    ]

    for game in sorted(games, key=_sort_key):
        lines.append(format_game_line(game))

    lines.append("")
    if standings:
        lines.append("Standings (top 6) for this historic season (likely final table):")
        for row in list(standings)[:STANDINGS_LIMIT]:
            lines.append(format_standings_line(row))
    else:
        lines.append(NO_STANDINGS_LINE)

    lines.append("")
    lines.append(CLOSING_INSTRUCTION)

    return "\n".join(lines) + "\n"
