"""
Sports Data Module

Access to the API-Sports rugby provider.

Modules:
    client: Raw HTTP client for /games and /standings
    games: Season games cache and the historical "this week" window
    standings: Standings parsing, fetching and on-disk snapshots
"""
