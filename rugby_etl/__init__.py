"""
Rugby ETL

Fetches historical rugby results and standings from API-Sports, turns them
into prompts, generates articles through an LLM and stores them in the
blog's flat JSON article file.

Modules:
    leagues: League registry (keys, provider IDs, seasons)
    sports: API-Sports client, games cache, standings parsing
    newspaper: Summary building, LLM client, article generation and storage
    scheduler: Weekly triggers for the round-up and vlog pipelines
"""

__version__ = "1.0.0"
