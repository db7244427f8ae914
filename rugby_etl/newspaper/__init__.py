"""
Newspaper Article Generation Module

This module handles automated generation of blog articles from historical
rugby data using LLM integration.

Modules:
    summary_builder: Renders games and standings into prompt text
    llm_client: API client for the chat completions provider
    article_generator: Prompts, generation and title/body parsing
    article_store: Flat JSON file persistence for articles
    pipeline: Orchestrates the round-up and vlog workflows
"""

__version__ = "1.0.0"
