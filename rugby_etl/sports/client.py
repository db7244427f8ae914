"""
API-Sports Rugby Client

Raw HTTP access to the API-Sports rugby endpoints (/games, /standings).
No data transformation - just fetch and return the JSON envelope.
Requests are not retried; failures raise requests exceptions to the caller.
"""

from typing import Dict, Optional

import requests
from loguru import logger


class RugbyApiClient:
    """Client for the API-Sports rugby API."""

    def __init__(
        self,
        base_url: str = 'https://v1.rugby.api-sports.io',
        api_key: str = '',
        timeout: int = 30,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize rugby API client.

        Args:
            base_url: API endpoint (default: https://v1.rugby.api-sports.io)
            api_key: API-Sports key sent as the x-apisports-key header
            timeout: Request timeout in seconds (default: 30)
            session: Optional requests session (shared connection pool)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'x-apisports-key': api_key})

        if not api_key:
            logger.warning("API_RUGBY_KEY not defined. Rugby API requests will fail.")

        logger.info(f"Initialized RugbyApiClient: {self.base_url}")

    def _get(self, path: str, params: Dict) -> Dict:
        endpoint = f"{self.base_url}{path}"
        logger.debug(f"GET {path} {params}")

        try:
            response = self.session.get(endpoint, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.Timeout:
            logger.error(f"Request to {path} timed out after {self.timeout}s")
            raise
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {path} failed: {e}")
            raise

    def get_games(self, league_id: int, season: int) -> Dict:
        """
        Fetch every game of a league season.

        Date filters are deliberately not sent: the free plan rejects them,
        so the full season is fetched and filtered locally.
        """
        return self._get('/games', {'league': league_id, 'season': season})

    def get_standings(self, league_id: int, season: int) -> Dict:
        """Fetch the standings envelope for a league season."""
        return self._get('/standings', {'league': league_id, 'season': season})


def create_client(config: Dict) -> RugbyApiClient:
    """Build a client from a RUGBY_API_CONFIG-style dict."""
    return RugbyApiClient(
        base_url=config['base_url'],
        api_key=config.get('api_key', ''),
        timeout=config.get('timeout', 30)
    )
