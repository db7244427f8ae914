"""Flask extensions - initialized here, attached to app in factory"""
from flask import current_app
from flask_caching import Cache

cache = Cache()

SERVICES_KEY = 'rugby_blog'


class BlogServices:
    """
    Process-wide collaborators, built once in the app factory.

    The article store and the games cache live as long as the process;
    routes and the scheduler share these instances.
    """

    def __init__(self, store, sports_client, games_cache, scheduler=None):
        self.store = store
        self.sports_client = sports_client
        self.games_cache = games_cache
        self.scheduler = scheduler


def get_services() -> BlogServices:
    """Services of the current app"""
    return current_app.extensions[SERVICES_KEY]
