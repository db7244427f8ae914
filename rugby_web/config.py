"""Flask Configuration Classes"""
import os

from rugby_etl.config import ARTICLES_CONFIG, STANDINGS_CONFIG


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration - shared across all environments"""
    # Secret key
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-prod'

    # Article storage - reuse ETL settings
    ARTICLES_PATH = ARTICLES_CONFIG['path']

    # Standings
    DEFAULT_SEASON = STANDINGS_CONFIG['default_season']
    STANDINGS_SNAPSHOT_DIR = STANDINGS_CONFIG['snapshot_dir']
    STANDINGS_SNAPSHOT_FILES = STANDINGS_CONFIG['snapshot_files']

    # Caching (standings responses)
    CACHE_TYPE = 'SimpleCache'  # Override in production
    CACHE_DEFAULT_TIMEOUT = 3600

    # Open API for the browser frontend
    CORS_ORIGIN = os.environ.get('CORS_ORIGIN', '*')

    # Server
    PORT = int(os.environ.get('PORT', 4000))

    # Weekly round-up / vlog triggers run inside the web process
    SCHEDULER_ENABLED = _env_flag('SCHEDULER_ENABLED', True)

    # Debug Mode
    DEBUG = False


class DevelopmentConfig(Config):
    """Development specific configuration"""
    DEBUG = True
    TEMPLATES_AUTO_RELOAD = True
    CACHE_DEFAULT_TIMEOUT = 300  # 5 minutes default


class ProductionConfig(Config):
    """Production specific configuration - Redis when REDIS_URL is set"""
    DEBUG = False

    CACHE_TYPE = 'RedisCache' if os.environ.get('REDIS_URL') else 'SimpleCache'
    CACHE_REDIS_URL = os.environ.get('REDIS_URL')
    CACHE_DEFAULT_TIMEOUT = 600  # 10 minutes default for production
    CACHE_KEY_PREFIX = 'rugby_blog:'


class TestingConfig(Config):
    """Testing specific configuration"""
    TESTING = True
    CACHE_TYPE = 'NullCache'
    SCHEDULER_ENABLED = False


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
