"""Flask application factory"""
import sys

from flask import Flask
from loguru import logger


def create_app(config_name='development', services=None):
    """Application factory for creating Flask app instances

    Args:
        config_name: Key into rugby_web.config.config
        services: Optional BlogServices (tests inject fakes here)
    """
    app = Flask(__name__)

    # Load configuration
    from .config import config
    app.config.from_object(config[config_name])

    # Configure logging
    configure_logging(app.config['DEBUG'], log_to_file=not app.config.get('TESTING'))

    # Initialize extensions
    from .extensions import cache, SERVICES_KEY
    cache.init_app(app)
    app.extensions[SERVICES_KEY] = services or build_services(app.config)

    # Register blueprints
    from .routes import main, articles, standings, dashboard
    app.register_blueprint(main.bp)
    app.register_blueprint(articles.bp, url_prefix='/articles')
    app.register_blueprint(standings.bp, url_prefix='/standings')
    app.register_blueprint(dashboard.bp, url_prefix='/blog')

    # Register template filters
    from .utils.formatters import register_filters
    register_filters(app)

    # Register context processors
    from .context_processors import inject_blog_context
    app.context_processor(inject_blog_context)

    @app.after_request
    def add_cors_headers(response):
        response.headers['Access-Control-Allow-Origin'] = app.config['CORS_ORIGIN']
        response.headers['Access-Control-Allow-Headers'] = 'Content-Type'
        response.headers['Access-Control-Allow-Methods'] = 'GET, OPTIONS'
        return response

    logger.info(f"Flask app created with config: {config_name}")

    return app


def build_services(app_config):
    """Build the store, provider client and games cache from config"""
    from rugby_etl.config import RUGBY_API_CONFIG
    from rugby_etl.newspaper.article_store import ArticleStore
    from rugby_etl.sports.client import create_client
    from rugby_etl.sports.games import GamesCache
    from .extensions import BlogServices

    sports_client = create_client(RUGBY_API_CONFIG)
    return BlogServices(
        store=ArticleStore(app_config['ARTICLES_PATH']),
        sports_client=sports_client,
        games_cache=GamesCache(sports_client),
    )


def attach_scheduler(app):
    """Create the weekly triggers against the app's shared store and cache

    Returns:
        ArticleScheduler (not started)
    """
    from rugby_etl.newspaper.pipeline import create_pipeline
    from rugby_etl.scheduler import ArticleScheduler
    from .extensions import SERVICES_KEY

    services = app.extensions[SERVICES_KEY]
    pipeline = create_pipeline(
        store=services.store,
        sports_client=services.sports_client,
        games_cache=services.games_cache,
    )
    services.scheduler = ArticleScheduler.from_config(pipeline)
    return services.scheduler


def configure_logging(debug=False, log_to_file=True):
    """Configure loguru for the web application"""
    # Remove default handler
    logger.remove()

    # Console handler (always)
    logger.add(
        sys.stderr,
        level="DEBUG" if debug else "INFO",
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
    )

    # File handler (production)
    if log_to_file and not debug:
        logger.add(
            "logs/rugby_web_{time:YYYY-MM-DD}.log",
            rotation="00:00",  # New file at midnight
            retention="30 days",
            level="INFO",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"
        )

    logger.info("Logging configured")
