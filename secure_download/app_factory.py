"""
Application Factory

Creates and configures Flask application with all dependencies.
This factory pattern improves testability by allowing dependency injection
and configuration overrides.
"""

import logging
import os
from typing import Optional, Tuple

from flask import Flask
from flask_cors import CORS

from .api.v1 import API_VERSION, create_api_blueprint
from .application.delivery_service import DeliveryService
from .config.settings import load_broker_settings, load_redis_settings
from .domain.transactions.services import TokenBroker
from .infrastructure.redis_repository import RedisConnectionManager, RedisRepository
from .infrastructure.redis_transaction_repository import RedisTransactionRepository

logger = logging.getLogger(__name__)


class AppConfig:
    """Application configuration."""

    def __init__(self):
        self.flask_env = os.getenv("FLASK_ENV", "development")
        self.is_production = self.flask_env == "production"
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.cors_origins = os.getenv("CORS_ORIGINS", "*")


def create_app(config: Optional[AppConfig] = None, token_broker: Optional[TokenBroker] = None) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Application configuration, uses default if None
        token_broker: Broker to use instead of the Redis-backed one

    Returns:
        Configured Flask application
    """
    if config is None:
        config = AppConfig()

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__)

    CORS(
        app,
        resources={
            r"/api/*": {
                "origins": config.cors_origins,
                "methods": ["GET", "POST", "DELETE", "OPTIONS"],
                "allow_headers": ["Content-Type", "X-Access-Key"],
                "expose_headers": ["Content-Type", "Content-Disposition"],
                "max_age": 3600,
            }
        },
    )

    # Health reports disconnected when an injected broker has no Redis behind it
    app.redis_manager = None
    if token_broker is None:
        token_broker, app.redis_manager = _create_token_broker()

    # Attach services directly to app for access in API routes
    app.token_broker = token_broker
    app.delivery_service = DeliveryService(token_broker)

    app.register_blueprint(create_api_blueprint())
    logger.info(
        f"API {API_VERSION} registered at /api/{API_VERSION} "
        f"with Swagger UI at /api/{API_VERSION}/docs"
    )

    _register_health_endpoint(app)

    return app


def _create_token_broker() -> Tuple[TokenBroker, RedisConnectionManager]:
    """
    Build the Redis-backed token broker from environment settings.

    Returns:
        The broker and the connection manager its store uses

    Raises:
        ConfigurationError: If broker or Redis settings are invalid
    """
    settings = load_broker_settings()
    redis_settings = load_redis_settings()
    manager = RedisConnectionManager(
        host=redis_settings.host,
        port=redis_settings.port,
        db=redis_settings.db,
        password=redis_settings.password,
        max_connections=redis_settings.max_connections,
    )
    logger.info(f"Redis pool configured for {redis_settings.host}:{redis_settings.port}/{redis_settings.db}")

    repository = RedisTransactionRepository(RedisRepository(manager.client, settings.cache_prefix))
    return TokenBroker(repository, settings), manager


def _register_health_endpoint(app: Flask) -> None:
    """Register the health check endpoint."""

    @app.route("/health")
    def health():
        manager = app.redis_manager
        if manager is not None and manager.health_check():
            return {"status": "ok", "redis": "connected"}, 200
        return {"status": "degraded", "redis": "disconnected"}, 503
