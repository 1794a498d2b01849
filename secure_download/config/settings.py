"""
Settings

Loads the token broker and Redis connection configuration from
environment variables.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

import redis

from ..domain.transactions.value_objects import BrokerSettings, InvalidBrokerSettingsError

DEFAULT_CACHE_PREFIX = "secure_download_bundle"
DEFAULT_TTL_SECONDS = 300
DEFAULT_HASH_SALT = "screamzSecureDownloader"

DEFAULT_REDIS_HOST = "localhost"
DEFAULT_REDIS_PORT = 6379
DEFAULT_REDIS_MAX_CONNECTIONS = 20


class ConfigurationError(Exception):
    """Raised when environment configuration is invalid."""
    pass


def load_broker_settings(environ: Optional[Mapping[str, str]] = None) -> BrokerSettings:
    """
    Build BrokerSettings from environment variables.

    Variables:
        SECURE_DOWNLOAD_CACHE_PREFIX: cache key namespace
        SECURE_DOWNLOAD_DEFAULT_TTL: default token lifetime in seconds
        SECURE_DOWNLOAD_HASH_SALT: salt mixed into token derivation

    Args:
        environ: Mapping to read from, defaults to os.environ

    Returns:
        Validated BrokerSettings

    Raises:
        ConfigurationError: If a value is missing or invalid
    """
    if environ is None:
        environ = os.environ

    ttl = _read_int(environ, "SECURE_DOWNLOAD_DEFAULT_TTL", DEFAULT_TTL_SECONDS)

    try:
        return BrokerSettings(
            cache_prefix=environ.get("SECURE_DOWNLOAD_CACHE_PREFIX", DEFAULT_CACHE_PREFIX),
            default_ttl_seconds=ttl,
            hash_salt=environ.get("SECURE_DOWNLOAD_HASH_SALT", DEFAULT_HASH_SALT),
        )
    except InvalidBrokerSettingsError as e:
        raise ConfigurationError(str(e)) from e


@dataclass(frozen=True)
class RedisSettings:
    """Connection settings for the Redis transaction store."""

    host: str = DEFAULT_REDIS_HOST
    port: int = DEFAULT_REDIS_PORT
    db: int = 0
    password: Optional[str] = None
    max_connections: int = DEFAULT_REDIS_MAX_CONNECTIONS


def _read_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name, str(default))
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def load_redis_settings(environ: Optional[Mapping[str, str]] = None) -> RedisSettings:
    """
    Build RedisSettings from environment variables.

    REDIS_URL (redis://[:password@]host:port/db) takes precedence over
    REDIS_HOST, REDIS_PORT, REDIS_DB and REDIS_PASSWORD for the values it
    carries. REDIS_MAX_CONNECTIONS sizes the connection pool.

    Raises:
        ConfigurationError: If a value is not a valid integer or URL
    """
    if environ is None:
        environ = os.environ

    params = {
        "host": environ.get("REDIS_HOST", DEFAULT_REDIS_HOST),
        "port": _read_int(environ, "REDIS_PORT", DEFAULT_REDIS_PORT),
        "db": _read_int(environ, "REDIS_DB", 0),
        "password": environ.get("REDIS_PASSWORD"),
    }

    url = environ.get("REDIS_URL")
    if url:
        try:
            connection_params = redis.connection.parse_url(url)
        except ValueError as e:
            raise ConfigurationError(f"REDIS_URL is invalid: {e}") from e
        for name in params:
            if connection_params.get(name) is not None:
                params[name] = connection_params[name]

    max_connections = _read_int(environ, "REDIS_MAX_CONNECTIONS", DEFAULT_REDIS_MAX_CONNECTIONS)
    if max_connections <= 0:
        raise ConfigurationError(f"REDIS_MAX_CONNECTIONS must be positive, got {max_connections}")

    return RedisSettings(max_connections=max_connections, **params)
