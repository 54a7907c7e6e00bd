"""
rediskit - Configuration Loader

Loads and validates configuration from environment variables and .env files.
Provides a singleton configuration instance for the process.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import RedisKitConfig

logger = logging.getLogger(__name__)

_config_instance: RedisKitConfig | None = None


def _optional_int(name: str) -> int | None:
    value = os.getenv(name)
    return int(value) if value else None


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> RedisKitConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Path to .env file (default: .env in the working directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated RedisKitConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    if env_file:
        env_path = Path(env_file)
    else:
        env_path = Path.cwd() / ".env"

    if env_path.exists():
        logger.info(f"Loading environment from {env_path}")
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            logger.error(
                f"Failed to load .env file from {env_path}: {e}",
                extra={"path": str(env_path), "error": str(e)},
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    # Redis if a target is configured, else the in-memory substitute
    redis_url = os.getenv("REDIS_URL")
    redis_host = os.getenv("REDIS_HOST")
    store_backend = "redis" if (redis_url or redis_host) else "memory"

    try:
        store: dict[str, object] = {
            "backend": os.getenv("STORE_BACKEND", store_backend),
            "redis_url": redis_url,
            "host": redis_host,
            "port": int(os.getenv("REDIS_PORT", "6379")),
            "db": int(os.getenv("REDIS_DB", "0")),
            "username": os.getenv("REDIS_USERNAME"),
            "password": os.getenv("REDIS_PASSWORD"),
            "max_connections": int(os.getenv("REDIS_MAX_CONNECTIONS", "10")),
            "socket_timeout": float(os.getenv("REDIS_SOCKET_TIMEOUT", "5")),
            "socket_connect_timeout": float(os.getenv("REDIS_SOCKET_CONNECT_TIMEOUT", "5")),
        }
        health_check_interval = _optional_int("REDIS_HEALTH_CHECK_INTERVAL")
        if health_check_interval is not None:
            store["health_check_interval"] = health_check_interval
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid numeric value in store environment variables: {e}",
            details={"error": str(e)},
        ) from e

    config_dict = {
        "environment": os.getenv("ENVIRONMENT", "development"),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "store": store,
    }

    try:
        _config_instance = RedisKitConfig(**config_dict)  # type: ignore[arg-type]
        logger.info(
            f"Configuration loaded successfully (environment: {_config_instance.environment})",
            extra={"environment": _config_instance.environment, "store_backend": _config_instance.store.backend.value},
        )
        return _config_instance
    except ValidationError as e:
        logger.error(
            f"Configuration validation failed: {e}",
            extra={"validation_errors": e.errors(), "config_dict_keys": list(config_dict.keys())},
            exc_info=True,
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables and configuration.",
            details={"validation_errors": e.errors()},
        ) from e


def get_config() -> RedisKitConfig:
    """
    Get the current configuration instance, loading it on first access.

    Returns:
        Current RedisKitConfig instance
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> RedisKitConfig:
    """
    Force reload configuration.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded RedisKitConfig instance
    """
    return load_config(env_file=env_file, reload=True)
