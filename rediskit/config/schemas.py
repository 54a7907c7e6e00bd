"""
rediskit - Configuration Schemas

Typed configuration models using Pydantic for validation and type safety.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Environment(str, Enum):
    """Runtime environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class StoreBackend(str, Enum):
    """Supported store backends."""

    MEMORY = "memory"
    REDIS = "redis"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StoreConfig(BaseModel):
    """Backing store connection configuration."""

    backend: StoreBackend = Field(default=StoreBackend.MEMORY, description="Store backend to use")

    # Either a URL or host/port; the URL wins when both are given
    redis_url: str | None = Field(default=None, description="Redis connection URL")
    host: str | None = Field(default=None, description="Redis server host")
    port: int = Field(default=6379, ge=1, le=65535, description="Redis server port")
    db: int = Field(default=0, ge=0, description="Redis logical database")
    username: str | None = Field(default=None, description="Redis ACL username")
    password: str | None = Field(default=None, description="Redis password")

    max_connections: int = Field(default=10, ge=1, description="Redis connection pool size")
    socket_timeout: float = Field(default=5.0, gt=0, description="Redis socket timeout in seconds")
    socket_connect_timeout: float = Field(default=5.0, gt=0, description="Redis connect timeout in seconds")
    health_check_interval: int = Field(default=0, ge=0, description="Seconds between connection health checks")
    decode_responses: bool = Field(default=True, description="Return str instead of bytes")

    @model_validator(mode="after")
    def validate_redis_target(self) -> "StoreConfig":
        """Ensure a redis target is provided when backend is redis."""
        if self.backend == StoreBackend.REDIS and not (self.redis_url or self.host):
            raise ValueError("redis_url or host is required when store backend is 'redis'")
        return self

    def connection_kwargs(self) -> dict[str, Any]:
        """Keyword arguments shared by Redis.from_url() and Redis()."""
        return {
            "username": self.username,
            "password": self.password,
            "max_connections": self.max_connections,
            "socket_timeout": self.socket_timeout,
            "socket_connect_timeout": self.socket_connect_timeout,
            "health_check_interval": self.health_check_interval,
            "decode_responses": self.decode_responses,
        }

    def describe(self) -> dict[str, Any]:
        """Loggable view of the configuration (credentials masked)."""
        data = self.model_dump(mode="json")
        if data.get("password"):
            data["password"] = "***"
        return data


class RedisKitConfig(BaseModel):
    """Root configuration for rediskit."""

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Runtime environment")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

    store: StoreConfig = Field(default_factory=StoreConfig)

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)
