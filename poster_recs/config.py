"""Configuration dataclasses for the poster recommender."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping


class ConfigError(ValueError):
    """Raised when a configuration value is missing or out of range."""


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection settings for the movie catalog database."""

    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = ""
    database: str = "image_rec"
    connect_timeout: int = 10

    def __post_init__(self) -> None:
        for name in ("host", "user", "database"):
            if not str(getattr(self, name) or "").strip():
                raise ConfigError(f"Database {name} must not be empty")
        if not 1 <= int(self.port) <= 65535:
            raise ConfigError(f"Database port out of range: {self.port}")
        if self.connect_timeout <= 0:
            raise ConfigError("Database connect timeout must be positive")

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, **overrides: Any
    ) -> DatabaseConfig:
        """Build a config from ``POSTGRES_*`` variables, then apply *overrides*.

        Overrides that are ``None`` are ignored so unset CLI flags fall through
        to the environment.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for field_name, key in (
            ("host", "POSTGRES_HOST"),
            ("user", "POSTGRES_USER"),
            ("password", "POSTGRES_PASSWORD"),
            ("database", "POSTGRES_DB"),
        ):
            if env.get(key):
                values[field_name] = env[key]
        raw_port = env.get("POSTGRES_PORT")
        if raw_port:
            try:
                values["port"] = int(raw_port)
            except ValueError as exc:
                raise ConfigError(f"POSTGRES_PORT is not an integer: {raw_port!r}") from exc
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

    def connect_kwargs(self) -> dict[str, Any]:
        """Return keyword arguments for :func:`psycopg2.connect`."""
        return {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "dbname": self.database,
            "connect_timeout": self.connect_timeout,
        }


@dataclass(frozen=True)
class FetchConfig:
    """Settings for concurrent poster downloads."""

    timeout: float = 10.0  # seconds, per request
    max_workers: int = 16
    show_progress: bool = True

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ConfigError("Fetch timeout must be positive")
        if self.max_workers < 1:
            raise ConfigError("At least one fetch worker is required")
