from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .exceptions import ConfigError

DEFAULT_REDIRECT_URL = "http://localhost:5173"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - DATABASE_URL: SQLAlchemy database URL, e.g. 'sqlite:///./todos.db' (required)
    - REDIRECT_URL: where create/update/delete redirect to. Default 'http://localhost:5173'
    - HOST: bind address for the HTTP server. Default '0.0.0.0'
    - PORT: bind port for the HTTP server. Default 8000
    - LOG_LEVEL: root log level name. Default 'INFO'
    """

    database_url: str
    redirect_url: str = DEFAULT_REDIRECT_URL
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_port(value: str) -> int:
    try:
        port = int(value.strip())
    except ValueError as e:
        raise ConfigError(f"PORT must be an integer, got {value!r}") from e
    if not (1 <= port <= 65535):
        raise ConfigError(f"PORT must be between 1 and 65535, got {port}")
    return port


def _parse_log_level(value: str) -> str:
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
    return level


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """
    Return application settings loaded from the environment.

    A .env file in the working directory is read first; variables already set
    in the environment take precedence over it.

    Raises:
        ConfigError: if DATABASE_URL is missing or another value is invalid.
    """
    load_dotenv()

    database_url = os.getenv("DATABASE_URL", "").strip()
    if not database_url:
        raise ConfigError("DATABASE_URL must be set")

    host = os.getenv("HOST", "0.0.0.0").strip()
    if not host:
        raise ConfigError("HOST must not be empty")

    return Settings(
        database_url=database_url,
        redirect_url=_get_env("REDIRECT_URL", DEFAULT_REDIRECT_URL).strip(),
        host=host,
        port=_parse_port(_get_env("PORT", "8000")),
        log_level=_parse_log_level(_get_env("LOG_LEVEL", "INFO")),
    )
