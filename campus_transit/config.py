"""Configuration loader for the campus transit portal."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any

from dotenv import load_dotenv
import yaml

BACKEND_URL_ENV = "SUPABASE_URL"
BACKEND_KEY_ENV = "SUPABASE_ANON_KEY"


@dataclass(frozen=True)
class BackendConfig:
    """Hosted backend connection settings."""

    url: str
    api_key: str
    request_timeout_seconds: float
    change_poll_interval_seconds: float


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server settings for the portal."""

    host: str
    port: int
    default_semester: str


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str
    log_dir: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    backend: BackendConfig
    server: ServerConfig
    log: LoggingConfig


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _require_env(name: str) -> str:
    value = os.environ.get(name, "").strip()
    if not value:
        raise ValueError(f"{name} missing in environment")
    return value


def load_config(path: str = "config/config.yaml") -> AppConfig:
    """Load application configuration from a YAML file and the environment.

    The backend endpoint and access key come from the environment (or a
    ``.env`` file); both are required.
    """
    load_dotenv()
    url = _require_env(BACKEND_URL_ENV)
    api_key = _require_env(BACKEND_KEY_ENV)
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    backend_section = _require_key(data, "backend", "backend")
    server_section = _require_key(data, "server", "server")
    logging_section = _require_key(data, "logging", "logging")

    if not isinstance(backend_section, dict):
        raise ValueError("'backend' config must be a mapping")
    if not isinstance(server_section, dict):
        raise ValueError("'server' config must be a mapping")
    if not isinstance(logging_section, dict):
        raise ValueError("'logging' config must be a mapping")

    backend = BackendConfig(
        url=url.rstrip("/"),
        api_key=api_key,
        request_timeout_seconds=_require_key(backend_section, "request_timeout_seconds", "backend"),
        change_poll_interval_seconds=_require_key(
            backend_section, "change_poll_interval_seconds", "backend"
        ),
    )

    server = ServerConfig(
        host=_require_key(server_section, "host", "server"),
        port=int(_require_key(server_section, "port", "server")),
        default_semester=str(_require_key(server_section, "default_semester", "server")),
    )

    logging = LoggingConfig(
        level=_require_key(logging_section, "level", "logging"),
        log_dir=_require_key(logging_section, "log_dir", "logging"),
    )

    return AppConfig(backend=backend, server=server, log=logging)
