from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

from dotenv import load_dotenv

DEFAULT_CREATE_PATH = "/api/panel-create-usercontrol-new"
DEFAULT_FETCH_PATH = "/api/panel-fetch-usercontrol-new"

_Number = TypeVar("_Number", int, float)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    """Where the page-control endpoints live and how to reach them."""

    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    max_connections: int = 10
    verify_ssl: bool = True
    create_path: str = DEFAULT_CREATE_PATH
    fetch_path: str = DEFAULT_FETCH_PATH
    access_token: str | None = None


def _read(name: str) -> str | None:
    return (os.getenv(name) or "").strip() or None


def _read_positive(name: str, default: _Number, cast: Callable[[str], _Number]) -> _Number:
    raw = _read(name)
    if raw is None:
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"Invalid {name}: expected > 0, got {value}")
    return value


def _read_path(name: str, default: str) -> str:
    return "/" + (_read(name) or default).lstrip("/")


def load_config(env_file: str | None = None) -> ClientConfig:
    """Read ``PAGE_CONTROL_*`` settings; ``env_file`` only fills variables that are unset."""
    load_dotenv(env_file)

    api_base_url = _read("PAGE_CONTROL_API_BASE_URL")
    if api_base_url is None:
        raise ConfigError("Missing required config value: PAGE_CONTROL_API_BASE_URL")

    verify = _read("PAGE_CONTROL_VERIFY_SSL")
    return ClientConfig(
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=_read_positive("PAGE_CONTROL_CONNECT_TIMEOUT_SECONDS", 5.0, float),
        read_timeout_seconds=_read_positive("PAGE_CONTROL_READ_TIMEOUT_SECONDS", 15.0, float),
        max_connections=_read_positive("PAGE_CONTROL_MAX_CONNECTIONS", 10, int),
        verify_ssl=verify is None or verify.lower() in {"1", "true", "yes", "on"},
        create_path=_read_path("PAGE_CONTROL_CREATE_PATH", DEFAULT_CREATE_PATH),
        fetch_path=_read_path("PAGE_CONTROL_FETCH_PATH", DEFAULT_FETCH_PATH),
        access_token=_read("PAGE_CONTROL_ACCESS_TOKEN"),
    )
