"""Client configuration for pyquotes."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyquotes._constants import BASE_URL, POSTS_ENDPOINT
from pyquotes.exceptions import QuoteConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(name: str, value: str, kind: type[int] | type[float]) -> int | float:
    try:
        return kind(value)
    except ValueError as exc:
        raise QuoteConfigError(f"{name} must be a {kind.__name__}, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class QuoteConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Base URL of the remote mock REST service.
    posts_endpoint : str
        Path of the collection endpoint used for both reads and writes.
    fetch_limit : int
        Maximum number of remote items requested per sync cycle.
    user_id : int
        ``userId`` sent with every posted quote.
    sync_interval : float
        Seconds between two scheduled sync cycles.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    auto_sync : bool
        Start the periodic sync task when the client is entered.
    post_new_quotes : bool
        Send newly added quotes to the remote endpoint (best effort).
    seed_defaults : bool
        Seed the built-in quotes when no valid collection is persisted.
    storage_path : str or None
        Path of the JSON file used as durable blob store.  ``None`` keeps
        everything in memory.
    """

    base_url: str = BASE_URL
    posts_endpoint: str = POSTS_ENDPOINT
    fetch_limit: int = 10
    user_id: int = 1
    sync_interval: float = 30.0
    request_timeout: float = 10.0
    auto_sync: bool = True
    post_new_quotes: bool = True
    seed_defaults: bool = True
    storage_path: str | None = None

    def __post_init__(self) -> None:
        if self.fetch_limit <= 0:
            raise QuoteConfigError(f"fetch_limit must be positive, got {self.fetch_limit}")
        if self.sync_interval <= 0:
            raise QuoteConfigError(f"sync_interval must be positive, got {self.sync_interval}")
        if self.request_timeout <= 0:
            raise QuoteConfigError(f"request_timeout must be positive, got {self.request_timeout}")

    @classmethod
    def from_env(cls, **overrides: Any) -> QuoteConfig:
        """Create configuration from ``QUOTES_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_STR_MAP = {
            "QUOTES_BASE_URL": "base_url",
            "QUOTES_POSTS_ENDPOINT": "posts_endpoint",
            "QUOTES_STORAGE_PATH": "storage_path",
        }
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_NUMBER_MAP: dict[str, tuple[str, type[int] | type[float]]] = {
            "QUOTES_FETCH_LIMIT": ("fetch_limit", int),
            "QUOTES_USER_ID": ("user_id", int),
            "QUOTES_SYNC_INTERVAL": ("sync_interval", float),
            "QUOTES_REQUEST_TIMEOUT": ("request_timeout", float),
        }
        for env_key, (field_name, kind) in _ENV_NUMBER_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, kind)

        _ENV_BOOL_MAP = {
            "QUOTES_AUTO_SYNC": ("auto_sync", True),
            "QUOTES_POST_NEW_QUOTES": ("post_new_quotes", True),
            "QUOTES_SEED_DEFAULTS": ("seed_defaults", True),
        }
        for env_key, (field_name, default) in _ENV_BOOL_MAP.items():
            if field_name not in overrides:
                config_kwargs[field_name] = _env_bool(env.get(env_key), default)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
