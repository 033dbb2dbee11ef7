"""Client configuration.

Explicit values win; the API endpoint and the key pair fall back to
environment variables. Never exposes the key secret in repr.
"""

from __future__ import annotations

import os
import random
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

import httpx

from honeycombio.errors import ConfigError
from honeycombio.v2.utils import Backoff, CheckRetry, default_backoff
from honeycombio.v2.utils import check_retry as default_check_retry

DEFAULT_API_HOST = "https://api.honeycomb.io"
DEFAULT_API_ENDPOINT_ENV = "HONEYCOMB_API_ENDPOINT"
DEFAULT_API_KEY_ID_ENV = "HONEYCOMB_KEY_ID"
DEFAULT_API_KEY_SECRET_ENV = "HONEYCOMB_KEY_SECRET"

DEFAULT_USER_AGENT = "go-honeycomb"


@dataclass(frozen=True)
class Config:
    """Immutable client configuration."""

    # ── Credentials ────────────────────────────────────────────────
    api_key_id: str = ""
    api_key_secret: str = ""

    # ── Transport ──────────────────────────────────────────────────
    base_url: str = ""
    user_agent: str = ""
    http_client: Optional[httpx.Client] = None
    timeout: float = 60.0
    debug: bool = False

    # ── Retries ────────────────────────────────────────────────────
    retry_max: int = 15
    retry_wait_min: float = 0.2
    retry_wait_max: float = 10.0
    check_retry: CheckRetry = default_check_retry
    backoff: Backoff = default_backoff
    rng: random.Random = field(default_factory=random.Random)

    # skip the auth-info call; facades stay unbound
    skip_initialization: bool = False

    def __repr__(self) -> str:
        return (
            f"Config(api_key_id={self.api_key_id!r}, "
            f"api_key_secret={'***' if self.api_key_secret else ''!r}, "
            f"base_url={self.base_url!r}, user_agent={self.user_agent!r}, "
            f"debug={self.debug}, retry_max={self.retry_max}, "
            f"retry_wait_min={self.retry_wait_min}, retry_wait_max={self.retry_wait_max})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe dict with the key secret masked."""
        return {
            "api_key_id": self.api_key_id,
            "api_key_secret": "***" if self.api_key_secret else "",
            "base_url": self.base_url,
            "user_agent": self.user_agent,
            "timeout": self.timeout,
            "debug": self.debug,
            "retry_max": self.retry_max,
            "retry_wait_min": self.retry_wait_min,
            "retry_wait_max": self.retry_wait_max,
        }


def _validate_base_url(base_url: str) -> None:
    try:
        parts = urlsplit(base_url)
    except ValueError as exc:
        raise ConfigError(f"invalid BaseURL: {exc}") from exc
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigError(f"invalid BaseURL: {base_url!r}")


def resolve_config(config: Optional[Config] = None) -> Config:
    """Fill in defaults and environment fallbacks, then validate.

    Raises ConfigError for an unusable base URL or a missing half of the
    key pair. Makes no network calls.
    """
    config = config or Config()
    changes: Dict[str, Any] = {}

    base_url = config.base_url or os.environ.get(DEFAULT_API_ENDPOINT_ENV) or DEFAULT_API_HOST
    _validate_base_url(base_url)
    changes["base_url"] = base_url

    if not config.user_agent:
        changes["user_agent"] = DEFAULT_USER_AGENT

    key_id, key_secret = config.api_key_id, config.api_key_secret
    if not key_id and not key_secret:
        key_id = os.environ.get(DEFAULT_API_KEY_ID_ENV, "")
        key_secret = os.environ.get(DEFAULT_API_KEY_SECRET_ENV, "")
    if not key_id or not key_secret:
        raise ConfigError("missing API Key ID and Secret pair")
    changes["api_key_id"] = key_id
    changes["api_key_secret"] = key_secret

    if config.retry_max < 0:
        raise ConfigError("retry_max must be >= 0")
    if config.retry_wait_min < 0 or config.retry_wait_max < config.retry_wait_min:
        raise ConfigError("retry waits must satisfy 0 <= retry_wait_min <= retry_wait_max")

    return replace(config, **changes)


def load_config(**overrides: Any) -> Config:
    """Build a resolved Config from keyword overrides plus the environment."""
    return resolve_config(Config(**overrides))
