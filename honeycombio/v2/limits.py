"""Rate-limit aware backoff.

``RateLimit`` is the IETF draft (draft07) header: a structured-field
dictionary with the integer keys ``limit``, ``remaining`` and ``reset``,
where ``reset`` is the number of seconds until the window resets. Other
members (policies, flags) may appear alongside them and are ignored.
``Retry-After`` is read as an RFC3339 timestamp.
"""

from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

import httpx
from http_sfv import Dictionary

HEADER_RATE_LIMIT = "RateLimit"
HEADER_RETRY_AFTER = "Retry-After"


def _int_member(members: Dictionary, key: str) -> int:
    if key not in members:
        raise ValueError(f'could not get "{key}" from header: key not found')
    value = getattr(members[key], "value", None)
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f'could not get "{key}" from header: not an integer')
    return value


def parse_rate_limit_header(value: str) -> Tuple[int, int, int]:
    """Parse ``limit=X, remaining=Y, reset=Z`` into ``(limit, remaining, reset)``.

    Raises ValueError when the header is not a structured-field dictionary,
    or when one of the three keys is missing or not an integer.
    """
    members = Dictionary()
    members.parse(value.encode("ascii"))
    return (
        _int_member(members, "limit"),
        _int_member(members, "remaining"),
        _int_member(members, "reset"),
    )


def _parse_rfc3339(value: str) -> datetime:
    value = value.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None or "T" not in value.upper():
        raise ValueError(f"not an RFC3339 timestamp: {value!r}")
    return parsed


def _reset_from_headers(resp: httpx.Response, now: Optional[datetime] = None) -> float:
    rate_limit = resp.headers.get(HEADER_RATE_LIMIT)
    if rate_limit:
        try:
            _, _, reset = parse_rate_limit_header(rate_limit)
        except ValueError:
            pass
        else:
            # only a zero reset defers to Retry-After; negative means no wait
            if reset != 0:
                return max(float(reset), 0.0)

    retry_after = resp.headers.get(HEADER_RETRY_AFTER)
    if retry_after:
        try:
            retry_at = _parse_rfc3339(retry_after)
        except ValueError:
            return 0.0
        now = now or datetime.now(timezone.utc)
        return max((retry_at - now).total_seconds(), 0.0)

    return 0.0


def rate_limit_backoff(
    min_wait: float,
    max_wait: float,
    resp: httpx.Response,
    rand: Callable[[], float] = random.random,
) -> float:
    """Seconds to wait before retrying a rate limited request.

    The reset from ``RateLimit`` (else ``Retry-After``) raises the floor
    above ``min_wait``; jitter drawn from ``rand`` spreads clients out.
    Unparseable headers are ignored.
    """
    jitter = rand() * (max_wait - min_wait)
    reset = _reset_from_headers(resp)
    return max(min_wait, reset) + jitter
