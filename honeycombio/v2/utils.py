"""Retry policy: which outcomes to retry and how long to wait between them."""

from __future__ import annotations

import random
from typing import Callable, Optional, Tuple

import httpx

from honeycombio.context import Context
from honeycombio.v2.limits import rate_limit_backoff

# Status codes that warrant a retry
RETRYABLE_STATUS_CODES = frozenset({429, 502, 504})

# Window for linear backoff when not rate limited
LINEAR_WAIT_MIN = 0.5
LINEAR_WAIT_MAX = 0.95

CheckRetry = Callable[
    [Context, Optional[httpx.Response], Optional[Exception]],
    Tuple[bool, Optional[Exception]],
]
Backoff = Callable[
    [float, float, int, Optional[httpx.Response], Callable[[], float]],
    float,
]


def check_retry(
    ctx: Context,
    resp: Optional[httpx.Response],
    err: Optional[Exception],
) -> Tuple[bool, Optional[Exception]]:
    """Decide whether an attempt should be retried.

    Returns ``(retry, error)``; a non-None error with ``retry=False`` ends
    the request with that error.
    """
    ctx_err = ctx.err()
    if ctx_err is not None:
        return False, ctx_err
    if err is not None:
        return isinstance(err, httpx.TransportError), err
    if resp is not None and resp.status_code in RETRYABLE_STATUS_CODES:
        return True, None
    return False, None


def linear_jitter_backoff(
    min_wait: float,
    max_wait: float,
    attempt: int,
    rand: Callable[[], float] = random.random,
) -> float:
    """Wait ``(attempt + 1)`` times a jittered value in ``[min_wait, max_wait)``."""
    multiplier = attempt + 1
    if max_wait <= min_wait:
        return min_wait * multiplier
    return (min_wait + rand() * (max_wait - min_wait)) * multiplier


def default_backoff(
    min_wait: float,
    max_wait: float,
    attempt: int,
    resp: Optional[httpx.Response],
    rand: Callable[[], float] = random.random,
) -> float:
    """Rate-limit aware backoff for 429s, linear jitter for everything else."""
    if resp is not None and resp.status_code == 429:
        return rate_limit_backoff(min_wait, max_wait, resp, rand)
    return linear_jitter_backoff(LINEAR_WAIT_MIN, LINEAR_WAIT_MAX, attempt, rand)
