"""Typed Python client for the Honeycomb v2 API."""

from __future__ import annotations

import json
import logging
from typing import Optional

import httpx

from honeycombio.context import Context, background
from honeycombio.errors import JSONAPI_MEDIA_TYPE, DeadlineExceeded, HoneycombError, error_from_response
from honeycombio.jsonapi import Resource, marshal_payload, unmarshal_payload
from honeycombio.v2.api_keys import APIKeys
from honeycombio.v2.config import Config, resolve_config
from honeycombio.v2.environments import Environments
from honeycombio.v2.models import AuthMetadata

logger = logging.getLogger("honeycombio.client")

AUTH_PATH = "/2/auth"


class Client:
    """Synchronous client for the Honeycomb v2 API.

    Usage::

        from honeycombio.v2 import Client, Config

        c = Client(Config(api_key_id="...", api_key_secret="..."))
        env = c.environments.get("hcaen_123")
        pager = c.api_keys.list(page_size=50)
        while pager.has_next():
            for key in pager.next():
                print(key.name)

    Construction resolves the configuration and calls ``/2/auth`` once to
    learn the acting team; either step failing raises and no client is
    produced.
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        config = resolve_config(config)
        self._config = config
        self.base_url = httpx.URL(config.base_url)
        self.user_agent = config.user_agent
        self.headers = httpx.Headers(
            {
                "Authorization": f"Bearer {config.api_key_id}:{config.api_key_secret}",
                "Content-Type": JSONAPI_MEDIA_TYPE,
                "User-Agent": config.user_agent,
            }
        )

        self._owns_http = config.http_client is None
        self._http = config.http_client or httpx.Client(timeout=config.timeout)

        self.auth_info_metadata: Optional[AuthMetadata] = None
        self.api_keys: Optional[APIKeys] = None
        self.environments: Optional[Environments] = None

        if config.skip_initialization:
            return

        try:
            authinfo = self.auth_info()
            if authinfo.team is None or not authinfo.team.slug:
                raise HoneycombError("auth info has no team; cannot scope team resources")
        except Exception:
            self.close()
            raise
        self.auth_info_metadata = authinfo
        self.api_keys = APIKeys(self, authinfo)
        self.environments = Environments(self, authinfo)

    @property
    def config(self) -> Config:
        return self._config

    # ── Lifecycle ────────────────────────────────────────────────

    def close(self) -> None:
        """Close the underlying httpx.Client if this client created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ── Request pipeline ─────────────────────────────────────────

    def _url(self, path: str) -> httpx.URL:
        return self.base_url.join(path)

    def _build_request(
        self,
        ctx: Context,
        method: str,
        url: httpx.URL,
        content: Optional[bytes],
    ) -> httpx.Request:
        remaining = ctx.remaining()
        timeout = httpx.USE_CLIENT_DEFAULT
        if remaining is not None:
            # an attempt never outlives the context deadline
            timeout = min(remaining, self._config.timeout)
        return self._http.build_request(
            method,
            url,
            headers=self.headers,
            content=content,
            timeout=timeout,
        )

    def do(
        self,
        method: str,
        path: str,
        body: Optional[Resource] = None,
        ctx: Optional[Context] = None,
    ) -> httpx.Response:
        """Send a request, retrying per the configured policy.

        ``path`` is resolved against the base URL. ``body`` is encoded as a
        single-resource JSON:API document. Returns the final response
        whatever its status; when retries run out the last response is
        returned as is. Raises the context's error if it is cancelled, and
        transport errors that are not retried.
        """
        ctx = ctx or background()
        cfg = self._config
        url = self._url(path)
        content = None
        if body is not None:
            content = json.dumps(marshal_payload(body)).encode("utf-8")

        attempt = 0
        while True:
            ctx_err = ctx.err()
            if ctx_err is not None:
                raise ctx_err

            resp: Optional[httpx.Response] = None
            err: Optional[Exception] = None
            try:
                resp = self._http.send(self._build_request(ctx, method, url, content))
            except httpx.TransportError as exc:
                err = exc
            else:
                if cfg.debug:
                    logger.debug("[DEBUG] Request: %s %s", method, url)

            retry, check_err = cfg.check_retry(ctx, resp, err)
            if not retry:
                if check_err is not None:
                    raise check_err
                if resp is None:
                    raise err  # type: ignore[misc]
                return resp

            if attempt >= cfg.retry_max:
                break

            wait = cfg.backoff(cfg.retry_wait_min, cfg.retry_wait_max, attempt, resp, cfg.rng.random)
            logger.warning(
                "%s %s: %s, retrying in %.2fs (attempt %d/%d)",
                method,
                url,
                f"status {resp.status_code}" if resp is not None else f"error {err!r}",
                wait,
                attempt + 1,
                cfg.retry_max,
            )
            if resp is not None:
                resp.close()

            ctx_err = ctx.err()
            if ctx_err is not None:
                raise ctx_err
            if not ctx.sleep(wait):
                raise ctx.err() or DeadlineExceeded("context deadline exceeded")
            attempt += 1

        logger.warning("%s %s: giving up after %d attempts", method, url, attempt + 1)
        if resp is None:
            raise err  # type: ignore[misc]
        return resp

    # ── Auth ─────────────────────────────────────────────────────

    def auth_info(self, ctx: Optional[Context] = None) -> AuthMetadata:
        """GET /2/auth: identity and team of the configured key."""
        resp = self.do("GET", AUTH_PATH, ctx=ctx)
        if resp.status_code != 200:
            raise error_from_response(resp)
        return unmarshal_payload(resp.json(), AuthMetadata)
