"""API Keys: management of a team's ingest and configuration keys."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from honeycombio.context import Context
from honeycombio.errors import error_from_response
from honeycombio.jsonapi import unmarshal_payload
from honeycombio.v2.models import APIKey, AuthMetadata
from honeycombio.v2.pagination import ListOptions, Pager

if TYPE_CHECKING:
    from honeycombio.v2.client import Client

API_KEYS_PATH = "/2/teams/{team}/api-keys"
API_KEYS_BY_ID_PATH = "/2/teams/{team}/api-keys/{id}"


class APIKeys:
    """CRUD operations on ``/2/teams/<team>/api-keys``."""

    def __init__(self, client: "Client", authinfo: AuthMetadata) -> None:
        self._client = client
        self._team = authinfo.team.slug

    def create(self, key: APIKey, ctx: Optional[Context] = None) -> APIKey:
        """POST; the returned key carries the secret, shown only once."""
        resp = self._client.do("POST", API_KEYS_PATH.format(team=self._team), key, ctx=ctx)
        if resp.status_code != 201:
            raise error_from_response(resp)
        return unmarshal_payload(resp.json(), APIKey)

    def get(self, id: str, ctx: Optional[Context] = None) -> APIKey:
        resp = self._client.do("GET", API_KEYS_BY_ID_PATH.format(team=self._team, id=id), ctx=ctx)
        if resp.status_code != 200:
            raise error_from_response(resp)
        return unmarshal_payload(resp.json(), APIKey)

    def update(self, key: APIKey, ctx: Optional[Context] = None) -> APIKey:
        """PATCH; only fields that are not None are sent."""
        resp = self._client.do(
            "PATCH", API_KEYS_BY_ID_PATH.format(team=self._team, id=key.id), key, ctx=ctx
        )
        if resp.status_code != 200:
            raise error_from_response(resp)
        return unmarshal_payload(resp.json(), APIKey)

    def delete(self, id: str, ctx: Optional[Context] = None) -> None:
        resp = self._client.do("DELETE", API_KEYS_BY_ID_PATH.format(team=self._team, id=id), ctx=ctx)
        if resp.status_code != 204:
            raise error_from_response(resp)

    def list(self, page_size: int = 0) -> Pager[APIKey]:
        """Pager over the team's keys; ``page_size`` defaults to 20."""
        return Pager(
            self._client,
            API_KEYS_PATH.format(team=self._team),
            APIKey,
            ListOptions(page_size=page_size),
        )
