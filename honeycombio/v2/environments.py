"""Environments of a Honeycomb team."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from honeycombio.context import Context
from honeycombio.errors import error_from_response
from honeycombio.jsonapi import unmarshal_payload
from honeycombio.v2.models import AuthMetadata, Environment
from honeycombio.v2.pagination import ListOptions, Pager

if TYPE_CHECKING:
    from honeycombio.v2.client import Client

ENVIRONMENTS_PATH = "/2/teams/{team}/environments"
ENVIRONMENTS_BY_ID_PATH = "/2/teams/{team}/environments/{id}"


class Environments:
    def __init__(self, client: "Client", authinfo: AuthMetadata) -> None:
        self._client = client
        self._team = authinfo.team.slug

    def _path(self, id: Optional[str] = None) -> str:
        if id is None:
            return ENVIRONMENTS_PATH.format(team=self._team)
        return ENVIRONMENTS_BY_ID_PATH.format(team=self._team, id=id)

    def create(self, env: Environment, ctx: Optional[Context] = None) -> Environment:
        resp = self._client.do("POST", self._path(), env, ctx=ctx)
        if resp.status_code != 201:
            raise error_from_response(resp)
        return unmarshal_payload(resp.json(), Environment)

    def get(self, id: str, ctx: Optional[Context] = None) -> Environment:
        resp = self._client.do("GET", self._path(id), ctx=ctx)
        if resp.status_code != 200:
            raise error_from_response(resp)
        return unmarshal_payload(resp.json(), Environment)

    def update(self, env: Environment, ctx: Optional[Context] = None) -> Environment:
        """PATCH the environment; e.g. clear delete protection before deleting it.

        Fields left as None keep their current server-side value.
        """
        resp = self._client.do("PATCH", self._path(env.id), env, ctx=ctx)
        if resp.status_code != 200:
            raise error_from_response(resp)
        return unmarshal_payload(resp.json(), Environment)

    def delete(self, id: str, ctx: Optional[Context] = None) -> None:
        """DELETE; fails with 409 while the environment is delete protected."""
        resp = self._client.do("DELETE", self._path(id), ctx=ctx)
        if resp.status_code != 204:
            raise error_from_response(resp)

    def list(self, page_size: int = 0) -> Pager[Environment]:
        return Pager(self._client, self._path(), Environment, ListOptions(page_size=page_size))
