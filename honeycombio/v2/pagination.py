"""Cursor-based pagination over JSON:API collections.

A Pager starts at the first page of a collection and follows the
top-level ``links.next`` URI until the server stops sending one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Iterator, List, Optional, Type, TypeVar

from pydantic import BaseModel

from honeycombio.context import Context
from honeycombio.errors import error_from_response
from honeycombio.jsonapi import Resource, unmarshal_many_payload

if TYPE_CHECKING:
    from honeycombio.v2.client import Client

logger = logging.getLogger("honeycombio.pagination")

T = TypeVar("T", bound=Resource)

DEFAULT_PAGE_SIZE = 20


class PaginationLinks(BaseModel):
    """Pagination links of a JSON:API list response."""

    next: Optional[str] = None


@dataclass(frozen=True)
class ListOptions:
    """Options applied to the first page of a listing.

    ``page_size`` is the number of results per page; the API caps it at 100.
    """

    page_size: int = 0

    def with_defaults(self) -> "ListOptions":
        if self.page_size > 0:
            return self
        return ListOptions(page_size=DEFAULT_PAGE_SIZE)

    def to_params(self) -> dict:
        return {"page[size]": str(self.page_size)}


def parse_pagination(document: Any) -> PaginationLinks:
    """Read ``links`` from a decoded list response."""
    links = document.get("links") if isinstance(document, dict) else None
    return PaginationLinks.model_validate(links or {})


class Pager(Generic[T]):
    """Walks a paginated collection one page at a time.

    Not safe for concurrent use; a Pager holds the cursor of one traversal.
    """

    def __init__(
        self,
        client: "Client",
        url: str,
        model: Type[T],
        opts: Optional[ListOptions] = None,
    ) -> None:
        self._client = client
        self._model = model
        self.opts = (opts or ListOptions()).with_defaults()

        first = client.base_url.join(url).copy_merge_params(self.opts.to_params())
        target = first.raw_path.decode("ascii")
        self._next: Optional[str] = target

    @property
    def cursor(self) -> Optional[str]:
        """URI of the next page to fetch, None once exhausted."""
        return self._next

    def has_next(self) -> bool:
        """True while there are more pages to fetch."""
        return self._next is not None

    def next(self, ctx: Optional[Context] = None) -> List[T]:
        """Fetch the next page.

        Returns an empty list once exhausted. On any error the cursor is left
        where it was, so the same page can be requested again.
        """
        if self._next is None:
            return []

        resp = self._client.do("GET", self._next, ctx=ctx)
        if resp.status_code != 200:
            raise error_from_response(resp)

        document = resp.json()
        pagination = parse_pagination(document)
        items = unmarshal_many_payload(document, self._model)

        logger.debug("fetched %d %s from %s", len(items), self._model.jsonapi_type, self._next)
        self._next = pagination.next
        return items

    def __iter__(self) -> Iterator[T]:
        while self.has_next():
            yield from self.next()
