"""Structured exceptions for the Honeycomb client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"


class HoneycombError(Exception):
    """Base exception for everything raised by this package."""
    pass


class ConfigError(HoneycombError):
    """Client could not be constructed from the given configuration."""
    pass


class ContextCancelled(HoneycombError):
    """The operation's context was cancelled."""
    pass


class DeadlineExceeded(ContextCancelled):
    """The operation's context deadline passed."""
    pass


class JSONAPIDecodeError(HoneycombError, ValueError):
    """A response body is not a valid JSON:API document for the target model."""
    pass


@dataclass(frozen=True)
class ErrorTypeDetail:
    code: str = ""
    description: str = ""
    field: str = ""

    def __str__(self) -> str:
        out = ""
        if self.code:
            out += self.code
            if self.field or self.description:
                out += " "
        if self.field:
            out += self.field
            if self.description:
                out += " - "
        if self.description:
            out += self.description
        return out


class DetailedError(HoneycombError):
    """Normalized error for any unsuccessful HTTP response.

    Callers branch on ``status`` (or the ``is_*`` helpers) rather than on
    subclasses.
    """

    def __init__(
        self,
        status: int,
        message: str = "",
        request_id: str = "",
        type: str = "",
        title: str = "",
        details: Optional[List[ErrorTypeDetail]] = None,
    ) -> None:
        self.status = status
        self.message = message
        self.request_id = request_id
        self.type = type
        self.title = title
        self.details = list(details or [])
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.details:
            return "\n".join(str(d) for d in self.details)
        return self.message

    def __repr__(self) -> str:
        return (
            f"DetailedError(status={self.status}, title={self.title!r}, "
            f"message={self.message!r}, request_id={self.request_id!r})"
        )

    def is_not_found(self) -> bool:
        return self.status == 404

    def is_conflict(self) -> bool:
        return self.status == 409


def _status_line(resp: httpx.Response) -> str:
    return f"{resp.status_code} {resp.reason_phrase}".strip()


def _error_source(source: Any) -> str:
    """Flatten a JSON:API error ``source`` member into a field name.

    Only one of pointer/parameter/header is expected to be set.
    """
    if not isinstance(source, dict):
        return ""
    if source.get("pointer"):
        return source["pointer"]
    if source.get("parameter"):
        return "parameter " + source["parameter"]
    if source.get("header"):
        return source["header"] + " header"
    return ""


def error_from_response(resp: Optional[httpx.Response]) -> HoneycombError:
    """Convert an unsuccessful response into a ``DetailedError``.

    Returns the exception rather than raising it so callers can ``raise``
    it at the call site.
    """
    if resp is None:
        return HoneycombError("invalid response")

    request_id = resp.headers.get("Request-Id", "")
    content_type = resp.headers.get("Content-Type", "").split(";")[0].strip()

    try:
        body = resp.json()
    except ValueError:
        body = None

    if content_type == JSONAPI_MEDIA_TYPE:
        errors = body.get("errors") if isinstance(body, dict) else None
        if not isinstance(errors, list) or not errors or not all(isinstance(e, dict) for e in errors):
            return DetailedError(resp.status_code, message=_status_line(resp), request_id=request_id)

        first: Dict[str, Any] = errors[0]
        if len(errors) == 1:
            # a lone error carries its code as the error type
            return DetailedError(
                resp.status_code,
                request_id=request_id,
                type=first.get("code") or "",
                title=first.get("title") or "",
                details=[
                    ErrorTypeDetail(
                        description=first.get("title") or "",
                        field=_error_source(first.get("source")),
                    )
                ],
            )
        return DetailedError(
            resp.status_code,
            request_id=request_id,
            title=first.get("title") or "",
            details=[
                ErrorTypeDetail(
                    description=e.get("detail") or e.get("description") or "",
                    field=_error_source(e.get("source")),
                )
                for e in errors
            ],
        )

    # RFC7807 problem detail
    if not isinstance(body, dict):
        return DetailedError(resp.status_code, message=_status_line(resp), request_id=request_id)

    details = []
    for d in body.get("type_detail") or []:
        if isinstance(d, dict):
            details.append(
                ErrorTypeDetail(
                    code=d.get("code") or "",
                    description=d.get("description") or "",
                    field=d.get("field") or "",
                )
            )
    status = body.get("status")
    return DetailedError(
        status if isinstance(status, int) and status else resp.status_code,
        message=body.get("error") or "",
        request_id=body.get("request_id") or request_id,
        type=body.get("type") or "",
        title=body.get("title") or "",
        details=details,
    )
