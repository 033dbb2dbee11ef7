"""Tests for converting error responses into DetailedError."""

from __future__ import annotations

import httpx
import pytest

from honeycombio.errors import (
    JSONAPI_MEDIA_TYPE,
    DetailedError,
    ErrorTypeDetail,
    HoneycombError,
    error_from_response,
)


def _jsonapi(status: int, body, headers=None) -> httpx.Response:
    return httpx.Response(
        status,
        json=body,
        headers={"Content-Type": JSONAPI_MEDIA_TYPE, **(headers or {})},
    )


class TestErrorTypeDetail:
    @pytest.mark.parametrize(
        "detail, expected",
        [
            (ErrorTypeDetail(code="invalid", field="name", description="too long"), "invalid name - too long"),
            (ErrorTypeDetail(field="name", description="too long"), "name - too long"),
            (ErrorTypeDetail(code="invalid", description="too long"), "invalid too long"),
            (ErrorTypeDetail(description="too long"), "too long"),
            (ErrorTypeDetail(code="invalid"), "invalid"),
            (ErrorTypeDetail(), ""),
        ],
    )
    def test_str(self, detail, expected) -> None:
        assert str(detail) == expected


class TestDetailedError:
    def test_str_joins_details(self) -> None:
        err = DetailedError(
            422,
            message="ignored",
            details=[ErrorTypeDetail(field="a", description="bad"), ErrorTypeDetail(field="b", description="worse")],
        )
        assert str(err) == "a - bad\nb - worse"

    def test_str_falls_back_to_message(self) -> None:
        assert str(DetailedError(500, message="internal")) == "internal"

    def test_status_helpers(self) -> None:
        assert DetailedError(404).is_not_found()
        assert not DetailedError(404).is_conflict()
        assert DetailedError(409).is_conflict()

    def test_is_a_honeycomb_error(self) -> None:
        assert isinstance(DetailedError(400), HoneycombError)


class TestFromJSONAPI:
    def test_single_error(self) -> None:
        resp = _jsonapi(
            400,
            {"errors": [{"status": "400", "code": "validation/invalid", "title": "bad page size",
                         "source": {"parameter": "page[size]"}}]},
            headers={"Request-Id": "req-1"},
        )
        err = error_from_response(resp)

        assert isinstance(err, DetailedError)
        assert err.status == 400
        assert err.type == "validation/invalid"
        assert err.title == "bad page size"
        assert err.request_id == "req-1"
        assert str(err) == "parameter page[size] - bad page size"

    def test_multiple_errors(self) -> None:
        resp = _jsonapi(
            422,
            {"errors": [
                {"title": "invalid", "detail": "name is required", "source": {"pointer": "/data/attributes/name"}},
                {"title": "invalid", "detail": "color is unknown", "source": {"pointer": "/data/attributes/color"}},
            ]},
        )
        err = error_from_response(resp)

        assert err.title == "invalid"
        assert err.type == ""
        assert [d.field for d in err.details] == ["/data/attributes/name", "/data/attributes/color"]
        assert [d.description for d in err.details] == ["name is required", "color is unknown"]

    def test_undecodable_body_uses_status_line(self) -> None:
        resp = httpx.Response(502, content=b"<html>bad gateway</html>", headers={"Content-Type": JSONAPI_MEDIA_TYPE})
        err = error_from_response(resp)

        assert err.status == 502
        assert err.message == "502 Bad Gateway"
        assert err.details == []

    def test_empty_errors_list(self) -> None:
        err = error_from_response(_jsonapi(500, {"errors": []}))
        assert err.message == "500 Internal Server Error"


class TestFromProblemDetail:
    def test_rfc7807_body(self) -> None:
        resp = httpx.Response(
            422,
            json={
                "status": 422,
                "error": "validation failed",
                "request_id": "req-2",
                "type": "https://api.honeycomb.io/problems/validation-failed",
                "title": "The provided input is invalid.",
                "type_detail": [{"code": "invalid", "field": "name", "description": "must not be blank"}],
            },
            headers={"Content-Type": "application/problem+json"},
        )
        err = error_from_response(resp)

        assert err.status == 422
        assert err.message == "validation failed"
        assert err.request_id == "req-2"
        assert err.title == "The provided input is invalid."
        assert str(err) == "invalid name - must not be blank"

    def test_empty_body(self) -> None:
        err = error_from_response(httpx.Response(503))
        assert err.status == 503
        assert err.message == "503 Service Unavailable"

    def test_missing_response(self) -> None:
        err = error_from_response(None)
        assert not isinstance(err, DetailedError)
        assert str(err) == "invalid response"
