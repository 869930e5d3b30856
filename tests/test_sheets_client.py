"""Tests for the Google Sheets row store and identity client."""

import asyncio
import json

import httpx
import pytest

from whats_cookin.adapters.google_identity_client import HttpxGoogleIdentityClient
from whats_cookin.adapters.sheets_client import (
    GoogleSheetsRowStore,
    ServiceAccountTokenProvider,
)
from whats_cookin.domain.errors import StoreError

BASE_URL = "https://sheets.test/v4"


class _StaticTokenProvider:
    def get_token(self) -> str:
        return "sheets-token"


def _store(handler) -> GoogleSheetsRowStore:  # type: ignore[no-untyped-def]
    return GoogleSheetsRowStore(
        spreadsheet_id="sheet-123",
        token_provider=_StaticTokenProvider(),
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        base_url=BASE_URL,
    )


def test_read_rows_stringifies_values() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bearer sheets-token"
        assert request.url.path == "/v4/spreadsheets/sheet-123/values/Meals"
        return httpx.Response(200, json={"values": [["id", "name"], ["m1", "Soup", 3]]})

    rows = _store(handler).read_rows("Meals")

    assert rows == [["id", "name"], ["m1", "Soup", "3"]]


def test_read_rows_of_empty_sheet() -> None:
    store = _store(lambda request: httpx.Response(200, json={"range": "Meals!A1:Z1000"}))

    assert store.read_rows("Meals") == []


def test_append_and_update_use_raw_values() -> None:
    seen: list[tuple[str, str, dict[str, str], dict[str, object]]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(
            (
                request.method,
                request.url.path,
                dict(request.url.params),
                json.loads(request.content.decode()),
            )
        )
        return httpx.Response(200, json={})

    store = _store(handler)
    store.append_row("CalendarEntries", ["e1", "2026-01-01"])
    store.update_row("CalendarEntries", 4, ["e1", "2026-01-02"])

    append, update = seen
    assert append[0] == "POST"
    assert append[1] == "/v4/spreadsheets/sheet-123/values/CalendarEntries:append"
    assert append[2] == {"valueInputOption": "RAW", "insertDataOption": "INSERT_ROWS"}
    assert append[3] == {"values": [["e1", "2026-01-01"]]}
    assert update[0] == "PUT"
    assert update[1] == "/v4/spreadsheets/sheet-123/values/CalendarEntries!A4:Z4"
    assert update[2] == {"valueInputOption": "RAW"}


def test_delete_row_resolves_sheet_id_zero_once() -> None:
    batch_requests: list[dict[str, object]] = []
    metadata_calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            metadata_calls.append(request.url.params["fields"])
            return httpx.Response(
                200,
                json={
                    "sheets": [
                        {"properties": {"title": "Meals", "sheetId": 0}},
                        {"properties": {"title": "Ingredients", "sheetId": 77}},
                    ]
                },
            )
        assert request.url.path == "/v4/spreadsheets/sheet-123:batchUpdate"
        batch_requests.append(json.loads(request.content.decode()))
        return httpx.Response(200, json={"replies": [{}]})

    store = _store(handler)
    store.delete_row("Meals", 5)
    store.delete_row("Meals", 2)

    assert metadata_calls == ["sheets.properties"]
    first = batch_requests[0]["requests"][0]["deleteDimension"]["range"]
    assert first == {"sheetId": 0, "dimension": "ROWS", "startIndex": 4, "endIndex": 5}


def test_delete_row_unknown_sheet_raises() -> None:
    store = _store(lambda request: httpx.Response(200, json={"sheets": []}))

    with pytest.raises(StoreError):
        store.delete_row("Missing", 2)


def test_find_row_by_column_returns_sheet_row_number() -> None:
    values = [["id", "name"], ["a", "Alpha"], ["b", "Beta"]]
    store = _store(lambda request: httpx.Response(200, json={"values": values}))

    match = store.find_row_by_column("Meals", 0, "b")

    assert match is not None
    assert match.row_index == 3
    assert match.values == ["b", "Beta"]
    assert store.find_row_by_column("Meals", 0, "id") is None


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": {"message": "boom"}}),
        httpx.Response(200, content=b"not json"),
        httpx.Response(200, json=["unexpected"]),
        httpx.Response(200, json={"values": "oops"}),
    ],
)
def test_failures_raise_store_error(response: httpx.Response) -> None:
    store = _store(lambda request: response)

    with pytest.raises(StoreError):
        store.read_rows("Meals")


def test_transport_errors_raise_store_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(StoreError):
        _store(handler).append_row("Meals", ["x"])


def test_token_provider_wraps_bad_key() -> None:
    provider = ServiceAccountTokenProvider(
        client_email="sheets@example.iam.gserviceaccount.com",
        private_key="not a key",
    )

    with pytest.raises(StoreError):
        provider.get_token()


def test_identity_client_resolves_email() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bearer access"
        return httpx.Response(200, json={"email": "hanna@example.com", "name": "Hanna"})

    client = HttpxGoogleIdentityClient(
        userinfo_url="https://identity.test/userinfo",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    identity = asyncio.run(client.fetch_identity("access"))

    assert identity is not None
    assert identity.email == "hanna@example.com"
    assert identity.name == "Hanna"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(401, json={"error": "invalid_token"}),
        httpx.Response(200, json={"name": "No Email"}),
    ],
)
def test_identity_client_rejections_return_none(response: httpx.Response) -> None:
    client = HttpxGoogleIdentityClient(
        userinfo_url="https://identity.test/userinfo",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(lambda request: response)),
    )

    assert asyncio.run(client.fetch_identity("access")) is None


def test_identity_client_server_error_raises() -> None:
    client = HttpxGoogleIdentityClient(
        userinfo_url="https://identity.test/userinfo",
        http_client=httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(503))
        ),
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.fetch_identity("access"))
