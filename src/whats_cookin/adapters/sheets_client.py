"""Google Sheets row store adapter."""

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol
from urllib.parse import quote

import httpx
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from whats_cookin.adapters.cells import data_rows
from whats_cookin.domain.errors import StoreError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


class Sheet(StrEnum):
    """Sheet (table) names inside the spreadsheet."""

    ALLOWED_USERS = "AllowedUsers"
    MEALS = "Meals"
    INGREDIENTS = "Ingredients"
    MEAL_INGREDIENTS = "MealIngredients"
    CALENDAR_ENTRIES = "CalendarEntries"
    SHOPPING_LISTS = "ShoppingLists"
    SHOPPING_LIST_ITEMS = "ShoppingListItems"
    CUISINE_TAGS = "CuisineTags"


@dataclass(frozen=True)
class RowMatch:
    """A located row and its 1-based sheet row number."""

    row_index: int
    values: list[str]


class RowStore(Protocol):
    """Row-oriented access to a spreadsheet used as a database."""

    def read_rows(self, sheet: str) -> list[list[str]]:
        """Return every row of a sheet, header row included."""

    def append_row(self, sheet: str, values: list[str]) -> None:
        """Append a row after the last data row."""

    def update_row(self, sheet: str, row_index: int, values: list[str]) -> None:
        """Overwrite the row at a 1-based sheet row number."""

    def delete_row(self, sheet: str, row_index: int) -> None:
        """Delete the row at a 1-based sheet row number, shifting rows up."""

    def find_row_by_column(
        self, sheet: str, column_index: int, value: str
    ) -> RowMatch | None:
        """Return the first data row whose column matches the value."""


class AccessTokenProvider(Protocol):
    """Source of OAuth access tokens for the Sheets API."""

    def get_token(self) -> str:
        """Return a currently valid bearer token."""


@dataclass
class ServiceAccountTokenProvider:
    """Mints access tokens from service-account credentials."""

    client_email: str
    private_key: str
    _credentials: service_account.Credentials | None = field(default=None, repr=False)

    def get_token(self) -> str:
        """Return a valid token, refreshing the credentials when needed."""
        try:
            credentials = self._load_credentials()
            if not credentials.valid:
                credentials.refresh(Request())
        except (GoogleAuthError, ValueError) as exc:
            raise StoreError("Failed to obtain a Google access token") from exc
        return str(credentials.token)

    def _load_credentials(self) -> service_account.Credentials:
        if self._credentials is None:
            self._credentials = service_account.Credentials.from_service_account_info(
                {
                    "client_email": self.client_email,
                    "private_key": self.private_key,
                    "token_uri": TOKEN_URI,
                },
                scopes=SCOPES,
            )
        return self._credentials


@dataclass
class GoogleSheetsRowStore(RowStore):
    """Row store backed by the Google Sheets v4 REST API."""

    spreadsheet_id: str
    token_provider: AccessTokenProvider
    http_client: httpx.Client
    base_url: str = "https://sheets.googleapis.com/v4"
    _sheet_ids: dict[str, int] = field(default_factory=dict, repr=False)

    @classmethod
    def create(
        cls,
        spreadsheet_id: str,
        token_provider: AccessTokenProvider,
        base_url: str = "https://sheets.googleapis.com/v4",
    ) -> "GoogleSheetsRowStore":
        """Create a row store with a managed httpx session."""
        return cls(
            spreadsheet_id=spreadsheet_id,
            token_provider=token_provider,
            http_client=httpx.Client(),
            base_url=base_url,
        )

    def read_rows(self, sheet: str) -> list[list[str]]:
        """Return every row of a sheet, header row included."""
        payload = self._request("GET", self._values_url(sheet))
        values = payload.get("values") or []
        if not isinstance(values, list) or not all(
            isinstance(row, list) for row in values
        ):
            raise StoreError(f"Malformed values returned for sheet {sheet}")
        return [["" if value is None else str(value) for value in row] for row in values]

    def append_row(self, sheet: str, values: list[str]) -> None:
        """Append a row after the last data row."""
        self._request(
            "POST",
            f"{self._values_url(sheet)}:append",
            params={"valueInputOption": "RAW", "insertDataOption": "INSERT_ROWS"},
            json={"values": [values]},
        )

    def update_row(self, sheet: str, row_index: int, values: list[str]) -> None:
        """Overwrite the row at a 1-based sheet row number."""
        self._request(
            "PUT",
            self._values_url(f"{sheet}!A{row_index}:Z{row_index}"),
            params={"valueInputOption": "RAW"},
            json={"values": [values]},
        )

    def delete_row(self, sheet: str, row_index: int) -> None:
        """Delete the row at a 1-based sheet row number, shifting rows up."""
        sheet_id = self._resolve_sheet_id(sheet)
        self._request(
            "POST",
            f"{self._spreadsheet_url()}:batchUpdate",
            json={
                "requests": [
                    {
                        "deleteDimension": {
                            "range": {
                                "sheetId": sheet_id,
                                "dimension": "ROWS",
                                "startIndex": row_index - 1,
                                "endIndex": row_index,
                            }
                        }
                    }
                ]
            },
        )

    def find_row_by_column(
        self, sheet: str, column_index: int, value: str
    ) -> RowMatch | None:
        """Return the first data row whose column matches the value."""
        for row_index, row in data_rows(self.read_rows(sheet)):
            if column_index < len(row) and row[column_index] == value:
                return RowMatch(row_index=row_index, values=row)
        return None

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.http_client.close()

    def _resolve_sheet_id(self, sheet: str) -> int:
        if sheet in self._sheet_ids:
            return self._sheet_ids[sheet]
        payload = self._request(
            "GET", self._spreadsheet_url(), params={"fields": "sheets.properties"}
        )
        for entry in payload.get("sheets") or []:
            properties = entry.get("properties") if isinstance(entry, dict) else None
            if not isinstance(properties, dict):
                continue
            title = properties.get("title")
            sheet_id = properties.get("sheetId")
            if isinstance(title, str) and isinstance(sheet_id, int):
                self._sheet_ids[title] = sheet_id
        if sheet not in self._sheet_ids:
            raise StoreError(f'Sheet "{sheet}" not found')
        return self._sheet_ids[sheet]

    def _spreadsheet_url(self) -> str:
        return f"{self.base_url}/spreadsheets/{self.spreadsheet_id}"

    def _values_url(self, range_: str) -> str:
        return f"{self._spreadsheet_url()}/values/{quote(range_, safe='!:')}"

    def _request(self, method: str, url: str, **kwargs: object) -> dict[str, object]:
        headers = {"Authorization": f"Bearer {self.token_provider.get_token()}"}
        try:
            response = self.http_client.request(
                method, url, headers=headers, timeout=15, **kwargs
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Sheets request failed: %s %s", method, url)
            raise StoreError("Spreadsheet request failed") from exc
        if not response.content:
            return {}
        try:
            payload = response.json()
        except ValueError as exc:
            raise StoreError("Spreadsheet returned malformed JSON") from exc
        if not isinstance(payload, dict):
            raise StoreError("Spreadsheet returned an unexpected payload")
        return payload
