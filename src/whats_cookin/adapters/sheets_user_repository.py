"""Sheets-backed allow-list of users."""

from dataclasses import dataclass

from whats_cookin.adapters.cells import cell, data_rows
from whats_cookin.adapters.sheets_client import RowStore, Sheet
from whats_cookin.domain.users import AllowedUser
from whats_cookin.services.auth import AllowedUserRepository

_EMAIL = 0
_NAME = 1
_ROLE = 2


@dataclass
class SheetsAllowedUserRepository(AllowedUserRepository):
    """Allow-list stored in the AllowedUsers sheet."""

    store: RowStore

    def get_allowed_user(self, email: str) -> AllowedUser | None:
        """Return the allow-list row for an email, compared case-insensitively."""
        wanted = email.strip().lower()
        for _, row in data_rows(self.store.read_rows(Sheet.ALLOWED_USERS)):
            if cell(row, _EMAIL).lower() == wanted:
                return AllowedUser(
                    email=cell(row, _EMAIL),
                    name=cell(row, _NAME),
                    role=cell(row, _ROLE) or "user",
                )
        return None
