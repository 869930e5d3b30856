"""Tests for the sign-in gate."""

import asyncio

import httpx
import pytest

from whats_cookin.adapters.sheets_client import Sheet
from whats_cookin.adapters.sheets_user_repository import SheetsAllowedUserRepository
from whats_cookin.domain.errors import (
    AccessDeniedError,
    UnauthorizedError,
    UpstreamError,
    ValidationError,
)
from whats_cookin.services.auth import AuthService
from tests.conftest import FakeIdentityClient, InMemoryRowStore


def _service(
    row_store: InMemoryRowStore,
    identity_client: FakeIdentityClient,
    allowed_emails: set[str] | None = None,
) -> AuthService:
    return AuthService(
        identity_client=identity_client,
        repository=SheetsAllowedUserRepository(row_store),
        allowed_emails=allowed_emails,
    )


def test_login_uses_allow_list_sheet(
    row_store: InMemoryRowStore, identity_client: FakeIdentityClient
) -> None:
    row_store.append_row(Sheet.ALLOWED_USERS, ["IAN@example.com", "Ian", "admin"])

    user = asyncio.run(_service(row_store, identity_client).login("good-token"))

    assert user.email == "ian@example.com"
    assert user.name == "Ian"
    assert user.role == "admin"


def test_login_falls_back_to_configured_emails(
    row_store: InMemoryRowStore, identity_client: FakeIdentityClient
) -> None:
    service = _service(row_store, identity_client, allowed_emails={"ian@example.com"})

    user = asyncio.run(service.login("good-token"))

    assert user.name == "Ian G"
    assert user.role == "user"


def test_login_rejects_unlisted_email(
    row_store: InMemoryRowStore, identity_client: FakeIdentityClient
) -> None:
    with pytest.raises(AccessDeniedError):
        asyncio.run(_service(row_store, identity_client).login("stranger-token"))


def test_login_rejects_unknown_token(
    row_store: InMemoryRowStore, identity_client: FakeIdentityClient
) -> None:
    with pytest.raises(UnauthorizedError) as excinfo:
        asyncio.run(_service(row_store, identity_client).login("forged-token"))

    assert not isinstance(excinfo.value, AccessDeniedError)


def test_login_requires_credential(
    row_store: InMemoryRowStore, identity_client: FakeIdentityClient
) -> None:
    with pytest.raises(ValidationError):
        asyncio.run(_service(row_store, identity_client).login("   "))


def test_login_wraps_provider_failures(row_store: InMemoryRowStore) -> None:
    failing = FakeIdentityClient(error=httpx.ConnectError("down"))

    with pytest.raises(UpstreamError):
        asyncio.run(_service(row_store, failing).login("good-token"))
