"""Sign-in endpoints."""

from fastapi import APIRouter, Depends, Request

from whats_cookin.api.deps import SESSION_USER_KEY, get_container, require_user
from whats_cookin.api.schemas import (
    LoginRequest,
    SuccessResponse,
    UserEnvelope,
    UserOut,
)
from whats_cookin.containers import AppContainer
from whats_cookin.domain.users import SessionUser

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(
    body: LoginRequest,
    request: Request,
    container: AppContainer = Depends(get_container),
) -> UserEnvelope:
    """Verify a Google access token and start a session."""
    user = await container.auth_service.login(body.credential)
    request.session[SESSION_USER_KEY] = user.to_session()
    return UserEnvelope(user=UserOut.from_domain(user))


@router.post("/logout")
async def logout(request: Request) -> SuccessResponse:
    """Clear the session cookie."""
    request.session.clear()
    return SuccessResponse()


@router.get("/session")
async def session(user: SessionUser = Depends(require_user)) -> UserEnvelope:
    """Return the signed-in user."""
    return UserEnvelope(user=UserOut.from_domain(user))
