"""Request dependencies shared by the API routers."""

from fastapi import Request

from whats_cookin.containers import AppContainer
from whats_cookin.domain.errors import UnauthorizedError
from whats_cookin.domain.users import SessionUser

SESSION_USER_KEY = "user"


def get_container(request: Request) -> AppContainer:
    """Return the dependency container attached to the app."""
    return request.app.state.container


def require_user(request: Request) -> SessionUser:
    """Return the signed-in user or reject the request."""
    user = SessionUser.from_session(request.session.get(SESSION_USER_KEY))
    if user is None:
        raise UnauthorizedError("Not signed in")
    return user
