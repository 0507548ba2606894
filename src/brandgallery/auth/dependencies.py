"""FastAPI dependencies for session login and role checks."""

import secrets
from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Depends, HTTPException, Request, status

from brandgallery.settings import settings
from brandgallery.views import ROLE_ADMIN, ROLE_BOSS, VALID_ROLES

SESSION_USER_KEY = "user"
SESSION_ROLE_KEY = "role"


@dataclass
class SessionUser:
    """The logged-in user as stored in the session cookie."""

    username: str
    role: str


def _credentials_match(expected: str, provided: str) -> bool:
    return secrets.compare_digest(str(expected).encode("utf-8"), str(provided).encode("utf-8"))


def authenticate(username: str, password: str, app_settings=settings) -> Optional[SessionUser]:
    """Check the configured admin and boss credentials.

    Returns the matching user, or None when neither pair matches.
    """
    candidates = (
        (app_settings.admin_username, app_settings.admin_password, ROLE_ADMIN),
        (app_settings.boss_username, app_settings.boss_password, ROLE_BOSS),
    )
    for expected_user, expected_password, role in candidates:
        if _credentials_match(expected_user, username) and _credentials_match(expected_password, password):
            return SessionUser(username=username, role=role)
    return None


def login_session(request: Request, user: SessionUser) -> None:
    request.session[SESSION_USER_KEY] = user.username
    request.session[SESSION_ROLE_KEY] = user.role


def logout_session(request: Request) -> None:
    request.session.clear()


def get_optional_user(request: Request) -> Optional[SessionUser]:
    """Get the session user if logged in, None otherwise."""
    username = request.session.get(SESSION_USER_KEY)
    role = request.session.get(SESSION_ROLE_KEY)
    if not username or role not in VALID_ROLES:
        return None
    return SessionUser(username=username, role=role)


def get_current_user(request: Request) -> SessionUser:
    """Return the session user.

    Raises:
        HTTPException 401: Not logged in
    """
    user = get_optional_user(request)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Login required",
        )
    return user


def require_role(*roles: str) -> Callable:
    """Dependency factory restricting an endpoint to the given roles.

    Usage:
        @router.post("/photos/upload")
        async def upload(user: SessionUser = Depends(require_role("admin"))):
            ...
    """
    allowed = {str(role).strip().lower() for role in roles if role}
    if not allowed:
        raise ValueError("At least one role is required")

    def check_role(user: SessionUser = Depends(get_current_user)) -> SessionUser:
        if user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden",
            )
        return user

    return check_role
