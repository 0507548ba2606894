"""Login, logout and session info endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from brandgallery.auth.dependencies import (
    SessionUser,
    authenticate,
    get_current_user,
    login_session,
    logout_session,
)
from brandgallery.models.requests import LoginRequest
from brandgallery.ratelimit import limiter

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/login")
@limiter.limit("10/minute")
async def login(request: Request, body: LoginRequest):
    """Start a session for the admin or boss account."""
    user = authenticate(body.username, body.password)
    if user is None:
        logger.warning("Failed login attempt for %s", body.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    login_session(request, user)
    return {"username": user.username, "role": user.role}


@router.post("/logout")
async def logout(request: Request):
    logout_session(request)
    return {"status": "logged_out"}


@router.get("/me")
async def me(user: SessionUser = Depends(get_current_user)):
    return {"username": user.username, "role": user.role}
