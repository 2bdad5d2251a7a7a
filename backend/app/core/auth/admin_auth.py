"""
Credential login for the single site administrator.

The username and password come from ADMIN_USERNAME / ADMIN_PASSWORD. A
successful login returns a bearer token accepted by `require_admin`.
"""

import hmac

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel

from backend.app.core.auth.jwt_auth import create_access_token, require_admin
from backend.app.core.config import Settings
from backend.app.observability.logging import log_event


router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginRequest(BaseModel):
    username: str
    password: str


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


def _normalize_username(username: str) -> str:
    return (username or "").strip().lower()


def verify_admin_credentials(settings: Settings, username: str, password: str) -> bool:
    expected_user = _normalize_username(settings.admin_username)
    expected_password = settings.admin_password or ""
    if not expected_user or not expected_password:
        return False
    user_ok = hmac.compare_digest(_normalize_username(username).encode("utf-8"), expected_user.encode("utf-8"))
    password_ok = hmac.compare_digest((password or "").encode("utf-8"), expected_password.encode("utf-8"))
    return user_ok and password_ok


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest, request: Request):
    settings: Settings = request.app.state.settings
    if not verify_admin_credentials(settings, payload.username, payload.password):
        log_event("admin_login_rejected", severity="warning", username=_normalize_username(payload.username))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    username = _normalize_username(payload.username)
    token = create_access_token(settings, {"sub": username, "role": "admin", "name": "Admin"})
    log_event("admin_login", username=username)
    return AuthResponse(access_token=token)


@router.get("/session")
async def session(admin: dict = Depends(require_admin)):
    return {"user": {"name": admin.get("name") or "Admin", "username": admin.get("sub")}}
