# comment_analyzer/app/routes_auth.py
from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from pydantic import BaseModel

from comment_analyzer.domain.models import User
from comment_analyzer.exceptions import AuthError, CommentDataError, PermissionDeniedError
from comment_analyzer.services.auth_service import AuthService, get_auth_service

router = APIRouter(prefix="/auth", tags=["auth"])

SESSION_HEADER = "X-Session-Token"


class LoginRequest(BaseModel):
    email: str
    password: str
    role: str


class RegisterRequest(BaseModel):
    email: str
    password: str
    name: str
    role: str
    organization: Optional[str] = None
    department: Optional[str] = None


def _session_payload(token: str, user: User, auth: AuthService):
    return {
        "token": token,
        "user": asdict(user),
        "role_label": auth.roles.labels.get(user.role, user.role),
    }


@router.get("/roles")
def roles(auth: AuthService = Depends(get_auth_service)):
    return {
        role: {"label": auth.roles.labels[role], "permissions": list(perms)}
        for role, perms in auth.roles.permissions.items()
    }


@router.post("/login")
def login(req: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    try:
        token, user = auth.login(req.email, req.password, req.role)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e
    return _session_payload(token, user, auth)


@router.post("/register")
def register(req: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    try:
        token, user = auth.register(
            email=req.email,
            name=req.name,
            role=req.role,
            password=req.password,
            organization=req.organization,
            department=req.department,
        )
    except CommentDataError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except AuthError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return _session_payload(token, user, auth)


@router.post("/logout")
def logout(
    x_session_token: Optional[str] = Header(None, alias=SESSION_HEADER),
    auth: AuthService = Depends(get_auth_service),
):
    if x_session_token:
        auth.logout(x_session_token)
    return {"status": "ok"}


@router.get("/me")
def me(
    x_session_token: Optional[str] = Header(None, alias=SESSION_HEADER),
    auth: AuthService = Depends(get_auth_service),
):
    try:
        user = auth.current_user(x_session_token)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e
    return {"user": asdict(user), "role_label": auth.roles.labels.get(user.role, user.role)}


@router.get("/permissions/{permission}")
def check_permission(
    permission: str,
    x_session_token: Optional[str] = Header(None, alias=SESSION_HEADER),
    auth: AuthService = Depends(get_auth_service),
):
    try:
        auth.require_permission(x_session_token, permission)
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e
    return {"permission": permission, "granted": True}
