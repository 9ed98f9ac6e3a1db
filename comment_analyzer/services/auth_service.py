# comment_analyzer/services/auth_service.py
from __future__ import annotations

import logging
import threading
import uuid
from functools import lru_cache
from typing import Dict, Optional

from comment_analyzer.core.config import load_analysis_config
from comment_analyzer.domain.models import User
from comment_analyzer.exceptions import AuthError, CommentDataError, PermissionDeniedError
from comment_analyzer.infra.user_repo import (
    InMemoryUserRepository,
    RoleTable,
    UserRepository,
    load_role_table,
    load_seed_users,
)

logger = logging.getLogger(__name__)


class AuthService:
    """
    Mock authentication over an injected UserRepository.

    Every account shares one demo password. Sessions are opaque tokens kept
    in memory for the lifetime of the process.
    """

    def __init__(self, users: UserRepository, roles: RoleTable, demo_password: str):
        self.users = users
        self.roles = roles
        self._demo_password = demo_password
        self._sessions: Dict[str, User] = {}
        self._lock = threading.Lock()

    def _open_session(self, user: User) -> str:
        token = uuid.uuid4().hex
        with self._lock:
            self._sessions[token] = user
        return token

    def login(self, email: str, password: str, role: str) -> tuple[str, User]:
        user = self.users.find_by_email(email)
        if user is None or user.role != role or password != self._demo_password:
            logger.info("login rejected for %s (role=%s)", email, role)
            raise AuthError("invalid email, password or role")
        return self._open_session(user), user

    def register(
        self,
        email: str,
        name: str,
        role: str,
        password: str,
        organization: Optional[str] = None,
        department: Optional[str] = None,
    ) -> tuple[str, User]:
        email = (email or "").strip()
        name = (name or "").strip()
        if not email or "@" not in email:
            raise CommentDataError("a valid email address is required")
        if not name:
            raise CommentDataError("name is required")
        if not password:
            raise CommentDataError("password is required")
        if not self.roles.is_known(role):
            raise CommentDataError(f"unknown role: {role}")

        if self.users.find_by_email(email) is not None:
            raise AuthError("an account with this email already exists")

        user = User(
            id=uuid.uuid4().hex[:12],
            email=email,
            name=name,
            role=role,
            verified=role in self.roles.auto_verified,
            permissions=self.roles.permissions_for(role),
            organization=organization,
            department=department,
        )
        try:
            self.users.add(user)
        except ValueError as e:
            raise AuthError(str(e)) from e

        logger.info("registered %s as %s (verified=%s)", email, role, user.verified)
        return self._open_session(user), user

    def logout(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def current_user(self, token: Optional[str]) -> User:
        user = self._sessions.get(token or "")
        if user is None:
            raise AuthError("not logged in")
        return user

    @staticmethod
    def has_permission(user: Optional[User], permission: str) -> bool:
        return user is not None and permission in user.permissions

    def require_permission(self, token: Optional[str], permission: str) -> User:
        user = self.current_user(token)
        if not self.has_permission(user, permission):
            raise PermissionDeniedError(f"missing permission: {permission}")
        return user


def build_auth_service(demo_password: Optional[str] = None) -> AuthService:
    roles = load_role_table()
    repo = InMemoryUserRepository(load_seed_users(roles))
    password = demo_password if demo_password is not None else load_analysis_config().demo_password
    return AuthService(repo, roles, password)


@lru_cache
def get_auth_service() -> AuthService:
    return build_auth_service()
