# comment_analyzer/infra/user_repo.py
from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Tuple

from comment_analyzer.domain.models import User
from comment_analyzer.exceptions import LexiconLoadError
from comment_analyzer.infra.paths import ROLES_PATH, USERS_PATH
from comment_analyzer.infra.yaml_io import load_yaml


@dataclass(frozen=True)
class RoleTable:
    """Static role configuration: permissions and display labels per role."""

    permissions: Dict[str, Tuple[str, ...]]
    labels: Dict[str, str]
    auto_verified: Tuple[str, ...]

    def permissions_for(self, role: str) -> Tuple[str, ...]:
        return self.permissions.get(role, ())

    def is_known(self, role: str) -> bool:
        return role in self.permissions


def load_role_table(path: Path = ROLES_PATH) -> RoleTable:
    data = load_yaml(path) or {}
    roles = data.get("roles")
    if not isinstance(roles, dict) or not roles:
        raise LexiconLoadError(f"'roles' section missing in {path.name}")

    permissions: Dict[str, Tuple[str, ...]] = {}
    labels: Dict[str, str] = {}
    for role, entry in roles.items():
        entry = entry or {}
        permissions[role] = tuple(str(p) for p in entry.get("permissions") or [])
        labels[role] = str(entry.get("label") or role)

    return RoleTable(
        permissions=permissions,
        labels=labels,
        auto_verified=tuple(data.get("auto_verified_roles") or []),
    )


class UserRepository(Protocol):
    """Where user records live. Implementations return immutable User records."""

    def find_by_email(self, email: str) -> Optional[User]: ...

    def add(self, user: User) -> User: ...

    def all(self) -> List[User]: ...


class InMemoryUserRepository:
    """Process-local user store, keyed by lower-cased email."""

    def __init__(self, users: Optional[List[User]] = None):
        self._lock = threading.Lock()
        self._users: Dict[str, User] = {}
        for user in users or []:
            self._users[user.email.lower()] = user

    def find_by_email(self, email: str) -> Optional[User]:
        return self._users.get(email.strip().lower())

    def add(self, user: User) -> User:
        key = user.email.strip().lower()
        with self._lock:
            if key in self._users:
                raise ValueError(f"user already exists: {user.email}")
            self._users[key] = user
        return user

    def all(self) -> List[User]:
        return list(self._users.values())


def _user_from_entry(entry: Dict[str, Any], roles: RoleTable) -> User:
    role = str(entry["role"])
    return User(
        id=str(entry["id"]),
        email=str(entry["email"]),
        name=str(entry["name"]),
        role=role,
        verified=bool(entry.get("verified", False)),
        permissions=roles.permissions_for(role),
        organization=entry.get("organization"),
        department=entry.get("department"),
    )


def load_seed_users(roles: RoleTable, path: Path = USERS_PATH) -> List[User]:
    """Demo accounts from users.yaml."""
    data = load_yaml(path) or {}
    entries = data.get("users") or []
    try:
        return [_user_from_entry(e, roles) for e in entries]
    except KeyError as e:
        raise LexiconLoadError(f"user entry without {e} in {path.name}") from e
