from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a teacher account.

    Note: plain data object, no storage access here.
    """

    user_id: str
    name: str
    email: str
    password_hash: str
    role: Role = Role.TEACHER
    created_at: float = 0.0
