from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    name: str
    email: str
    role: Role


def _password_matches(password_hash: Optional[str], password: str) -> bool:
    if not password_hash:
        return False
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # e.g. placeholder hashes or corrupted values
        return False


class AuthService:
    """Use case: authenticate a teacher or a student by email and password."""

    def __init__(self, users: UserRepository, students: StudentRepository):
        self._users = users
        self._students = students

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = (email or "").strip()
        password = password or ""

        user = self._users.get_by_email(email) if email else None
        if user and _password_matches(user.password_hash, password):
            return SessionUser(user_id=user.user_id, name=user.name, email=user.email, role=user.role)

        student = self._students.get_by_email(email) if email else None
        if student and _password_matches(student.password_hash, password):
            return SessionUser(user_id=student.student_id, name=student.name, email=student.email, role=Role.STUDENT)

        logger.info("Rejected login for %s", email or "<empty>")
        raise AuthenticationError("Wrong email or password")


class UserService:
    """Use case: manage teacher accounts."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[User]:
        return sorted(self._users.list_all(), key=lambda u: u.name.lower())

    def add_user(self, *, name: str, email: str, password: str) -> User:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("Email is already in use")

        user = User(
            user_id=f"user-{uuid.uuid4().hex}",
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.TEACHER,
            created_at=time.time(),
        )
        self._users.insert(user)
        return user

    def update_user(self, user_id: str, *, name: str, email: str, password: Optional[str] = None) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        name = require_non_empty(name, "Name")
        email = require_email(email)
        other = self._users.get_by_email(email)
        if other and other.user_id != user_id:
            raise ValidationError("Email is already in use")

        password_hash = user.password_hash
        if password and password.strip():
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(password)

        updated = replace(user, name=name, email=email, password_hash=password_hash)
        self._users.update(updated)
        return updated

    def delete_user(self, user_id: str) -> None:
        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")
        if len(self._users.list_all()) <= 1:
            raise ValidationError("Cannot delete the only remaining teacher account")

        if not self._users.delete_by_id(user_id):
            raise ValidationError("Failed to delete user")
