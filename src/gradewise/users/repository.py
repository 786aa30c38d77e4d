from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for teacher accounts.

    Services depend on this interface, never on a concrete storage backend.
    """

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def insert(self, user: User) -> None:
        raise NotImplementedError

    def update(self, user: User) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: str) -> bool:
        raise NotImplementedError
