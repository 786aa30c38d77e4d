from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a student, who can log in and check in."""

    student_id: str
    name: str
    email: str
    password_hash: Optional[str] = None
    photo_url: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    parent_phone: Optional[str] = None
    position_id: Optional[str] = None
    device_id: Optional[str] = None
    created_at: float = 0.0
