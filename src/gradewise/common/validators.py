from __future__ import annotations

import re
from datetime import time
from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_hhmm

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: str, field_name: str = "Email") -> str:
    value = require_non_empty(value, field_name)
    if not _EMAIL_RE.match(value):
        raise ValidationError(f"{field_name} is not a valid email address")
    return value


def require_range(value: float, field_name: str, lo: float, hi: float) -> float:
    if value is None or not lo <= value <= hi:
        raise ValidationError(f"{field_name} must be between {lo} and {hi}")
    return value


def require_hhmm(value: str, field_name: str) -> time:
    try:
        return parse_hhmm(str(value or ""))
    except ValueError:
        raise ValidationError(f"{field_name} must use the HH:MM format")


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None
