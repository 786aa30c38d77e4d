from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Who is acting: teachers manage the class, students check in."""

    TEACHER = "teacher"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Daily attendance status as stored per (student, day)."""

    PRESENT = "present"
    LATE = "late"
    SICK = "sick"
    PERMIT = "permit"
    ABSENT = "absent"
    NO_CHECKOUT = "no_checkout"


EXCUSED_STATUSES = frozenset({AttendanceStatus.SICK, AttendanceStatus.PERMIT})
ATTENDED_STATUSES = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.LATE})


class Period(str, Enum):
    """Aggregation window for recaps."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    ALL_TIME = "all-time"


class PointType(str, Enum):
    AWARD = "award"
    VIOLATION = "violation"


class CategoryKind(str, Enum):
    MANUAL = "manual"
    SYSTEM = "system"


class GeolocationErrorCode(int, Enum):
    """Error codes reported by the browser geolocation API."""

    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3
