from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time

from ..common.geo import GeoPoint
from ..core.constants import (
    DEFAULT_CHECK_IN_RADIUS_METERS,
    DEFAULT_CHECK_OUT_TIME,
    DEFAULT_LATE_TIME,
    DEFAULT_SCHOOL_LATITUDE,
    DEFAULT_SCHOOL_LOGO_URL,
    DEFAULT_SCHOOL_LONGITUDE,
    DEFAULT_SCHOOL_NAME,
)


@dataclass(frozen=True)
class AppSettings:
    """Process-wide school configuration read by check-in and scoring."""

    school_name: str = DEFAULT_SCHOOL_NAME
    school_logo_url: str = DEFAULT_SCHOOL_LOGO_URL
    location: GeoPoint = field(
        default_factory=lambda: GeoPoint(latitude=DEFAULT_SCHOOL_LATITUDE, longitude=DEFAULT_SCHOOL_LONGITUDE)
    )
    check_in_radius: float = DEFAULT_CHECK_IN_RADIUS_METERS
    late_time: time = DEFAULT_LATE_TIME
    check_out_time: time = DEFAULT_CHECK_OUT_TIME
