from __future__ import annotations

from ..common.geo import GeoPoint
from ..common.validators import require_hhmm, require_min_length, require_range
from ..core.constants import MAX_CHECK_IN_RADIUS_METERS, MIN_CHECK_IN_RADIUS_METERS, MIN_NAME_LENGTH
from ..core.exceptions import ValidationError
from .model import AppSettings
from .repository import SettingsRepository


class SettingsService:
    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def get_settings(self) -> AppSettings:
        return self._settings.get()

    def save_settings(
        self,
        *,
        school_name: str,
        school_logo_url: str,
        latitude: float,
        longitude: float,
        check_in_radius: float,
        late_time: str,
        check_out_time: str,
    ) -> AppSettings:
        school_name = require_min_length((school_name or "").strip(), "School name", MIN_NAME_LENGTH)
        logo = (school_logo_url or "").strip()
        if logo and not logo.startswith(("http://", "https://")):
            raise ValidationError("Logo URL is not valid")

        try:
            lat = float(latitude)
            lon = float(longitude)
            radius = float(check_in_radius)
        except (TypeError, ValueError):
            raise ValidationError("Location and radius must be numbers")

        settings = AppSettings(
            school_name=school_name,
            school_logo_url=logo,
            location=GeoPoint(
                latitude=require_range(lat, "Latitude", -90, 90),
                longitude=require_range(lon, "Longitude", -180, 180),
            ),
            check_in_radius=require_range(radius, "Check-in radius", MIN_CHECK_IN_RADIUS_METERS, MAX_CHECK_IN_RADIUS_METERS),
            late_time=require_hhmm(late_time, "Late time"),
            check_out_time=require_hhmm(check_out_time, "Check-out time"),
        )
        self._settings.save(settings)
        return settings
