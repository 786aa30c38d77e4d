from __future__ import annotations

import logging

from ..common.datetime_utils import format_hhmm, parse_hhmm
from ..common.geo import GeoPoint
from ..core.constants import SETTINGS_KEY
from ..database.json_collection import load_json, save_json
from ..database.store import KeyValueStore
from .model import AppSettings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


def _encode(s: AppSettings) -> dict:
    return {
        "schoolName": s.school_name,
        "schoolLogoUrl": s.school_logo_url,
        "location": {"latitude": s.location.latitude, "longitude": s.location.longitude},
        "checkInRadius": s.check_in_radius,
        "lateTime": format_hhmm(s.late_time),
        "checkOutTime": format_hhmm(s.check_out_time),
    }


def _decode(raw: dict) -> AppSettings:
    location = raw["location"]
    return AppSettings(
        school_name=str(raw["schoolName"]),
        school_logo_url=str(raw.get("schoolLogoUrl") or ""),
        location=GeoPoint(latitude=float(location["latitude"]), longitude=float(location["longitude"])),
        check_in_radius=float(raw["checkInRadius"]),
        late_time=parse_hhmm(raw["lateTime"]),
        check_out_time=parse_hhmm(raw["checkOutTime"]),
    )


class KVSettingsRepository(SettingsRepository):
    """Settings blob loaded once at startup, merged over the in-code defaults."""

    def __init__(self, store: KeyValueStore):
        self._store = store
        raw = load_json(store, SETTINGS_KEY, _encode(AppSettings()))
        try:
            self._settings = _decode(raw)
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.error("Unreadable settings under storage key %r, using defaults", SETTINGS_KEY)
            self._settings = AppSettings()

    def get(self) -> AppSettings:
        return self._settings

    def save(self, settings: AppSettings) -> None:
        self._settings = settings
        save_json(self._store, SETTINGS_KEY, _encode(settings))
