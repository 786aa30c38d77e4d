from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.constants import EARTH_RADIUS_METERS
from ..core.enums import GeolocationErrorCode


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance on a spherical earth (haversine)."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return EARTH_RADIUS_METERS * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


_GEOLOCATION_MESSAGES = {
    GeolocationErrorCode.PERMISSION_DENIED: (
        "Location permission denied. Allow location access in your browser settings to check in."
    ),
    GeolocationErrorCode.POSITION_UNAVAILABLE: "Location unavailable. Make sure GPS is turned on.",
    GeolocationErrorCode.TIMEOUT: "Timed out while reading your location. Please try again.",
}


def geolocation_error_message(code: int) -> str:
    try:
        return _GEOLOCATION_MESSAGES[GeolocationErrorCode(int(code))]
    except (ValueError, KeyError):
        return "An error occurred while reading your location."
