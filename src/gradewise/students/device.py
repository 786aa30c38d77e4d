from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.exceptions import DeviceMismatchError, ValidationError


@dataclass(frozen=True)
class DeviceBinding:
    """unbound -> bound(device_id); reset() goes back to unbound.

    The first device used to check in becomes the student's device; later
    check-ins must come from it until a teacher resets the binding.
    """

    device_id: Optional[str] = None

    @property
    def is_bound(self) -> bool:
        return self.device_id is not None

    def bind(self, device_id: str) -> "DeviceBinding":
        device_id = (device_id or "").strip()
        if not device_id:
            raise ValidationError("Device identifier is required")
        if not self.is_bound:
            return DeviceBinding(device_id=device_id)
        if self.device_id != device_id:
            raise DeviceMismatchError(
                "Unregistered device. Check in with the device you used the first time, "
                "or ask your teacher to reset your device."
            )
        return self

    def reset(self) -> "DeviceBinding":
        return DeviceBinding()
