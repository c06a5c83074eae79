"""State store and device registry interfaces."""

from __future__ import annotations

from typing import Protocol

from carnetpanel.core.model import Device


class StateStore(Protocol):
    def read(self, device_id: int, namespace: str, name: str) -> str | None:
        """Return the stored value, or None when the variable is unset."""

    def write(self, device_id: int, namespace: str, name: str, value: str) -> None:
        """Persist a value immediately."""


class DeviceRegistry(Protocol):
    def get_device(self, device_id: int) -> Device:
        """Return the device, raising DeviceNotFoundError for unknown ids."""

    def get_display_name(self, device_id: int) -> str:
        """Return the name the host shows for the device."""


def coerce_disabled(value: object) -> bool:
    """Normalize the host's disabled attribute, which may arrive as bool, int, or str."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true"}
    return False
