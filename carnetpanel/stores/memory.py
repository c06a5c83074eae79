"""In-memory state store and device registry."""

from __future__ import annotations

from carnetpanel.core.errors import DeviceNotFoundError
from carnetpanel.core.model import Device
from carnetpanel.stores.base import coerce_disabled


class MemoryBackend:
    """Dict-backed implementation of both StateStore and DeviceRegistry."""

    def __init__(self) -> None:
        self._devices: dict[int, Device] = {}
        self._variables: dict[tuple[int, str, str], str] = {}

    def add_device(self, device_id: int, name: str, *, disabled: object = False) -> Device:
        device = Device(device_id=device_id, name=name, disabled=coerce_disabled(disabled))
        self._devices[device_id] = device
        return device

    def list_devices(self) -> list[Device]:
        return sorted(self._devices.values(), key=lambda d: d.device_id)

    def get_device(self, device_id: int) -> Device:
        device = self._devices.get(device_id)
        if device is None:
            raise DeviceNotFoundError(f"Unknown device #{device_id}")
        return device

    def get_display_name(self, device_id: int) -> str:
        return self.get_device(device_id).name

    def read(self, device_id: int, namespace: str, name: str) -> str | None:
        return self._variables.get((device_id, namespace, name))

    def write(self, device_id: int, namespace: str, name: str, value: str) -> None:
        self._variables[(device_id, namespace, name)] = value
