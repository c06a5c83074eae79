"""Stable public API for host shells embedding the CarNet panels.

Hosts open a settings or status panel for a device id and forward each field
edit to `Client.update_field`. Backends are injected here; the `core` and
`stores` modules may change shape between releases.
"""

from __future__ import annotations

from carnetpanel.core.codec import PollSettings
from carnetpanel.core.config import PanelConfig
from carnetpanel.core.errors import (
    CarNetPanelError,
    DeviceNotFoundError,
    FieldResolutionError,
    LayoutLoadError,
    LayoutValidationError,
    SettingsEncodingError,
    StoreAccessError,
    StoreError,
)
from carnetpanel.core.model import (
    Device,
    FieldView,
    OptionEntry,
    OptionView,
    PanelHeader,
    SettingsPanel,
    SettingWrite,
    StatusPanel,
    UpdateResult,
    VehicleStatus,
)
from carnetpanel.core.service import PanelService
from carnetpanel.stores.base import DeviceRegistry, StateStore
from carnetpanel.stores.memory import MemoryBackend

__all__ = [
    "CarNetPanelError",
    "DeviceNotFoundError",
    "FieldResolutionError",
    "LayoutLoadError",
    "LayoutValidationError",
    "SettingsEncodingError",
    "StoreAccessError",
    "StoreError",
    "Device",
    "FieldView",
    "OptionEntry",
    "OptionView",
    "PanelHeader",
    "SettingsPanel",
    "SettingWrite",
    "StatusPanel",
    "UpdateResult",
    "VehicleStatus",
    "PollSettings",
    "PanelConfig",
    "DeviceRegistry",
    "StateStore",
    "MemoryBackend",
    "Client",
]


class Client:
    """Public client exposing the three panel entry points.

    A host shell calls `settings_panel` / `status_panel` when the user opens a
    panel for a device and `update_field` whenever a field is edited.
    """

    def __init__(
        self,
        *,
        store: StateStore | None = None,
        registry: DeviceRegistry | None = None,
        config: PanelConfig | None = None,
    ) -> None:
        self._service = PanelService(store=store, registry=registry, config=config)

    @property
    def load_warnings(self) -> tuple[str, ...]:
        return self._service.load_warnings

    def settings_panel(self, device_id: int) -> SettingsPanel:
        return self._service.settings_panel(device_id)

    def status_panel(self, device_id: int) -> StatusPanel:
        return self._service.status_panel(device_id)

    def update_field(self, device_id: int, field: str, value: str) -> UpdateResult:
        return self._service.update_field(device_id, field, value)

    def get_setting(self, device_id: int, name: str) -> str:
        return self._service.codec.get(device_id, name)

    def get_poll_settings(self, device_id: int) -> PollSettings:
        return self._service.codec.poll_settings(device_id)
