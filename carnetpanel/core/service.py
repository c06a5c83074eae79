"""Service layer used by the CLI and host panel shells."""

from __future__ import annotations

from carnetpanel.core.codec import SettingsCodec
from carnetpanel.core.config import PanelConfig
from carnetpanel.core.errors import CarNetPanelError, FieldResolutionError
from carnetpanel.core.layout_loader import load_layout
from carnetpanel.core.model import (
    FIELD_KIND_SELECT,
    Device,
    FieldSpec,
    OptionEntry,
    SettingsPanel,
    StatusPanel,
    UpdateResult,
)
from carnetpanel.core.presenter import PanelPresenter
from carnetpanel.core.updates import UpdateHandler
from carnetpanel.stores.base import DeviceRegistry, StateStore
from carnetpanel.stores.json_file import JsonFileBackend


class PanelService:
    def __init__(
        self,
        *,
        store: StateStore | None = None,
        registry: DeviceRegistry | None = None,
        config: PanelConfig | None = None,
    ) -> None:
        self.config = config or PanelConfig.from_env()
        if store is None:
            store = JsonFileBackend(self.config.store_path)
        self.store = store
        self.registry = registry or store
        loaded = load_layout()
        self.layout = loaded.layout
        self.load_warnings = loaded.warnings
        self.codec = SettingsCodec(self.store, namespace=self.config.namespace)
        self.presenter = PanelPresenter(self.registry, self.codec, self.layout)
        self.updates = UpdateHandler(self.codec)

    def settings_panel(self, device_id: int) -> SettingsPanel:
        return self.presenter.render_settings_panel(device_id)

    def status_panel(self, device_id: int) -> StatusPanel:
        return self.presenter.render_status_panel(device_id)

    def update_field(self, device_id: int, field: str, value: str) -> UpdateResult:
        return self.updates.apply_field_update(device_id, field, value)

    def field_spec(self, field: str) -> FieldSpec:
        spec = self.layout.field(field)
        if spec is None:
            available = ", ".join(f.name for f in self.layout.fields)
            raise FieldResolutionError(f"Unknown field '{field}'. Available: {available}")
        return spec

    def field_values(self, device_id: int, field: str) -> tuple[FieldSpec, str, tuple[OptionEntry, ...]]:
        spec = self.field_spec(field)
        # Raises DeviceNotFoundError for unknown ids.
        self.registry.get_device(device_id)
        current = self.codec.get_ref(device_id, spec.ref)
        options: tuple[OptionEntry, ...] = ()
        if spec.kind == FIELD_KIND_SELECT and spec.options is not None:
            options = self.layout.options.get(spec.options, ())
        return spec, current, options

    def option_catalogs(self) -> dict[str, tuple[OptionEntry, ...]]:
        return dict(sorted(self.layout.options.items()))

    def list_devices(self) -> list[Device]:
        lister = getattr(self.registry, "list_devices", None)
        if lister is None:
            raise CarNetPanelError("The configured device registry cannot list devices.")
        return lister()

    def add_device(self, device_id: int, name: str, *, disabled: bool = False) -> Device:
        adder = getattr(self.registry, "add_device", None)
        if adder is None:
            raise CarNetPanelError("The configured device registry does not accept new devices.")
        return adder(device_id, name, disabled=disabled)
