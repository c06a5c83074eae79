"""Settings and status view-models for one CarNet device."""

from __future__ import annotations

import math
import re

from carnetpanel.core.codec import SettingsCodec
from carnetpanel.core.model import (
    FIELD_KIND_SELECT,
    FieldSpec,
    FieldView,
    OptionView,
    PanelHeader,
    PanelLayout,
    SettingsPanel,
    StatusPanel,
    VehicleStatus,
)
from carnetpanel.stores.base import DeviceRegistry

NOT_A_NUMBER = "NaN"
# Plain decimal notation only; no digit separators, inf or nan spellings.
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

POWER_CHARGE_AVAILABLE = "Charge power available"
POWER_CABLE_NOT_IN_STATION = "Cable in car, but not in charge station"
POWER_CABLE_NOT_LOCKED = "Cable in car, but not locked"
POWER_NOT_CONNECTED = "Not connected"


def _flag(value: str) -> bool:
    return value == "1"


def power_state_label(*, plug_locked: bool, plug_connected: bool, supply_connected: bool) -> str:
    if supply_connected:
        return POWER_CHARGE_AVAILABLE
    if plug_connected:
        return POWER_CABLE_NOT_IN_STATION if plug_locked else POWER_CABLE_NOT_LOCKED
    return POWER_NOT_CONNECTED


def format_coordinate(raw: str) -> str:
    """Format a stored coordinate with exactly four fractional digits, or NaN."""
    if not isinstance(raw, str) or not _DECIMAL_RE.fullmatch(raw.strip()):
        return NOT_A_NUMBER
    value = float(raw)
    if not math.isfinite(value):
        return NOT_A_NUMBER
    return f"{value:.4f}"


class PanelPresenter:
    def __init__(self, registry: DeviceRegistry, codec: SettingsCodec, layout: PanelLayout) -> None:
        self.registry = registry
        self.codec = codec
        self.layout = layout

    def _header(self, device_id: int) -> PanelHeader:
        return PanelHeader(device_id=device_id, display_name=self.registry.get_display_name(device_id))

    def _field_view(self, device_id: int, spec: FieldSpec) -> FieldView:
        value = self.codec.get_ref(device_id, spec.ref)
        options: tuple[OptionView, ...] = ()
        if spec.kind == FIELD_KIND_SELECT and spec.options is not None:
            options = tuple(
                OptionView(value=entry.value, label=entry.label, selected=entry.value == value)
                for entry in self.layout.options.get(spec.options, ())
            )
        return FieldView(
            name=spec.name,
            label=spec.label,
            kind=spec.kind,
            value=value,
            options=options,
            size=spec.size,
        )

    def render_settings_panel(self, device_id: int) -> SettingsPanel:
        device = self.registry.get_device(device_id)
        header = self._header(device_id)
        if device.disabled:
            return SettingsPanel(header=header, disabled=True)
        fields = tuple(self._field_view(device_id, spec) for spec in self.layout.fields)
        return SettingsPanel(header=header, disabled=False, fields=fields)

    def render_status_panel(self, device_id: int) -> StatusPanel:
        device = self.registry.get_device(device_id)
        header = self._header(device_id)
        if device.disabled:
            return StatusPanel(header=header, disabled=True)

        def get(name: str) -> str:
            return self.codec.get(device_id, name)

        status = VehicleStatus(
            car_name=get("CarName"),
            mileage=get("Mileage"),
            latitude=format_coordinate(get("Latitude")),
            longitude=format_coordinate(get("Longitude")),
            at_home=_flag(get("LocationHome")),
            power_state=power_state_label(
                plug_locked=_flag(get("PowerPlugLockState")),
                plug_connected=_flag(get("PowerPlugState")),
                supply_connected=_flag(get("PowerSupplyConnected")),
            ),
            locks=get("LocksStatus"),
            doors=get("DoorsStatus"),
            windows=get("WindowsStatus"),
            lights_on=_flag(get("LightsStatus")),
            sunroof=get("SunroofStatus"),
            subscription_expiry=get("PackageServiceExpDate"),
        )
        return StatusPanel(header=header, disabled=False, status=status)
