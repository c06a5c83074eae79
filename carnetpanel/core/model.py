"""Core data models used across codec, presenter, service, and CLI."""

from __future__ import annotations

from dataclasses import dataclass

FIELD_KIND_PASSWORD = "password"
FIELD_KIND_SELECT = "select"

DISABLED_MESSAGE = "Plugin is disabled in Attributes."


@dataclass(frozen=True)
class Device:
    device_id: int
    name: str
    disabled: bool = False


@dataclass(frozen=True)
class SimpleSetting:
    name: str


@dataclass(frozen=True)
class PackedSlot:
    index: int


SettingRef = SimpleSetting | PackedSlot


@dataclass(frozen=True)
class OptionEntry:
    value: str
    label: str


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    kind: str
    ref: SettingRef
    options: str | None = None
    size: int = 30


@dataclass(frozen=True)
class PanelLayout:
    options: dict[str, tuple[OptionEntry, ...]]
    fields: tuple[FieldSpec, ...]

    def field(self, name: str) -> FieldSpec | None:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None


@dataclass(frozen=True)
class SettingWrite:
    key: str
    value: str


@dataclass(frozen=True)
class OptionView:
    value: str
    label: str
    selected: bool


@dataclass(frozen=True)
class FieldView:
    name: str
    label: str
    kind: str
    value: str
    options: tuple[OptionView, ...] = ()
    size: int = 30

    @property
    def masked(self) -> bool:
        return self.kind == FIELD_KIND_PASSWORD

    @property
    def reveal_toggle(self) -> bool:
        """Password fields carry an explicit user-toggleable reveal control."""
        return self.kind == FIELD_KIND_PASSWORD

    @property
    def selected(self) -> OptionView | None:
        for option in self.options:
            if option.selected:
                return option
        return None


@dataclass(frozen=True)
class PanelHeader:
    device_id: int
    display_name: str

    @property
    def title(self) -> str:
        return f"Device #{self.device_id}   {self.display_name}"


@dataclass(frozen=True)
class SettingsPanel:
    header: PanelHeader
    disabled: bool
    fields: tuple[FieldView, ...] = ()

    @property
    def message(self) -> str | None:
        return DISABLED_MESSAGE if self.disabled else None


@dataclass(frozen=True)
class VehicleStatus:
    car_name: str
    mileage: str
    latitude: str
    longitude: str
    at_home: bool
    power_state: str
    locks: str
    doors: str
    windows: str
    lights_on: bool
    sunroof: str
    subscription_expiry: str


@dataclass(frozen=True)
class StatusPanel:
    header: PanelHeader
    disabled: bool
    status: VehicleStatus | None = None

    @property
    def message(self) -> str | None:
        return DISABLED_MESSAGE if self.disabled else None

    def rows(self) -> tuple[tuple[str, str], ...]:
        if self.status is None:
            return ()
        status = self.status
        return (
            ("CarNet subscription name", status.car_name),
            ("Mileage", f"{status.mileage} Km"),
            ("Car location", "Home" if status.at_home else "Away"),
            ("Position", f"Latitude : {status.latitude}, Longitude : {status.longitude}"),
            ("Power Status", status.power_state),
            ("Locks Status", status.locks),
            ("Doors Status", status.doors),
            ("Windows Status", status.windows),
            ("Lights Status", "On" if status.lights_on else "Off"),
            ("Sunroof Status", status.sunroof),
            ("Subscription expiry date", status.subscription_expiry),
        )


@dataclass(frozen=True)
class UpdateResult:
    device_id: int
    field: str
    value: str
    applied: bool
    write: SettingWrite | None = None
    error: str | None = None
