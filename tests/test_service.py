from __future__ import annotations

from pathlib import Path

import pytest

from carnetpanel.core.config import PanelConfig
from carnetpanel.core.errors import CarNetPanelError, DeviceNotFoundError, FieldResolutionError
from carnetpanel.core.service import PanelService
from carnetpanel.stores.json_file import JsonFileBackend
from carnetpanel.stores.memory import MemoryBackend


class HostStore:
    """Store without registry capabilities, as a host would provide it."""

    def __init__(self) -> None:
        self.values: dict[tuple[int, str, str], str] = {}

    def read(self, device_id: int, namespace: str, name: str) -> str | None:
        return self.values.get((device_id, namespace, name))

    def write(self, device_id: int, namespace: str, name: str, value: str) -> None:
        self.values[(device_id, namespace, name)] = value


def test_update_then_render_round_trip() -> None:
    backend = MemoryBackend()
    backend.add_device(12, "Golf")
    service = PanelService(store=backend)

    assert service.update_field(12, "PI3", "15").applied
    assert service.update_field(12, "Language", "DE").applied

    fields = {f.name: f for f in service.settings_panel(12).fields}
    assert fields["PI3"].selected.label == "15 Min"
    assert fields["PI0"].value == ""
    assert fields["Language"].selected.label == "Deutschland"


def test_separate_store_and_registry() -> None:
    registry = MemoryBackend()
    registry.add_device(1, "Tiguan")
    store = HostStore()
    service = PanelService(store=store, registry=registry, config=PanelConfig(namespace="urn:host"))

    service.update_field(1, "Email", "a@b.c")

    assert store.values == {(1, "urn:host", "Email"): "a@b.c"}
    assert service.settings_panel(1).fields[0].value == "a@b.c"
    with pytest.raises(CarNetPanelError):
        PanelService(store=store).list_devices()


def test_field_values_for_select_and_text() -> None:
    backend = MemoryBackend()
    backend.add_device(2, "Up")
    service = PanelService(store=backend)
    service.update_field(2, "LogLevel", "10")

    spec, current, options = service.field_values(2, "LogLevel")
    assert spec.label == "Log level"
    assert current == "10"
    assert [o.label for o in options] == ["Error", "Warning", "Info", "Debug", "Test Debug"]

    spec, current, options = service.field_values(2, "NoPollWindow")
    assert current == ""
    assert options == ()


def test_field_values_unknown_field_lists_available() -> None:
    backend = MemoryBackend()
    backend.add_device(2, "Up")
    service = PanelService(store=backend)

    with pytest.raises(FieldResolutionError) as exc:
        service.field_values(2, "Horn")

    assert "Available:" in str(exc.value)
    assert "PI0" in str(exc.value)


def test_field_values_unknown_device() -> None:
    service = PanelService(store=MemoryBackend())
    with pytest.raises(DeviceNotFoundError):
        service.field_values(42, "Email")


def test_default_backend_is_json_file(tmp_path: Path) -> None:
    config = PanelConfig(store_path=tmp_path / "store.json")
    service = PanelService(config=config)
    service.add_device(7, "ID.3")
    service.update_field(7, "PI1", "30")

    assert isinstance(service.store, JsonFileBackend)
    assert [d.name for d in service.list_devices()] == ["ID.3"]
    assert PanelService(config=config).codec.poll_settings(7).home_idle == "30"
