from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from carnetpanel.core.errors import DeviceNotFoundError, StoreAccessError
from carnetpanel.stores.json_file import JsonFileBackend


def test_missing_file_behaves_as_empty_store(tmp_path: Path) -> None:
    backend = JsonFileBackend(tmp_path / "store.json")
    assert backend.read(1, "ns", "Email") is None
    assert backend.list_devices() == []
    with pytest.raises(DeviceNotFoundError):
        backend.get_device(1)


def test_write_persists_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "store.json"
    JsonFileBackend(path).add_device(12, "Golf")
    JsonFileBackend(path).write(12, "ns", "PollSettings", "5,10,,30,240")

    backend = JsonFileBackend(path)
    assert backend.read(12, "ns", "PollSettings") == "5,10,,30,240"
    assert backend.read(12, "other", "PollSettings") is None
    assert backend.get_display_name(12) == "Golf"

    doc = json.loads(path.read_text(encoding="utf-8"))
    assert doc["variables"]["12"]["ns"]["PollSettings"] == "5,10,,30,240"
    assert doc["devices"]["12"] == {"name": "Golf", "disabled": False}
    assert not list(path.parent.glob(".store-*"))


def test_disabled_attribute_is_normalized(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text(
        json.dumps(
            {
                "devices": {
                    "1": {"name": "A", "disabled": "1"},
                    "2": {"name": "B", "disabled": 0},
                    "3": {"name": "C", "disabled": 1},
                }
            }
        ),
        encoding="utf-8",
    )
    backend = JsonFileBackend(path)

    assert [(d.device_id, d.disabled) for d in backend.list_devices()] == [(1, True), (2, False), (3, True)]


def test_non_string_values_read_as_strings(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text(
        json.dumps({"variables": {"1": {"ns": {"Mileage": 12345, "Gone": None}}}}),
        encoding="utf-8",
    )
    backend = JsonFileBackend(path)

    assert backend.read(1, "ns", "Mileage") == "12345"
    assert backend.read(1, "ns", "Gone") is None


def test_malformed_file_raises_store_access_error(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StoreAccessError):
        JsonFileBackend(path).read(1, "ns", "Email")


def test_variable_write_does_not_register_device(tmp_path: Path) -> None:
    backend = JsonFileBackend(tmp_path / "store.json")

    backend.write(99, "ns", "Email", "x@example.com")

    assert backend.read(99, "ns", "Email") == "x@example.com"
    assert backend.list_devices() == []
    with pytest.raises(DeviceNotFoundError):
        backend.get_device(99)


def test_add_device_keeps_existing_variables(tmp_path: Path) -> None:
    backend = JsonFileBackend(tmp_path / "store.json")
    backend.write(5, "ns", "LogLevel", "8")

    backend.add_device(5, "Arteon", disabled=True)

    assert backend.get_device(5).disabled
    assert backend.read(5, "ns", "LogLevel") == "8"


def test_failed_save_removes_temporary_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    backend = JsonFileBackend(path)
    backend.add_device(1, "Golf")

    def failing_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", failing_replace)

    with pytest.raises(StoreAccessError):
        backend.write(1, "ns", "Email", "x@example.com")

    assert not list(tmp_path.glob(".store-*"))
    assert JsonFileBackend(path).read(1, "ns", "Email") is None
