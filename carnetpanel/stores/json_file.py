"""JSON file backed state store and device registry."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from carnetpanel.core.errors import DeviceNotFoundError, StoreAccessError
from carnetpanel.core.model import Device
from carnetpanel.stores.base import coerce_disabled

LOGGER = logging.getLogger(__name__)


class JsonFileBackend:
    """Persists devices and their state variables in a single JSON document.

    Layout::

        {"devices": {"<id>": {"name": ..., "disabled": ...}},
         "variables": {"<id>": {"<namespace>": {"<name>": ...}}}}

    Only `add_device` creates registry entries; variable writes never do.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {"devices": {}, "variables": {}}
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StoreAccessError(f"Could not read store file {self.path}: {exc}") from exc
        try:
            doc = json.loads(content) if content.strip() else {}
        except json.JSONDecodeError as exc:
            raise StoreAccessError(f"Invalid JSON in store file {self.path}: {exc}") from exc
        if not isinstance(doc, dict):
            raise StoreAccessError(f"Store file {self.path} must contain an object at root")
        for section in ("devices", "variables"):
            if not isinstance(doc.setdefault(section, {}), dict):
                raise StoreAccessError(f"Store file {self.path} has a non-object '{section}' entry")
        return doc

    def _save(self, doc: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".store-", suffix=".json", dir=self.path.parent)
        except OSError as exc:
            raise StoreAccessError(f"Could not write store file {self.path}: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(doc, handle, indent=2, sort_keys=True, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as exc:
            try:
                os.unlink(tmp_name)
            except OSError:
                LOGGER.warning("Could not remove temporary store file %s", tmp_name)
            raise StoreAccessError(f"Could not write store file {self.path}: {exc}") from exc

    def _device_entry(self, doc: dict[str, Any], device_id: int) -> dict[str, Any] | None:
        entry = doc["devices"].get(str(device_id))
        return entry if isinstance(entry, dict) else None

    def add_device(self, device_id: int, name: str, *, disabled: object = False) -> Device:
        doc = self._load()
        entry = {"name": name, "disabled": coerce_disabled(disabled)}
        doc["devices"][str(device_id)] = entry
        self._save(doc)
        LOGGER.debug("Registered device #%s (%s) in %s", device_id, name, self.path)
        return Device(device_id=device_id, name=name, disabled=entry["disabled"])

    def list_devices(self) -> list[Device]:
        doc = self._load()
        devices: list[Device] = []
        for key, entry in doc["devices"].items():
            if not isinstance(entry, dict):
                continue
            try:
                device_id = int(key)
            except ValueError:
                LOGGER.warning("Skipping store entry with non-numeric device id %r", key)
                continue
            devices.append(
                Device(
                    device_id=device_id,
                    name=str(entry.get("name", "")),
                    disabled=coerce_disabled(entry.get("disabled", False)),
                )
            )
        return sorted(devices, key=lambda d: d.device_id)

    def get_device(self, device_id: int) -> Device:
        entry = self._device_entry(self._load(), device_id)
        if entry is None:
            raise DeviceNotFoundError(f"Unknown device #{device_id} in {self.path}")
        return Device(
            device_id=device_id,
            name=str(entry.get("name", "")),
            disabled=coerce_disabled(entry.get("disabled", False)),
        )

    def get_display_name(self, device_id: int) -> str:
        return self.get_device(device_id).name

    def read(self, device_id: int, namespace: str, name: str) -> str | None:
        variables = self._load()["variables"].get(str(device_id))
        if not isinstance(variables, dict):
            return None
        value = variables.get(namespace, {}).get(name)
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

    def write(self, device_id: int, namespace: str, name: str, value: str) -> None:
        doc = self._load()
        doc["variables"].setdefault(str(device_id), {}).setdefault(namespace, {})[name] = value
        self._save(doc)
