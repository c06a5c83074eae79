"""Mapping between named panel settings and persisted state variables.

Most settings are stored one variable per name. The poll intervals are packed
into a single ``PollSettings`` variable as comma-joined positional slots; panel
fields address them as ``PI0`` .. ``PI4``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from carnetpanel.core.errors import SettingsEncodingError
from carnetpanel.core.model import PackedSlot, SettingRef, SettingWrite, SimpleSetting
from carnetpanel.stores.base import StateStore

DEFAULT_NAMESPACE = "urn:rboer-com:serviceId:CarNet1"
POLL_SETTINGS_KEY = "PollSettings"
SLOT_DELIMITER = ","

# Single digit only: slot indices above 9 cannot be addressed by field name.
_PACKED_NAME_RE = re.compile(r"PI([0-9])")
LOGGER = logging.getLogger(__name__)


def resolve_setting_ref(name: str) -> SettingRef:
    match = _PACKED_NAME_RE.fullmatch(name)
    if match:
        return PackedSlot(index=int(match.group(1)))
    return SimpleSetting(name=name)


@dataclass(frozen=True)
class PollSettings:
    """Poll interval slots held in the packed ``PollSettings`` variable."""

    slots: tuple[str, ...] = ()

    @classmethod
    def decode(cls, raw: str | None) -> PollSettings:
        if not raw:
            return cls()
        return cls(tuple(raw.split(SLOT_DELIMITER)))

    def encode(self) -> str:
        return SLOT_DELIMITER.join(self.slots)

    def slot(self, index: int) -> str:
        if 0 <= index < len(self.slots):
            return self.slots[index]
        return ""

    def with_slot(self, index: int, value: str) -> PollSettings:
        if index < 0:
            raise SettingsEncodingError(f"Poll slot index must not be negative, got {index}")
        if SLOT_DELIMITER in value:
            raise SettingsEncodingError(
                f"Poll slot value {value!r} must not contain {SLOT_DELIMITER!r}"
            )
        slots = list(self.slots)
        if index >= len(slots):
            slots.extend([""] * (index + 1 - len(slots)))
        slots[index] = value
        return PollSettings(tuple(slots))

    @property
    def active(self) -> str:
        return self.slot(0)

    @property
    def home_idle(self) -> str:
        return self.slot(1)

    @property
    def away_idle(self) -> str:
        return self.slot(2)

    @property
    def fast_locations(self) -> str:
        return self.slot(3)

    @property
    def vacation_idle(self) -> str:
        return self.slot(4)


class SettingsCodec:
    def __init__(self, store: StateStore, *, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.store = store
        self.namespace = namespace

    def _read(self, device_id: int, key: str) -> str | None:
        try:
            return self.store.read(device_id, self.namespace, key)
        except Exception as exc:
            LOGGER.warning("Reading %s for device #%s failed, treating as unset: %s", key, device_id, exc)
            return None

    def poll_settings(self, device_id: int) -> PollSettings:
        return PollSettings.decode(self._read(device_id, POLL_SETTINGS_KEY))

    def get(self, device_id: int, name: str) -> str:
        return self.get_ref(device_id, resolve_setting_ref(name))

    def get_ref(self, device_id: int, ref: SettingRef) -> str:
        if isinstance(ref, PackedSlot):
            return self.poll_settings(device_id).slot(ref.index)
        value = self._read(device_id, ref.name)
        return value if value is not None else ""

    def set(self, device_id: int, name: str, value: str) -> SettingWrite:
        return self.set_ref(device_id, resolve_setting_ref(name), value)

    def set_ref(self, device_id: int, ref: SettingRef, value: str) -> SettingWrite:
        if isinstance(ref, PackedSlot):
            current = self.store.read(device_id, self.namespace, POLL_SETTINGS_KEY)
            write = SettingWrite(
                key=POLL_SETTINGS_KEY,
                value=PollSettings.decode(current).with_slot(ref.index, value).encode(),
            )
        else:
            write = SettingWrite(key=ref.name, value=value)
        self.store.write(device_id, self.namespace, write.key, write.value)
        LOGGER.debug("Stored %s=%r for device #%s", write.key, write.value, device_id)
        return write
