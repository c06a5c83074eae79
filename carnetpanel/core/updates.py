"""Field edits from the settings panel routed into the state store."""

from __future__ import annotations

import logging

from carnetpanel.core.codec import SettingsCodec, resolve_setting_ref
from carnetpanel.core.model import UpdateResult

LOGGER = logging.getLogger(__name__)


class UpdateHandler:
    def __init__(self, codec: SettingsCodec) -> None:
        self.codec = codec

    def apply_field_update(self, device_id: int, field_name: str, new_value: str) -> UpdateResult:
        try:
            write = self.codec.set_ref(device_id, resolve_setting_ref(field_name), new_value)
        except Exception as exc:
            # The panel stays usable; this edit is dropped.
            LOGGER.error("Updating %s for device #%s failed: %s", field_name, device_id, exc)
            return UpdateResult(
                device_id=device_id,
                field=field_name,
                value=new_value,
                applied=False,
                error=str(exc),
            )
        return UpdateResult(device_id=device_id, field=field_name, value=new_value, applied=True, write=write)
