"""Environment-driven configuration for carnetpanel."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path

from carnetpanel.core.codec import DEFAULT_NAMESPACE

DEFAULT_LOG_LEVEL = "WARNING"


def _default_store_path() -> Path:
    xdg_data = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local/share"))
    return xdg_data / "carnetpanel" / "store.json"


@dataclasses.dataclass(frozen=True)
class PanelConfig:
    """Runtime configuration.

    Parameters
    ----------
    store_path : Path
        JSON file used by the file backend.
    namespace : str
        State variable namespace of the integration instance.
    log_level : str
        Logging level name applied by the CLI.
    """

    store_path: Path = dataclasses.field(default_factory=_default_store_path)
    namespace: str = DEFAULT_NAMESPACE
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> PanelConfig:
        store = os.environ.get("CARNETPANEL_STORE")
        return cls(
            store_path=Path(store).expanduser() if store else _default_store_path(),
            namespace=os.environ.get("CARNETPANEL_NAMESPACE") or DEFAULT_NAMESPACE,
            log_level=(os.environ.get("CARNETPANEL_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )

    def with_overrides(self, *, store_path: Path | None = None, namespace: str | None = None) -> PanelConfig:
        changes: dict[str, object] = {}
        if store_path is not None:
            changes["store_path"] = store_path
        if namespace:
            changes["namespace"] = namespace
        return dataclasses.replace(self, **changes)
