"""Domain-specific errors for carnetpanel."""


class CarNetPanelError(Exception):
    """Base error for carnetpanel."""


class LayoutValidationError(CarNetPanelError):
    """Raised when a panel layout file does not conform to schema or semantics."""


class LayoutLoadError(CarNetPanelError):
    """Raised when reading panel layout sources fails."""


class DeviceNotFoundError(CarNetPanelError):
    """Raised when the device registry has no entry for a device id."""


class SettingsEncodingError(CarNetPanelError):
    """Raised when a value cannot be encoded into its persisted form."""


class FieldResolutionError(CarNetPanelError):
    """Raised when a field name is not part of the panel layout."""


class StoreError(CarNetPanelError):
    """Base state store error."""


class StoreAccessError(StoreError):
    """Raised when the backing store cannot be read or written."""
