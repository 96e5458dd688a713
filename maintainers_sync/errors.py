"""Exceptions raised by the maintainers sync."""


class MaintainersSyncError(Exception):
    """Base class for sync failures."""


class ConfigurationError(MaintainersSyncError):
    """Required configuration is missing or invalid."""


class InvalidRosterError(MaintainersSyncError):
    """The persisted roster does not match the expected schema."""
