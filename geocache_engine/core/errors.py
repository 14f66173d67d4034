# ========================
# file: geocache_engine/core/errors.py
# ========================
class GeocacheError(Exception):
    """Base error for the geocache engine."""


class ConfigError(GeocacheError):
    """Raised when a config source cannot be read."""


class ConfigValidationError(ConfigError):
    """Raised when a config fails validation."""


class SnapshotError(GeocacheError):
    """Raised when a saved snapshot cannot be decoded."""


class TransferError(GeocacheError):
    """Raised on an invalid direct balance mutation."""
