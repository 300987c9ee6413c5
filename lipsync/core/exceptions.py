"""Exception types raised by the estimator."""


class LipSyncError(Exception):
    """Base class for estimator errors."""


class ConfigurationError(LipSyncError, ValueError):
    """Raised when an estimator is built with an unusable configuration."""
