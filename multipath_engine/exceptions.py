"""Project-wide exception types."""

class MultiPathError(Exception):
    """Base exception for all engine errors."""


class ConfigError(MultiPathError):
    """Raised when configuration is missing or malformed."""


class ConfigValidationError(ConfigError):
    """Raised when validation fails for supplied configuration."""


class ConfigConflictError(ConfigError):
    """Raised when incompatible configuration options are provided."""


class CovarianceDecompositionError(ConfigValidationError):
    """Raised when a covariance matrix cannot be factorised into a correlation transform."""


class UnsupportedOperationError(MultiPathError):
    """Raised when a generator is asked for a capability it does not provide."""


class PathGenerationError(MultiPathError):
    """Raised when a generator is in a state that cannot produce the requested path."""
