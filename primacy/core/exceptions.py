class PrimacyError(Exception):
    """Base exception for PRIMACY."""


class NotReachableError(PrimacyError):
    """Raised when a module has neither recorded arguments nor a prior result."""


class MalformedArgumentError(PrimacyError):
    """Raised when a stage argument is not well-formed JSON."""


class StageFailedError(PrimacyError):
    """Raised when an external stage reports a failure."""


class ConfigError(PrimacyError):
    """Raised when the application config is invalid."""
