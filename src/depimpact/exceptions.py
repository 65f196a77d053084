"""Custom exceptions for depimpact."""


class DepImpactError(Exception):
    """Base exception for all depimpact errors."""


class ConfigError(DepImpactError):
    """Configuration-related errors."""


class ExtractionError(DepImpactError):
    """Graph or symbol extraction errors."""


class VCSError(DepImpactError):
    """Version-control command errors."""


class ReportWriteError(DepImpactError):
    """Raised when the impact report cannot be written."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot write impact report to '{path}': {reason}")
        self.path = path
