"""
Error taxonomy for the return analysis engine.

Every error is recoverable: the caller fixes its configuration or supplies
a longer price series and tries again.
"""

from typing import Any, Dict, Optional


class AnalysisError(ValueError):
    """Base class for analysis failures that can be reported to the user."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class InputValidationError(AnalysisError):
    """Caller configuration is invalid; no computation was attempted."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field


class InsufficientDataError(AnalysisError):
    """Price series is shorter than the window the configuration requires."""

    def __init__(self, message: str, required: int = 0, available: int = 0, **kwargs):
        super().__init__(message, **kwargs)
        self.required = required
        self.available = available


class NoValidSamplesError(AnalysisError):
    """Every candidate start position was skipped."""


class EmptyInputError(AnalysisError):
    """A summary was requested for zero return samples."""


class AnalysisCancelledError(AnalysisError):
    """Cone computation was abandoned by the caller."""

    def __init__(self, message: str, completed_checkpoints: int = 0, **kwargs):
        super().__init__(message, **kwargs)
        self.completed_checkpoints = completed_checkpoints
