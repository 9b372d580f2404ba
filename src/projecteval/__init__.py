"""Rubric-driven project evaluation with pluggable scoring backends."""

from __future__ import annotations

from .errors import (
    ConfigurationError,
    EvaluationError,
    ProviderHttpError,
    ResponseParseError,
    StorageReadError,
)
from .service import ConnectionTestResult, EvaluationService

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ConnectionTestResult",
    "EvaluationError",
    "EvaluationService",
    "ProviderHttpError",
    "ResponseParseError",
    "StorageReadError",
    "__version__",
]
