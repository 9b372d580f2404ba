"""Typed errors raised by the evaluation core."""

from __future__ import annotations


class EvaluationError(Exception):
    """Base error for a failed evaluation.

    ``stage`` names the pipeline stage that failed (``configuration``,
    ``extraction``, ``prompt``, ``scoring`` or ``parsing``).
    """

    default_stage: str | None = None

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage or self.default_stage


class ConfigurationError(EvaluationError):
    """Raised when a backend is selected without the settings it needs."""

    default_stage = "configuration"


class ProviderHttpError(EvaluationError):
    """Raised when an external provider call fails."""

    default_stage = "scoring"
    kind = "generic"

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        model: str | None = None,
        status_code: int | None = None,
        stage: str | None = None,
    ) -> None:
        super().__init__(message, stage=stage)
        self.provider = provider
        self.model = model
        self.status_code = status_code


class ProviderUnauthorizedError(ProviderHttpError):
    """HTTP 401: the API key is invalid or expired."""

    kind = "unauthorized"


class ProviderRateLimitError(ProviderHttpError):
    """HTTP 429: the provider quota or rate limit was exceeded."""

    kind = "rate_limited"


class ProviderBadRequestError(ProviderHttpError):
    """HTTP 400: usually an invalid model name."""

    kind = "bad_request"


class ResponseParseError(EvaluationError):
    """Raised when provider output is malformed or incomplete."""

    default_stage = "parsing"

    def __init__(self, message: str, *, raw_text: str | None = None, stage: str | None = None) -> None:
        super().__init__(message, stage=stage)
        self.raw_text = raw_text


class StorageReadError(EvaluationError):
    """Raised by storage readers when file bytes cannot be fetched."""

    default_stage = "extraction"

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


__all__ = [
    "EvaluationError",
    "ConfigurationError",
    "ProviderHttpError",
    "ProviderUnauthorizedError",
    "ProviderRateLimitError",
    "ProviderBadRequestError",
    "ResponseParseError",
    "StorageReadError",
]
