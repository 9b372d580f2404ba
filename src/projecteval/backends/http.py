"""Shared HTTP plumbing for external generative-text providers."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from ..errors import (
    ConfigurationError,
    ProviderBadRequestError,
    ProviderHttpError,
    ProviderRateLimitError,
    ProviderUnauthorizedError,
    ResponseParseError,
)
from ..schemas import EvaluationRequest, ProviderConfig
from .base import RawResult

DEFAULT_TIMEOUT = 60.0
TEMPERATURE = 0.3
MAX_OUTPUT_TOKENS = 2048


class HTTPProviderBackend:
    """Base class issuing one JSON POST per evaluation.

    Subclasses define the endpoint, request envelope and completion lookup.
    """

    provider = ""
    display_name = ""
    default_model = ""

    def __init__(
        self,
        *,
        api_key: str,
        model: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model or self.default_model
        self._timeout = timeout
        self._transport = transport
        self._logger = structlog.get_logger(__name__).bind(provider=self.provider, model=self._model)

    @classmethod
    def from_config(cls, config: ProviderConfig, **options: Any) -> "HTTPProviderBackend":
        return cls(
            api_key=config.api_key,
            model=config.model,
            timeout=options.get("timeout", DEFAULT_TIMEOUT),
            transport=options.get("transport"),
        )

    @property
    def model(self) -> str:
        return self._model

    async def evaluate(self, prompt: str, request: EvaluationRequest) -> RawResult:
        if not self._api_key:
            raise ConfigurationError(f"Missing {self.display_name} API key")

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    self.endpoint(),
                    json=self.build_body(prompt),
                    headers=self.headers(),
                    params=self.params() or None,
                )
        except httpx.HTTPError as exc:
            self._logger.warning("provider.request_failed", error=str(exc))
            raise ProviderHttpError(
                f"{self.display_name} request failed: {exc}",
                provider=self.provider,
                model=self._model,
            ) from exc

        if not response.is_success:
            raise self._http_error(response)

        try:
            data = response.json()
        except ValueError as exc:
            raise ResponseParseError(
                f"{self.display_name} returned a non-JSON body",
                raw_text=response.text,
                stage="scoring",
            ) from exc

        try:
            text = self.extract_text(data)
        except (KeyError, IndexError, TypeError) as exc:
            raise ResponseParseError(
                f"{self.display_name} response has no completion text",
                raw_text=response.text,
                stage="scoring",
            ) from exc
        if not isinstance(text, str):
            raise ResponseParseError(
                f"{self.display_name} completion is not text",
                raw_text=response.text,
                stage="scoring",
            )
        self._logger.info("provider.completed", status_code=response.status_code, chars=len(text))
        return RawResult(text=text)

    def endpoint(self) -> str:
        raise NotImplementedError

    def headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    def params(self) -> dict[str, str]:
        return {}

    def build_body(self, prompt: str) -> dict[str, Any]:
        raise NotImplementedError

    def extract_text(self, data: Any) -> Any:
        raise NotImplementedError

    def _http_error(self, response: httpx.Response) -> ProviderHttpError:
        status = response.status_code
        self._logger.warning("provider.http_error", status_code=status)
        common = {"provider": self.provider, "model": self._model, "status_code": status}
        if status == 401:
            return ProviderUnauthorizedError(
                f"{self.display_name} API key is invalid or expired. Check the API key in the configuration.",
                **common,
            )
        if status == 429:
            return ProviderRateLimitError(
                f"{self.display_name} rate limit exceeded. Check your quota or try again later.",
                **common,
            )
        if status == 400:
            return ProviderBadRequestError(
                f"{self.display_name} rejected the request (HTTP 400). "
                f"Check that the model '{self._model}' exists and is available for this key.",
                **common,
            )
        return ProviderHttpError(f"{self.display_name} API error: HTTP {status}", **common)
