"""Scoring backend contract and provider registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, runtime_checkable

from ..errors import ConfigurationError
from ..schemas import EvaluationRequest, ProviderConfig


@dataclass(slots=True)
class RawResult:
    """Unparsed backend output.

    External providers fill ``text``; the local heuristic fills ``payload``.
    """

    text: str | None = None
    payload: dict[str, Any] | None = None


@runtime_checkable
class ScoringBackend(Protocol):
    """Backend contract for scoring an assembled prompt."""

    provider: str

    async def evaluate(self, prompt: str, request: EvaluationRequest) -> RawResult:
        """Return the raw scoring result for ``request``."""


BackendFactory = Callable[..., ScoringBackend]


class BackendRegistry:
    """Registry mapping provider tags to backend factories."""

    def __init__(self, factories: dict[str, BackendFactory] | None = None):
        self._factories: dict[str, BackendFactory] = dict(factories or {})

    def register(self, provider: str, factory: BackendFactory) -> None:
        self._factories[provider] = factory

    def create(self, config: ProviderConfig, **options: Any) -> ScoringBackend:
        try:
            factory = self._factories[config.provider]
        except KeyError as exc:
            raise ConfigurationError(f"Unsupported provider: {config.provider!r}") from exc
        return factory(config, **options)

    def supports(self, provider: str) -> bool:
        return provider in self._factories

    def providers(self) -> list[str]:
        return list(self._factories.keys())

