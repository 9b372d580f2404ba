"""Evaluation orchestrator: extract, assemble, score, parse."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

import structlog

from .backends import BackendRegistry, default_registry
from .errors import ConfigurationError, EvaluationError
from .extraction import ExtractionAggregator, LocalStorageReader
from .parser import ResponseParser
from .prompt import PromptBuilder
from .schemas import EvaluationRequest, EvaluationResponse, ProviderConfig


@dataclass(slots=True)
class ConnectionTestResult:
    """Outcome of a trial evaluation against a provider."""

    success: bool
    message: str
    provider: str
    model: str | None


_CONNECTION_TEST_REQUEST: dict[str, Any] = {
    "projectData": {
        "title": "Test project",
        "description": "Test description used to check the API connection",
        "budget": 100000,
        "timeline": "12 months",
        "tags": ["test"],
    },
    "evaluationCriteria": [
        {
            "id": "test1",
            "name": "Test criterion",
            "description": "Criterion used for the connection test",
            "maxScore": 20,
            "weight": 100,
        }
    ],
}


class EvaluationService:
    """Single entry point for evaluating a project against a rubric.

    The provider configuration is held by the instance and read once at the
    start of every evaluation. Reconfiguring while an evaluation is in flight
    does not affect that evaluation.
    """

    def __init__(
        self,
        *,
        registry: BackendRegistry | None = None,
        aggregator: ExtractionAggregator | None = None,
        prompt_builder: PromptBuilder | None = None,
        parser: ResponseParser | None = None,
        config: ProviderConfig | None = None,
        backend_options: dict[str, Any] | None = None,
    ) -> None:
        self._registry = registry or default_registry()
        self._aggregator = aggregator or ExtractionAggregator(LocalStorageReader())
        self._prompt_builder = prompt_builder or PromptBuilder()
        self._parser = parser or ResponseParser()
        self._backend_options = dict(backend_options or {})
        self._config = ProviderConfig()
        self._logger = structlog.get_logger(__name__)
        if config is not None:
            self.configure(config.provider, config.api_key, config.model)

    @property
    def config(self) -> ProviderConfig:
        return self._config.model_copy()

    def configure(self, provider: str, api_key: str = "", model: str | None = None) -> None:
        """Replace the whole provider configuration."""
        self._ensure_supported(provider)
        self._config = ProviderConfig(provider=provider, api_key=api_key or "", model=model)
        self._logger.info("config.updated", provider=provider, model=self._config.resolved_model())

    def set_provider(self, provider: str, api_key: str | None = None) -> None:
        """Switch provider, keeping the current key unless a new one is given."""
        self._ensure_supported(provider)
        model = self._config.model if provider == self._config.provider else None
        self._config = ProviderConfig(
            provider=provider,
            api_key=api_key if api_key else self._config.api_key,
            model=model,
        )
        self._logger.info("config.provider_changed", provider=provider)

    def set_model(self, model: str | None) -> None:
        self._config = self._config.model_copy(update={"model": model or None})
        self._logger.info("config.model_changed", model=self._config.resolved_model())

    async def evaluate_project(self, request: EvaluationRequest) -> EvaluationResponse:
        config = self._config.model_copy()
        logger = self._logger.bind(provider=config.provider, model=config.resolved_model())
        logger.info(
            "evaluation.started",
            title=request.project_data.title,
            criteria_count=len(request.evaluation_criteria),
        )

        try:
            file_block = ""
            refs = request.file_refs() if request.include_file_contents else []
            if refs:
                with _stage("extraction"):
                    contents = await self._aggregator.extract_all(refs)
                    file_block = self._aggregator.render(contents)

            with _stage("prompt"):
                prompt = self._prompt_builder.build(request, file_block)

            with _stage("scoring"):
                backend = self._registry.create(config, **self._backend_options)
                raw = await backend.evaluate(prompt, request)

            with _stage("parsing"):
                response = self._parser.parse(raw, request.evaluation_criteria)
        except EvaluationError as exc:
            logger.warning(
                "evaluation.failed",
                stage=exc.stage,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise

        logger.info(
            "evaluation.completed",
            recommendation=response.recommendation,
            total_score=sum(response.scores.values()),
        )
        return response

    async def test_connection(
        self,
        provider: str,
        api_key: str = "",
        model: str | None = None,
    ) -> ConnectionTestResult:
        """Run a one-criterion trial evaluation, then restore the previous configuration."""
        previous = self._config
        try:
            self.configure(provider, api_key, model)
            trial_model = self._config.resolved_model()
            await self.evaluate_project(EvaluationRequest.model_validate(_CONNECTION_TEST_REQUEST))
        except EvaluationError as exc:
            return ConnectionTestResult(
                success=False,
                message=f"Connection error: {exc}",
                provider=provider,
                model=model,
            )
        finally:
            self._config = previous
        return ConnectionTestResult(
            success=True,
            message="Connection successful. The API is working.",
            provider=provider,
            model=trial_model,
        )

    def _ensure_supported(self, provider: str) -> None:
        if not self._registry.supports(provider):
            raise ConfigurationError(
                f"Unsupported provider: {provider!r} (expected one of {self._registry.providers()})"
            )


@contextmanager
def _stage(name: str) -> Iterator[None]:
    """Tag errors escaping the block with the pipeline stage ``name``."""
    try:
        yield
    except EvaluationError as exc:
        if exc.stage is None:
            exc.stage = name
        raise
    except Exception as exc:
        raise EvaluationError(f"Unexpected failure during {name}: {exc}", stage=name) from exc


__all__ = ["ConnectionTestResult", "EvaluationService"]
