"""Dependency injection container for the evaluation service."""

from __future__ import annotations

from typing import Any

import httpx
from dependency_injector import containers, providers

from .backends import default_registry
from .extraction import ExtractionAggregator, LocalStorageReader
from .parser import ResponseParser
from .prompt import PromptBuilder, PromptConfig
from .schemas import ProviderConfig, RecommendationThresholds
from .schemas.config import load_config
from .service import EvaluationService


def _prompt_config(platform_name: str | None, currency: str | None) -> PromptConfig:
    defaults = PromptConfig()
    return PromptConfig(
        platform_name=platform_name or defaults.platform_name,
        currency=currency or defaults.currency,
    )


class EvaluationContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    storage_reader = providers.Singleton(LocalStorageReader, root=config.storage.base_dir)

    aggregator = providers.Singleton(
        ExtractionAggregator,
        reader=storage_reader,
        max_chars=config.extraction.max_chars_per_file,
    )

    thresholds = providers.Singleton(
        RecommendationThresholds,
        selected=config.thresholds.selected,
        pre_selected=config.thresholds.pre_selected,
    )

    prompt_config = providers.Singleton(
        _prompt_config,
        platform_name=config.prompt.platform_name,
        currency=config.prompt.currency,
    )

    prompt_builder = providers.Singleton(
        PromptBuilder,
        config=prompt_config,
        thresholds=thresholds,
    )

    response_parser = providers.Singleton(ResponseParser, thresholds=thresholds)

    backend_registry = providers.Singleton(default_registry)

    provider_config = providers.Factory(ProviderConfig.model_validate, config.scoring)

    backend_options = providers.Dict(timeout=config.http.timeout)

    service = providers.Singleton(
        EvaluationService,
        registry=backend_registry,
        aggregator=aggregator,
        prompt_builder=prompt_builder,
        parser=response_parser,
        config=provider_config,
        backend_options=backend_options,
    )


def create_container(
    *,
    settings: dict[str, Any] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> EvaluationContainer:
    """Instantiate container with optional overrides.

    ``settings`` follows the YAML config layout; missing sections take their
    defaults. ``transport`` replaces the HTTP transport of external providers.
    """

    container = EvaluationContainer()
    app_config = load_config(settings or {})
    container.config.from_dict(app_config.model_dump())

    if transport is not None:
        container.backend_options.override(
            providers.Dict(timeout=app_config.http.timeout, transport=transport)
        )

    return container
