"""Scoring backends keyed by provider tag."""

from __future__ import annotations

from .base import BackendRegistry, RawResult, ScoringBackend
from .gemini import GeminiBackend
from .http import HTTPProviderBackend
from .mock import MockBackend, MockConfig
from .openai import OpenAIBackend


def default_registry() -> BackendRegistry:
    """Return a registry with the mock, OpenAI and Gemini backends."""
    return BackendRegistry(
        {
            MockBackend.provider: MockBackend.from_config,
            OpenAIBackend.provider: OpenAIBackend.from_config,
            GeminiBackend.provider: GeminiBackend.from_config,
        }
    )


__all__ = [
    "BackendRegistry",
    "GeminiBackend",
    "HTTPProviderBackend",
    "MockBackend",
    "MockConfig",
    "OpenAIBackend",
    "RawResult",
    "ScoringBackend",
    "default_registry",
]
