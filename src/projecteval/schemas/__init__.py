"""Pydantic schema definitions shared across the evaluation core."""

from __future__ import annotations

from .config import DEFAULT_MODELS, AppConfig, ProviderConfig, RecommendationThresholds
from .evaluation import (
    RECOMMENDATIONS,
    Criterion,
    DetailedAnalysis,
    EvaluationRequest,
    EvaluationResponse,
    ProgramContext,
    ProjectData,
    Recommendation,
)
from .files import FileContent, FileRef, FileType

__all__ = [
    "AppConfig",
    "Criterion",
    "DEFAULT_MODELS",
    "DetailedAnalysis",
    "EvaluationRequest",
    "EvaluationResponse",
    "FileContent",
    "FileRef",
    "FileType",
    "ProgramContext",
    "ProjectData",
    "ProviderConfig",
    "RECOMMENDATIONS",
    "Recommendation",
    "RecommendationThresholds",
]
