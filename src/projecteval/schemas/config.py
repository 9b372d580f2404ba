"""Pydantic configuration schemas for the service and its YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

DEFAULT_MODELS: dict[str, str] = {
    "mock": "heuristic",
    "openai": "gpt-4o-mini",
    "gemini": "gemini-1.5-flash-latest",
}


class ProviderConfig(BaseModel):
    """Scoring backend selection and credentials."""

    provider: str = "mock"
    api_key: str = Field(default="", repr=False)
    model: str | None = None

    model_config = ConfigDict(extra="forbid")

    def resolved_model(self) -> str | None:
        """Return the configured model or the provider's default."""
        return self.model or DEFAULT_MODELS.get(self.provider)


class RecommendationThresholds(BaseModel):
    """Aggregate score ratios separating the recommendation tiers."""

    selected: float = 0.80
    pre_selected: float = 0.60

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _ordered(self) -> "RecommendationThresholds":
        if not 0.0 <= self.pre_selected <= self.selected <= 1.0:
            raise ValueError("thresholds must satisfy 0 <= pre_selected <= selected <= 1")
        return self


class ExtractionSettings(BaseModel):
    max_chars_per_file: int = Field(default=4000, gt=0)


class PromptSettings(BaseModel):
    platform_name: str | None = None
    currency: str | None = None


class StorageSettings(BaseModel):
    base_dir: str = "."


class HttpSettings(BaseModel):
    timeout: float = Field(default=60.0, gt=0)


class AppConfig(BaseModel):
    # section and key names must not shadow attributes of the container's
    # Configuration provider (such as `provider` or `root`)

    scoring: ProviderConfig = Field(default_factory=ProviderConfig)
    thresholds: RecommendationThresholds = Field(default_factory=RecommendationThresholds)
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    prompt: PromptSettings = Field(default_factory=PromptSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)

    def to_settings(self) -> dict[str, Any]:
        settings = self.model_dump(exclude_none=True)
        if not settings["prompt"]:
            settings.pop("prompt")
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
