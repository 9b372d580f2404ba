"""Request and response schemas for project evaluation."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .files import FileRef

Recommendation = Literal["pre_selected", "selected", "rejected"]

RECOMMENDATIONS: tuple[str, ...] = ("pre_selected", "selected", "rejected")

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Criterion(BaseModel):
    """Weighted rubric entry.

    Weights are expected to add up to 100 but this is not enforced.
    """

    id: str
    name: str
    description: str = ""
    max_score: float = Field(gt=0)
    weight: float = 0.0

    model_config = ConfigDict(extra="ignore", **_CAMEL)


class ProjectData(BaseModel):
    """Project payload forwarded verbatim into the prompt."""

    title: str = ""
    description: str = ""
    budget: float = 0
    timeline: str = ""
    tags: list[str] = Field(default_factory=list)
    submission_date: str | None = None
    form_data: dict[str, Any] | None = None

    model_config = ConfigDict(extra="allow", **_CAMEL)


class ProgramContext(BaseModel):
    """Funding program the project was submitted to."""

    name: str
    description: str = ""
    partner_name: str = ""
    budget_range: str = ""

    model_config = ConfigDict(extra="ignore", **_CAMEL)


class EvaluationRequest(BaseModel):
    """Unit of work submitted to the evaluation service."""

    project_data: ProjectData
    evaluation_criteria: list[Criterion]
    custom_prompt: str | None = None
    program_context: ProgramContext | None = None
    include_file_contents: bool = False
    files: list[FileRef] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore", **_CAMEL)

    @model_validator(mode="after")
    def _unique_criterion_ids(self) -> "EvaluationRequest":
        seen: set[str] = set()
        duplicates: list[str] = []
        for criterion in self.evaluation_criteria:
            if criterion.id in seen:
                duplicates.append(criterion.id)
            seen.add(criterion.id)
        if duplicates:
            raise ValueError(f"Duplicate criterion ids: {sorted(set(duplicates))}")
        return self

    def file_refs(self) -> list[FileRef]:
        """Return explicit attachments followed by file fields of the form data."""
        refs: list[FileRef] = []
        seen: set[str] = set()
        candidates = list(self.files)
        for value in (self.project_data.form_data or {}).values():
            if is_file_field(value):
                candidates.extend(
                    FileRef(path=item["path"], name=item.get("name") or item["path"])
                    for item in value
                    if isinstance(item, dict) and item.get("path")
                )
        for ref in candidates:
            if ref.path in seen:
                continue
            seen.add(ref.path)
            refs.append(ref)
        return refs


class DetailedAnalysis(BaseModel):
    """Structured SWOT-style analysis returned alongside scores."""

    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    opportunities: list[str] = Field(default_factory=list)
    risks: list[str] = Field(default_factory=list)
    observations: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="ignore")


class EvaluationResponse(BaseModel):
    """Validated per-criterion score report."""

    scores: dict[str, float]
    notes: str
    recommendation: Recommendation
    detailed_analysis: DetailedAnalysis | None = None

    model_config = ConfigDict(extra="forbid", **_CAMEL)


def is_file_field(value: Any) -> bool:
    """Return True when a form value holds uploaded file references."""
    return (
        isinstance(value, list)
        and len(value) > 0
        and isinstance(value[0], dict)
        and bool(value[0].get("path"))
    )
