"""Deterministic local scoring heuristic."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Sequence

from rapidfuzz import fuzz

from ..schemas import Criterion, EvaluationRequest, ProjectData, ProviderConfig
from .base import RawResult

_THEMES: dict[str, tuple[str, ...]] = {
    "innovation": ("innovation", "innovative", "novelty"),
    "feasibility": ("feasibility", "technical", "faisabilite", "technique"),
    "impact": ("impact", "social"),
    "relevance": ("relevance", "pertinence", "alignment"),
    "viability": ("viability", "economic", "financial"),
    "governance": ("governance", "management"),
}

_INNOVATION_WORDS = ("new", "novel", "innovative", "innovation", "ai")
_IMPACT_TAGS = frozenset({"environment", "health", "education", "environnement", "sante"})
_SCALE_TAGS = frozenset({"innovation", "technology", "digital"})


@dataclass
class MockConfig:
    """Tuning for the heuristic scorer."""

    min_similarity: float = 85.0
    base_fraction: float = 0.60
    spread_fraction: float = 0.30
    adjustment_fraction: float = 0.10
    large_budget: float = 100_000_000
    risky_budget: float = 50_000_000


class MockBackend:
    """Score projects locally without any network access.

    Scores are a stable function of the project title and criterion id, nudged
    by keyword themes, so the same request always yields the same report.
    """

    provider = "mock"

    def __init__(self, *, config: MockConfig | None = None) -> None:
        self._config = config or MockConfig()

    @classmethod
    def from_config(cls, config: ProviderConfig, **options: Any) -> "MockBackend":
        return cls(config=options.get("mock_config"))

    async def evaluate(self, prompt: str, request: EvaluationRequest) -> RawResult:
        project = request.project_data
        criteria = request.evaluation_criteria

        scores: dict[str, float] = {}
        observations: dict[str, str] = {}
        for criterion in criteria:
            score, observation = self._score(project, criterion)
            scores[criterion.id] = score
            observations[criterion.id] = observation

        total_max = sum(c.max_score for c in criteria)
        ratio = sum(scores.values()) / total_max if total_max else 0.0

        return RawResult(
            payload={
                "scores": scores,
                "notes": (
                    "Automated heuristic evaluation based on the project description, "
                    f"budget and tags. Overall score: {round(ratio * 100)}%."
                ),
                "detailedAnalysis": {
                    **self._swot(project, criteria, scores),
                    "observations": observations,
                },
            }
        )

    def _score(self, project: ProjectData, criterion: Criterion) -> tuple[float, str]:
        cfg = self._config
        max_score = criterion.max_score
        fraction = cfg.base_fraction + cfg.spread_fraction * _stable_unit(project.title, criterion.id)
        score = max_score * fraction
        step = max_score * cfg.adjustment_fraction

        text = f"{project.title} {project.description}".lower()
        words = set(text.replace(",", " ").replace(".", " ").split())
        tags = {tag.lower() for tag in project.tags}
        themes = self._themes(criterion.name)
        observation = ""

        if "innovation" in themes:
            if words.intersection(_INNOVATION_WORDS):
                score += step
                observation = "Relevant use of new technologies showing a modern approach."
            else:
                observation = "The project shows innovation potential but could take a more novel approach."
        if "feasibility" in themes:
            if project.budget > cfg.large_budget:
                score -= step
                observation = "Large budget requiring a thorough validation of delivery capacity."
            else:
                observation = "Good technical command demonstrated with a realistic budget."
        if "impact" in themes:
            if tags & _IMPACT_TAGS:
                score += step
                observation = "Strong inclusion of social and environmental dimensions."
            else:
                observation = "Identifiable social impact with clearly defined beneficiaries."
        if "relevance" in themes:
            observation = "Strong alignment with national strategy and development goals."
        if "viability" in themes:
            observation = "Profitable business model demonstrated over the analysis period."
        if "governance" in themes:
            observation = "Clear organisational structure with defined management processes."

        score = round(min(max(score, 0.0), max_score), 1)
        if not observation:
            observation = (
                "The project shows a satisfactory level for this criterion with a score of "
                f"{score:g}/{max_score:g}."
            )
        return score, observation

    def _themes(self, criterion_name: str) -> set[str]:
        name = criterion_name.lower()
        return {
            theme
            for theme, keywords in _THEMES.items()
            if any(fuzz.partial_ratio(keyword, name) >= self._config.min_similarity for keyword in keywords)
        }

    def _swot(
        self,
        project: ProjectData,
        criteria: Sequence[Criterion],
        scores: dict[str, float],
    ) -> dict[str, list[str]]:
        strengths: list[str] = []
        weaknesses: list[str] = []
        for criterion in criteria:
            percentage = scores[criterion.id] / criterion.max_score * 100
            if percentage >= 80:
                strengths.append(f"{criterion.name}: excellent performance with strong strategic alignment")
            elif percentage < 60:
                weaknesses.append(f"{criterion.name}: needs improvement to reach the required standard")

        opportunities: list[str] = []
        if {tag.lower() for tag in project.tags} & _SCALE_TAGS:
            opportunities.append("Potential to scale and replicate in other regions")
        opportunities.append("Possible integration into the regional innovation ecosystem")

        risks: list[str] = []
        if project.budget > self._config.risky_budget:
            risks.append("Financial risk linked to the large investment volume")
        risks.append("Potential dependencies on external partners")

        return {
            "strengths": strengths or ["Project is coherent overall"],
            "weaknesses": weaknesses or ["Some aspects need close follow-up"],
            "opportunities": opportunities,
            "risks": risks,
        }


def _stable_unit(*parts: str) -> float:
    """Map ``parts`` to a float in [0, 1) that is stable across runs."""
    digest = hashlib.sha256("\x1f".join(parts).encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "big") / 2**32
