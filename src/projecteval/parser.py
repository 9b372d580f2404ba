"""Parse and validate raw backend output into an evaluation report."""

from __future__ import annotations

import json
import math
import re
from typing import Any, Sequence

import structlog
from pydantic import ValidationError

from .backends import RawResult
from .errors import ResponseParseError
from .schemas import (
    RECOMMENDATIONS,
    Criterion,
    DetailedAnalysis,
    EvaluationResponse,
    Recommendation,
    RecommendationThresholds,
)

DEFAULT_NOTES = "Automatically generated evaluation."

_FENCE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_DECODER = json.JSONDecoder()


class ResponseParser:
    """Turn untrusted backend output into a validated :class:`EvaluationResponse`."""

    def __init__(self, *, thresholds: RecommendationThresholds | None = None) -> None:
        self._thresholds = thresholds or RecommendationThresholds()
        self._logger = structlog.get_logger(__name__)

    @property
    def thresholds(self) -> RecommendationThresholds:
        return self._thresholds

    def parse(self, raw: RawResult, criteria: Sequence[Criterion]) -> EvaluationResponse:
        if raw.payload is not None:
            payload = raw.payload
            raw_text = None
        else:
            raw_text = raw.text or ""
            payload = self._load_payload(raw_text)

        scores = self._scores(payload, criteria, raw_text)
        recommendation = self._recommendation(payload.get("recommendation"), scores, criteria)
        analysis = self._analysis(payload, raw_text)

        notes = payload.get("notes")
        if notes is None or notes == "":
            notes = DEFAULT_NOTES
        elif not isinstance(notes, str):
            notes = str(notes)

        return EvaluationResponse(
            scores=scores,
            notes=notes,
            recommendation=recommendation,
            detailed_analysis=analysis,
        )

    def derive_recommendation(
        self,
        scores: dict[str, float],
        criteria: Sequence[Criterion],
    ) -> Recommendation:
        """Map the aggregate score ratio onto a recommendation tier."""
        total_max = sum(c.max_score for c in criteria)
        ratio = sum(scores.get(c.id, 0.0) for c in criteria) / total_max if total_max else 0.0
        if ratio >= self._thresholds.selected:
            return "selected"
        if ratio >= self._thresholds.pre_selected:
            return "pre_selected"
        return "rejected"

    def _load_payload(self, raw_text: str) -> dict[str, Any]:
        candidate = extract_json_object(raw_text)
        if candidate is None:
            raise ResponseParseError("No JSON object found in provider response", raw_text=raw_text)
        try:
            payload = json.loads(candidate)
        except json.JSONDecodeError as exc:
            raise ResponseParseError(f"Invalid JSON in provider response: {exc.msg}", raw_text=raw_text) from exc
        if not isinstance(payload, dict):
            raise ResponseParseError("Provider response JSON is not an object", raw_text=raw_text)
        return payload

    def _scores(
        self,
        payload: dict[str, Any],
        criteria: Sequence[Criterion],
        raw_text: str | None,
    ) -> dict[str, float]:
        raw_scores = payload.get("scores")
        if not isinstance(raw_scores, dict):
            raise ResponseParseError("Response is missing a 'scores' object", raw_text=raw_text)

        missing = [c.id for c in criteria if c.id not in raw_scores and c.name not in raw_scores]
        if missing:
            raise ResponseParseError(f"Response has no score for criteria: {missing}", raw_text=raw_text)

        scores: dict[str, float] = {}
        for criterion in criteria:
            value = raw_scores[criterion.id] if criterion.id in raw_scores else raw_scores[criterion.name]
            number = _coerce_number(value)
            if number is None:
                raise ResponseParseError(
                    f"Score for criterion {criterion.id!r} is not a number: {value!r}",
                    raw_text=raw_text,
                )
            clamped = min(max(number, 0.0), criterion.max_score)
            if clamped != number:
                self._logger.info(
                    "response.score_clamped",
                    criterion_id=criterion.id,
                    value=number,
                    max_score=criterion.max_score,
                )
            scores[criterion.id] = clamped
        return scores

    def _recommendation(
        self,
        value: Any,
        scores: dict[str, float],
        criteria: Sequence[Criterion],
    ) -> Recommendation:
        if isinstance(value, str) and value in RECOMMENDATIONS:
            return value  # type: ignore[return-value]
        return self.derive_recommendation(scores, criteria)

    @staticmethod
    def _analysis(payload: dict[str, Any], raw_text: str | None) -> DetailedAnalysis | None:
        section = payload.get("detailedAnalysis", payload.get("detailed_analysis"))
        if section is None:
            return None
        try:
            return DetailedAnalysis.model_validate(section)
        except ValidationError as exc:
            raise ResponseParseError(
                f"Malformed detailedAnalysis: {exc.error_count()} validation error(s)",
                raw_text=raw_text,
            ) from exc


def extract_json_object(text: str) -> str | None:
    """Return the first ``{...}`` substring of ``text`` that decodes as a JSON object.

    Code fences are ignored and prose around the object may contain braces.
    When no candidate decodes, the span from the first ``{`` to the last ``}``
    is returned so that the caller reports the JSON error.
    """
    cleaned = _FENCE.sub("", text).strip()
    start = cleaned.find("{")
    while start != -1:
        try:
            value, end = _DECODER.raw_decode(cleaned, start)
        except json.JSONDecodeError:
            pass
        else:
            if isinstance(value, dict):
                return cleaned[start:end]
        start = cleaned.find("{", start + 1)

    first = cleaned.find("{")
    last = cleaned.rfind("}")
    if first == -1 or last <= first:
        return None
    return cleaned[first : last + 1]


def _coerce_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


__all__ = ["DEFAULT_NOTES", "ResponseParser", "extract_json_object"]
