from __future__ import annotations

import pytest
from pydantic import ValidationError

from projecteval.schemas import EvaluationRequest, EvaluationResponse, FileContent, FileRef


def base_payload() -> dict:
    return {
        "projectData": {"title": "T", "description": "D", "budget": 10, "timeline": "1y", "tags": ["a"]},
        "evaluationCriteria": [{"id": "c1", "name": "C1", "description": "", "maxScore": 10, "weight": 100}],
    }


def test_accepts_camel_and_snake_case() -> None:
    camel = EvaluationRequest.model_validate(base_payload())
    snake = EvaluationRequest(
        project_data={"title": "T"},
        evaluation_criteria=[{"id": "c1", "name": "C1", "max_score": 10}],
    )

    assert camel.evaluation_criteria[0].max_score == 10
    assert snake.evaluation_criteria[0].max_score == 10
    assert camel.include_file_contents is False


def test_project_data_keeps_unknown_fields() -> None:
    payload = base_payload()
    payload["projectData"]["sector"] = "agri"

    request = EvaluationRequest.model_validate(payload)

    assert request.project_data.model_extra == {"sector": "agri"}


@pytest.mark.parametrize("max_score", [0, -5])
def test_max_score_must_be_positive(max_score: int) -> None:
    payload = base_payload()
    payload["evaluationCriteria"][0]["maxScore"] = max_score

    with pytest.raises(ValidationError):
        EvaluationRequest.model_validate(payload)


def test_duplicate_criterion_ids_are_rejected() -> None:
    payload = base_payload()
    payload["evaluationCriteria"].append({"id": "c1", "name": "Again", "maxScore": 5})

    with pytest.raises(ValidationError, match="Duplicate criterion ids"):
        EvaluationRequest.model_validate(payload)


def test_file_refs_merge_explicit_and_form_files() -> None:
    payload = base_payload()
    payload["files"] = [{"path": "s/plan.pdf", "name": "plan.pdf"}]
    payload["projectData"]["formData"] = {
        "business_plan": [{"path": "s/plan.pdf", "name": "plan.pdf"}, {"path": "s/fin.xlsx", "name": "fin.xlsx"}],
        "photos": [{"path": "s/p.png"}],
        "motto": "grow",
        "empty": [],
    }

    refs = EvaluationRequest.model_validate(payload).file_refs()

    assert refs == [
        FileRef(path="s/plan.pdf", name="plan.pdf"),
        FileRef(path="s/fin.xlsx", name="fin.xlsx"),
        FileRef(path="s/p.png", name="s/p.png"),
    ]


def test_file_content_is_immutable() -> None:
    content = FileContent(file_name="a.txt", file_type="text", content="x")

    with pytest.raises(ValidationError):
        content.content = "changed"  # type: ignore[misc]


def test_response_dumps_camel_case() -> None:
    response = EvaluationResponse(
        scores={"c1": 5},
        notes="n",
        recommendation="pre_selected",
        detailed_analysis={"strengths": ["s"]},
    )

    dumped = response.model_dump(by_alias=True)

    assert dumped["detailedAnalysis"]["strengths"] == ["s"]
    assert dumped["scores"] == {"c1": 5.0}


def test_response_rejects_unknown_recommendation() -> None:
    with pytest.raises(ValidationError):
        EvaluationResponse(scores={}, notes="", recommendation="maybe")
