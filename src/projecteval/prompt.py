"""Assemble evaluation prompts from project data and rubric criteria."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import pendulum

from .schemas import EvaluationRequest, ProgramContext, RecommendationThresholds
from .schemas.evaluation import is_file_field


@dataclass
class PromptConfig:
    """Branding used in the persona preamble and budget formatting."""

    platform_name: str = "the funding platform"
    currency: str = "FCFA"


class PromptBuilder:
    """Build a single prompt string for a scoring backend."""

    def __init__(
        self,
        *,
        config: PromptConfig | None = None,
        thresholds: RecommendationThresholds | None = None,
    ) -> None:
        self._config = config or PromptConfig()
        self._thresholds = thresholds or RecommendationThresholds()

    def build(self, request: EvaluationRequest, file_block: str = "") -> str:
        sections = [
            self._preamble(),
            self._general_information(request),
            self._description(request),
            self._methodology(request),
        ]
        if request.custom_prompt:
            sections.append(self._custom_instructions(request.custom_prompt, request.program_context))
        if request.include_file_contents and file_block:
            sections.append(file_block.strip("\n"))
        sections.append(self._response_contract(request))
        sections.append(self._scoring_tiers())
        return "\n\n".join(sections)

    def _preamble(self) -> str:
        return (
            f"You are an expert project evaluator for {self._config.platform_name}, "
            "which assesses and finances small and medium-sized enterprises.\n\n"
            "Your task is to produce a professional, structured PROJECT EVALUATION REPORT."
        )

    def _general_information(self, request: EvaluationRequest) -> str:
        project = request.project_data
        submitted = project.submission_date or pendulum.now().to_date_string()
        lines = [
            "=== GENERAL PROJECT INFORMATION ===",
            "",
            f"Project title: {project.title}",
            f"Revenue (budget): {project.budget:,.0f} {self._config.currency}",
            f"Time in operation: {project.timeline}",
            f"Tags: {', '.join(project.tags) if project.tags else 'none'}",
            f"Submission date: {submitted}",
        ]

        form_lines = _form_data_lines(project.form_data or {})
        if form_lines:
            lines.extend(["", "ADDITIONAL FORM INFORMATION:", *form_lines])

        if request.program_context:
            context = request.program_context
            lines.extend(
                [
                    "",
                    f"Program: {context.name}",
                    f"Program description: {context.description}",
                    f"Implementing partner: {context.partner_name}",
                    f"Program budget: {context.budget_range}",
                ]
            )
        return "\n".join(lines)

    @staticmethod
    def _description(request: EvaluationRequest) -> str:
        return (
            "=== PROJECT SUMMARY ===\n"
            f"{request.project_data.description}\n\n"
            "=== EVALUATION OBJECTIVE ===\n"
            "Measure the relevance, feasibility and economic viability of the project.\n"
            "Identify risks and drivers of success.\n"
            "Make recommendations for the funding decision."
        )

    def _methodology(self, request: EvaluationRequest) -> str:
        criteria = "\n".join(
            f"  - {c.name} (id: {c.id}, weight: {_number(c.weight)}%, "
            f"max score: {_number(c.max_score)}) - {c.description}"
            for c in request.evaluation_criteria
        )
        return (
            "=== METHODOLOGY ===\n"
            "Document review and validation of the financial data.\n"
            f"Evaluation against the criteria of {self._config.platform_name}:\n"
            f"{criteria}"
        )

    @staticmethod
    def _custom_instructions(custom_prompt: str, context: ProgramContext | None) -> str:
        instructions = custom_prompt
        if context:
            replacements = {
                "{{program_name}}": context.name,
                "{{program_description}}": context.description,
                "{{partner_name}}": context.partner_name,
                "{{budget_range}}": context.budget_range,
            }
            for placeholder, value in replacements.items():
                instructions = instructions.replace(placeholder, value)
        return f"SPECIFIC INSTRUCTIONS FOR THIS PROGRAM:\n{instructions}"

    @staticmethod
    def _response_contract(request: EvaluationRequest) -> str:
        criteria = request.evaluation_criteria
        template: dict[str, Any] = {
            "scores": {c.id: f"<number between 0 and {_number(c.max_score)}>" for c in criteria},
            "notes": "Overall summary of the evaluation in 2-3 paragraphs.",
            "recommendation": "pre_selected|selected|rejected",
            "detailedAnalysis": {
                "strengths": ["Strength 1: precise description", "Strength 2: ..."],
                "weaknesses": ["Weakness 1: precise description", "Weakness 2: ..."],
                "opportunities": ["Opportunity 1: description", "Opportunity 2: ..."],
                "risks": ["Risk 1: description", "Risk 2: ..."],
                "observations": {
                    c.id: f"Detailed observation on {c.name} (2-3 sentences)" for c in criteria
                },
            },
        }
        return (
            "=== REPORT INSTRUCTIONS ===\n\n"
            "Analyse the project thoroughly and produce a structured report.\n\n"
            "Answer ONLY with a JSON object of the following shape (no markdown, no comments). "
            "Keys of \"scores\" and \"observations\" are criterion ids and every criterion "
            "must be scored:\n\n"
            f"{json.dumps(template, indent=2, ensure_ascii=False)}"
        )

    def _scoring_tiers(self) -> str:
        selected = round(self._thresholds.selected * 100)
        pre_selected = round(self._thresholds.pre_selected * 100)
        return (
            "=== SCORING TIERS ===\n"
            f"- \"selected\": overall score >= {selected}% (recommended for funding)\n"
            f"- \"pre_selected\": overall score >= {pre_selected}% (promising, needs adjustments)\n"
            f"- \"rejected\": overall score < {pre_selected}% (not recommended)\n\n"
            "Be rigorous, objective and professional in your analysis."
        )


def _form_data_lines(form_data: dict[str, Any]) -> list[str]:
    lines: list[str] = []
    for key, value in form_data.items():
        if is_file_field(value):
            names = ", ".join(str(item.get("name", "")) for item in value if isinstance(item, dict))
            lines.append(f"- {key}: {len(value)} attached file(s) ({names})")
        elif value is None or value == "" or value == []:
            continue
        elif isinstance(value, list):
            lines.append(f"- {key}: {', '.join(str(item) for item in value)}")
        else:
            lines.append(f"- {key}: {value}")
    return lines


def _number(value: float) -> str:
    return f"{value:g}"


__all__ = ["PromptBuilder", "PromptConfig"]
