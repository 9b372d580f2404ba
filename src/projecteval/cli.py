"""Typer CLI entrypoint for project evaluation."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import pendulum
import typer
import yaml
from pydantic import ValidationError

from . import __version__
from .container import create_container
from .errors import EvaluationError
from .logging import configure_logging
from .schemas import EvaluationRequest
from .schemas.config import load_config

app = typer.Typer(help="Rubric-based project evaluation CLI.")


def _load_settings(config: Path | None) -> dict[str, Any]:
    if not config:
        return {}
    with config.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise typer.BadParameter("Config file must be a YAML object", param_name="config")
    try:
        return load_config(loaded).to_settings()
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_name="config") from exc


def _apply_overrides(
    settings: dict[str, Any],
    *,
    provider: str | None,
    api_key: str | None,
    model: str | None,
    files_root: Path | None,
) -> dict[str, Any]:
    provider_settings = dict(settings.get("scoring", {}))
    if provider:
        if provider != provider_settings.get("provider"):
            provider_settings.pop("model", None)
        provider_settings["provider"] = provider
    if api_key:
        provider_settings["api_key"] = api_key
    if model:
        provider_settings["model"] = model
    settings = {**settings, "scoring": provider_settings}
    if files_root:
        settings["storage"] = {"base_dir": str(files_root)}
    return settings


@app.command()
def evaluate(
    request: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Evaluation request JSON path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    provider: Optional[str] = typer.Option(None, help="Scoring backend: mock, openai or gemini."),
    api_key: Optional[str] = typer.Option(None, envvar="PROJECTEVAL_API_KEY", help="Provider API key."),
    model: Optional[str] = typer.Option(None, help="Provider model name."),
    files_root: Optional[Path] = typer.Option(None, file_okay=False, help="Directory holding attached files."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    log_json: bool = typer.Option(True, "--log-json/--log-console", help="Emit JSON log lines or console output."),
) -> None:
    """Evaluate one project request and write the score report."""
    settings = _apply_overrides(
        _load_settings(config),
        provider=provider,
        api_key=api_key,
        model=model,
        files_root=files_root,
    )

    configure_logging(log_level, json_output=log_json)

    try:
        evaluation_request = EvaluationRequest.model_validate_json(request.read_text(encoding="utf-8"))
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_name="request") from exc

    container = create_container(settings=settings)

    try:
        service = container.service()
        result = asyncio.run(service.evaluate_project(evaluation_request))
    except EvaluationError as exc:
        typer.echo(f"Evaluation failed during {exc.stage}: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    current = service.config
    payload = {
        "metadata": {
            "provider": current.provider,
            "model": current.resolved_model(),
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        },
        "result": result.model_dump(mode="json", by_alias=True),
    }
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    typer.echo(f"Recommendation: {result.recommendation}. Report saved to {output}.")


@app.command("test-connection")
def test_connection(
    provider: str = typer.Option(..., help="Scoring backend: mock, openai or gemini."),
    api_key: Optional[str] = typer.Option(None, envvar="PROJECTEVAL_API_KEY", help="Provider API key."),
    model: Optional[str] = typer.Option(None, help="Provider model name."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Run a trial evaluation against a provider."""
    configure_logging(log_level)
    service = create_container().service()
    outcome = asyncio.run(service.test_connection(provider, api_key or "", model))
    typer.echo(outcome.message)
    if not outcome.success:
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
