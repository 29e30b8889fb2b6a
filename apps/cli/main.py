"""Typer CLI entrypoint for quicklink."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Annotated, Any

import typer

from apps.cli.io import write_fallback_json_atomic, write_result_atomic
from quicklink.analysis.analyzer import analyze
from quicklink.analysis.validator import validate_with_errors
from quicklink.orchestrator.pipeline import run_template
from quicklink.render.models import ProcessRequest, ProcessResult
from quicklink.render.policy_loader import load_policy
from quicklink.utils.errors import MissingArgumentsError, TemplateError

app = typer.Typer(help="QuickLink template CLI", rich_markup_mode=None)

EXIT_OK = 0
EXIT_BAD_INPUT = 1
EXIT_MISSING_ARGUMENTS = 2
EXIT_TEMPLATE_ERRORS = 3


@app.callback()
def cli_callback() -> None:
    """CLI root callback to keep sub-commands explicit."""


@app.command("process")
def process_command(
    template: Annotated[str, typer.Option(..., help="Template string to process.")],
    arg: Annotated[
        list[str] | None,
        typer.Option("--arg", help="Argument value as NAME=VALUE (repeatable)."),
    ] = None,
    clipboard: Annotated[str | None, typer.Option(help="Clipboard text.")] = None,
    selection: Annotated[str | None, typer.Option(help="Selected text.")] = None,
    now: Annotated[
        str | None, typer.Option(help="Reference instant (ISO 8601); defaults to now.")
    ] = None,
    policy: Annotated[Path | None, typer.Option(help="Render policy YAML.")] = None,
    out: Annotated[Path | None, typer.Option(help="Write the JSON result to this path.")] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail on syntax errors before processing."),
    ] = False,
) -> None:
    """Resolve placeholders and print the resulting URL."""

    failure_stage = "args"
    result: ProcessResult | None = None

    try:
        arguments = _parse_arguments(arg or [])
        reference_instant = _parse_instant(now)
        failure_stage = "load_policy"
        policy_model = load_policy(policy)
        failure_stage = "process"
        result = run_template(
            ProcessRequest(
                template=template,
                arguments=arguments,
                clipboard=clipboard,
                selection=selection,
                now=reference_instant,
            ),
            policy=policy_model,
            strict=strict,
        )
    except TemplateError as exc:
        typer.echo("ERROR: template has syntax errors")
        if exc.validation is not None:
            for error in exc.validation.errors:
                typer.echo(f"ERROR(syntax): {error}")
        _safe_write_fallback(out, type(exc).__name__, str(exc), failure_stage)
        raise typer.Exit(code=EXIT_TEMPLATE_ERRORS) from exc
    except MissingArgumentsError as exc:
        typer.echo(f"ERROR: missing arguments: {', '.join(exc.missing_arguments)}")
        _safe_write_fallback(out, type(exc).__name__, str(exc), failure_stage, exc.result)
        raise typer.Exit(code=EXIT_MISSING_ARGUMENTS) from exc
    except ValueError as exc:
        typer.echo(f"ERROR: {exc}")
        _safe_write_fallback(out, type(exc).__name__, str(exc), failure_stage)
        raise typer.Exit(code=EXIT_BAD_INPUT) from exc

    typer.echo(result.url)
    if out is not None:
        write_result_atomic(out, result)

    if result.missing_arguments:
        typer.echo(
            f"WARNING(missing): {', '.join(result.missing_arguments)}",
            err=True,
        )
        raise typer.Exit(code=EXIT_MISSING_ARGUMENTS)
    if result.errors:
        for error in result.errors:
            typer.echo(f"WARNING(placeholder): {error}", err=True)
        raise typer.Exit(code=EXIT_TEMPLATE_ERRORS)
    raise typer.Exit(code=EXIT_OK)


@app.command("analyze")
def analyze_command(
    template: Annotated[str, typer.Option(..., help="Template string to analyze.")],
) -> None:
    """Print the inputs a template needs as JSON."""

    info = analyze(template)
    payload: dict[str, Any] = info.model_dump(mode="json")
    payload["required_arguments"] = [argument.name for argument in info.required_arguments]
    payload["optional_arguments"] = [argument.name for argument in info.optional_arguments]
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@app.command("validate")
def validate_command(
    template: Annotated[str, typer.Option(..., help="Template string to validate.")],
) -> None:
    """Check template syntax; exit 3 when diagnostics exist."""

    validation = validate_with_errors(template)
    if validation.is_valid:
        typer.echo("INFO: template is valid")
        raise typer.Exit(code=EXIT_OK)

    for error in validation.errors:
        typer.echo(f"ERROR(syntax): {error}")
    raise typer.Exit(code=EXIT_TEMPLATE_ERRORS)


def _parse_arguments(raw_items: list[str]) -> dict[str, str]:
    arguments: dict[str, str] = {}
    for item in raw_items:
        name, separator, value = item.partition("=")
        if not separator or not name:
            raise ValueError(f"--arg must be NAME=VALUE, got: {item}")
        arguments[name] = value
    return arguments


def _parse_instant(raw: str | None) -> datetime | None:
    if raw is None:
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValueError(f"--now must be ISO 8601, got: {raw}") from exc


def _safe_write_fallback(
    path: Path | None,
    error_type: str,
    error_message: str,
    stage: str,
    base_result: ProcessResult | None = None,
) -> None:
    if path is None:
        return
    try:
        write_fallback_json_atomic(
            path,
            error_type=error_type,
            error_message=error_message,
            stage=stage,
            base_result=base_result,
        )
    except OSError as exc:
        typer.echo(f"ERROR: fallback report write failed: {exc}")


def main() -> None:
    """Poetry script entrypoint."""

    app()


if __name__ == "__main__":
    main()
