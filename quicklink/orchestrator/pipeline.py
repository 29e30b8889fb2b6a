"""Orchestration pipeline shared by the CLI and HTTP API."""

from __future__ import annotations

from quicklink.analysis.validator import validate_with_errors
from quicklink.render.models import ProcessRequest, ProcessResult, RenderPolicy
from quicklink.render.processor import process
from quicklink.utils.errors import MissingArgumentsError, TemplateError


def run_template(
    request: ProcessRequest,
    policy: RenderPolicy | None = None,
    strict: bool = False,
) -> ProcessResult:
    """Execute validate -> process for one request.

    In strict mode an invalid template raises ``TemplateError`` before
    processing, and missing arguments raise ``MissingArgumentsError`` with the
    partial result attached. Otherwise the result is returned as-is.
    """

    if strict:
        validation = validate_with_errors(request.template)
        if not validation.is_valid:
            raise TemplateError("Template has syntax errors", validation=validation)

    result = process(
        request.template,
        arguments=request.arguments,
        clipboard=request.clipboard,
        selection=request.selection,
        reference_instant=request.now,
        policy=policy,
    )

    if strict and result.missing_arguments:
        raise MissingArgumentsError(
            "Missing required template arguments",
            missing_arguments=result.missing_arguments,
            result=result,
        )
    return result
