"""FastAPI wrapper for quicklink template processing."""

from __future__ import annotations

import importlib.metadata
import json
import logging
import os
import time
import uuid
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from quicklink.analysis.analyzer import analyze
from quicklink.analysis.validator import validate_with_errors
from quicklink.orchestrator.pipeline import run_template
from quicklink.render.models import ProcessRequest, RenderPolicy
from quicklink.render.modifiers import list_supported_modifiers
from quicklink.render.offsets import OFFSET_UNITS
from quicklink.render.policy_loader import load_policy, parse_policy
from quicklink.templates.models import PlaceholderKind
from quicklink.utils.errors import MissingArgumentsError, TemplateError

app = FastAPI(title="quicklink API", version="0.1.0")
logger = logging.getLogger("quicklink.api")

_REQUEST_ID_HEADER = "X-Quicklink-Request-Id"
_MAX_TEMPLATE_CHARS_DEFAULT = 64 * 1024
_SUPPORTED_KINDS: tuple[PlaceholderKind, ...] = (
    "argument",
    "clipboard",
    "selection",
    "date",
    "time",
    "datetime",
)


class ProcessApiRequest(ProcessRequest):
    """Process request body with API-only switches."""

    strict: bool = False
    policy_yaml: str | None = None


class TemplateApiRequest(BaseModel):
    """Body for analyze/validate endpoints."""

    model_config = ConfigDict(extra="forbid")

    template: str


class ApiRequestError(Exception):
    def __init__(
        self,
        *,
        status_code: int,
        error_code: str,
        message: str,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.detail = detail or {}


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Ensure every response has a request id header."""

    request_id = uuid.uuid4().hex
    request.state.request_id = request_id
    try:
        response = await call_next(request)
    except Exception:  # noqa: BLE001
        _log_event(
            logging.ERROR,
            "error",
            request_id,
            error_code="INTERNAL_ERROR",
            status_code=500,
            failure_stage="middleware",
        )
        response = _error_response(
            status_code=500,
            error_code="INTERNAL_ERROR",
            message="internal server error",
            request_id=request_id,
            detail={"path": request.url.path},
        )
    response.headers.setdefault(_REQUEST_ID_HEADER, request_id)
    return response


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    """Liveness endpoint."""

    return {"status": "ok"}


@app.get("/v1/meta")
async def meta_v1(request: Request) -> JSONResponse:
    """Supported grammar vocabulary for clients building templates."""

    request_id = _request_id_from_request(request)
    payload = {
        "placeholder_kinds": list(_SUPPORTED_KINDS),
        "supported_modifiers": list_supported_modifiers(),
        "offset_units": dict(OFFSET_UNITS),
        "version": _package_version(),
    }
    return JSONResponse(
        status_code=200,
        headers={_REQUEST_ID_HEADER: request_id},
        content=payload,
    )


@app.post("/v1/process")
async def process_v1(request: Request, body: ProcessApiRequest) -> JSONResponse:
    """Resolve a template and return the process result."""

    request_started = time.perf_counter()
    request_id = _request_id_from_request(request)
    failure_stage = "validate_inputs"

    try:
        _check_template_size(body.template)
        failure_stage = "load_policy"
        policy = _load_policy_with_api_error(body.policy_yaml)

        _log_event(
            logging.INFO,
            "start",
            request_id,
            endpoint="process",
            strict=body.strict,
            template_chars=len(body.template),
            argument_count=len(body.arguments),
            clipboard_provided=body.clipboard is not None,
            selection_provided=body.selection is not None,
            policy_yaml_provided=body.policy_yaml is not None,
        )

        failure_stage = "process"
        result = run_template(
            ProcessRequest(
                template=body.template,
                arguments=body.arguments,
                clipboard=body.clipboard,
                selection=body.selection,
                now=body.now,
            ),
            policy=policy,
            strict=body.strict,
        )
    except ApiRequestError as exc:
        _log_event(
            logging.ERROR,
            "error",
            request_id,
            error_code=exc.error_code,
            status_code=exc.status_code,
            failure_stage=failure_stage,
        )
        return _error_response(
            status_code=exc.status_code,
            error_code=exc.error_code,
            message=exc.message,
            request_id=request_id,
            detail=exc.detail,
        )
    except TemplateError as exc:
        _log_event(
            logging.ERROR,
            "error",
            request_id,
            error_code="TEMPLATE_INVALID",
            status_code=422,
            failure_stage=failure_stage,
        )
        errors = exc.validation.errors if exc.validation is not None else []
        return _error_response(
            status_code=422,
            error_code="TEMPLATE_INVALID",
            message="template has syntax errors",
            request_id=request_id,
            detail={"errors": errors},
        )
    except MissingArgumentsError as exc:
        _log_event(
            logging.ERROR,
            "error",
            request_id,
            error_code="MISSING_ARGUMENTS",
            status_code=422,
            failure_stage=failure_stage,
        )
        detail: dict[str, Any] = {"missing_arguments": exc.missing_arguments}
        if exc.result is not None:
            detail["url"] = exc.result.url
        return _error_response(
            status_code=422,
            error_code="MISSING_ARGUMENTS",
            message="missing required template arguments",
            request_id=request_id,
            detail=detail,
        )

    summary = result.summary
    _log_event(
        logging.INFO,
        "done",
        request_id,
        endpoint="process",
        success=result.success,
        summary=summary.model_dump(mode="json"),
        total_ms=_elapsed_ms(request_started),
    )
    content = result.model_dump(mode="json")
    content["summary"] = summary.model_dump(mode="json")
    return JSONResponse(
        status_code=200,
        headers={_REQUEST_ID_HEADER: request_id},
        content=content,
    )


@app.post("/v1/analyze")
async def analyze_v1(request: Request, body: TemplateApiRequest) -> JSONResponse:
    """Summarize the inputs a template needs."""

    request_id = _request_id_from_request(request)
    try:
        _check_template_size(body.template)
    except ApiRequestError as exc:
        return _api_error_response(exc, request_id, failure_stage="validate_inputs")

    info = analyze(body.template)
    _log_event(
        logging.INFO,
        "done",
        request_id,
        endpoint="analyze",
        argument_count=len(info.arguments),
    )
    return JSONResponse(
        status_code=200,
        headers={_REQUEST_ID_HEADER: request_id},
        content=info.model_dump(mode="json"),
    )


@app.post("/v1/validate")
async def validate_v1(request: Request, body: TemplateApiRequest) -> JSONResponse:
    """Return syntax diagnostics for a template."""

    request_id = _request_id_from_request(request)
    try:
        _check_template_size(body.template)
    except ApiRequestError as exc:
        return _api_error_response(exc, request_id, failure_stage="validate_inputs")

    validation = validate_with_errors(body.template)
    _log_event(
        logging.INFO,
        "done",
        request_id,
        endpoint="validate",
        is_valid=validation.is_valid,
        error_count=len(validation.errors),
    )
    return JSONResponse(
        status_code=200,
        headers={_REQUEST_ID_HEADER: request_id},
        content=validation.model_dump(mode="json"),
    )


def _request_id_from_request(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    if isinstance(request_id, str) and request_id:
        return request_id
    generated = uuid.uuid4().hex
    request.state.request_id = generated
    return generated


def _load_policy_with_api_error(policy_yaml: str | None) -> RenderPolicy:
    try:
        if policy_yaml is not None:
            return parse_policy(policy_yaml)
        return load_policy(_policy_path_from_env())
    except ValueError as exc:
        raise ApiRequestError(
            status_code=400,
            error_code="INVALID_ARGUMENT",
            message="invalid policy_yaml",
            detail={"field": "policy_yaml", "error": str(exc)},
        ) from exc


def _policy_path_from_env() -> Path | None:
    raw = os.getenv("QUICKLINK_POLICY_PATH")
    if not raw:
        return None
    return Path(raw)


def _max_template_chars() -> int:
    raw = os.getenv("QUICKLINK_MAX_TEMPLATE_CHARS")
    if raw is None:
        return _MAX_TEMPLATE_CHARS_DEFAULT
    try:
        parsed = int(raw)
    except ValueError:
        return _MAX_TEMPLATE_CHARS_DEFAULT
    return parsed if parsed > 0 else _MAX_TEMPLATE_CHARS_DEFAULT


def _check_template_size(template: str) -> None:
    limit = _max_template_chars()
    if len(template) > limit:
        raise ApiRequestError(
            status_code=413,
            error_code="TEMPLATE_TOO_LARGE",
            message="template exceeds size limit",
            detail={"field": "template", "max_chars": limit, "actual_chars": len(template)},
        )


def _api_error_response(exc: ApiRequestError, request_id: str, *, failure_stage: str):
    _log_event(
        logging.ERROR,
        "error",
        request_id,
        error_code=exc.error_code,
        status_code=exc.status_code,
        failure_stage=failure_stage,
    )
    return _error_response(
        status_code=exc.status_code,
        error_code=exc.error_code,
        message=exc.message,
        request_id=request_id,
        detail=exc.detail,
    )


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def _log_event(level: int, event: str, request_id: str, **fields: Any) -> None:
    payload = {
        "event": event,
        "request_id": request_id,
        **fields,
    }
    logger.log(level, _dump_json(payload))


def _package_version() -> str:
    try:
        return importlib.metadata.version("quicklink-parser")
    except importlib.metadata.PackageNotFoundError:
        return app.version


def _error_response(
    *,
    status_code: int,
    error_code: str,
    message: str,
    request_id: str,
    detail: dict[str, Any] | None = None,
) -> JSONResponse:
    payload_detail = dict(detail or {})
    payload_detail["request_id"] = request_id

    return JSONResponse(
        status_code=status_code,
        headers={_REQUEST_ID_HEADER: request_id},
        content={
            "error_code": error_code,
            "message": message,
            "detail": payload_detail,
        },
    )
