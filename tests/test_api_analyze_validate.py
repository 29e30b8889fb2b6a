from __future__ import annotations

import logging

import httpx
import pytest

from apps.api.main import app


@pytest.mark.anyio
async def test_analyze_endpoint() -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.post(
            "/v1/analyze",
            json={"template": '{argument name="a"}&{argument name="a"}{clipboard}{date format=yyyy}'},
        )

    assert response.status_code == 200
    payload = response.json()
    assert len(payload["arguments"]) == 1
    assert payload["arguments"][0] == {
        "name": "a",
        "default": None,
        "options": None,
        "required": True,
    }
    assert payload["uses_clipboard"] is True
    assert payload["uses_selection"] is False
    assert payload["date_formats"] == ["yyyy"]


@pytest.mark.anyio
async def test_validate_endpoint_reports_errors() -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        valid = await client.post("/v1/validate", json={"template": "a{b}c"})
        invalid = await client.post("/v1/validate", json={"template": "a}b"})

    assert valid.status_code == 200
    assert valid.json() == {"is_valid": True, "errors": []}
    assert invalid.status_code == 200
    assert invalid.json() == {
        "is_valid": False,
        "errors": ["Unexpected closing brace at position 1"],
    }


@pytest.mark.anyio
async def test_api_logs_request_id_for_success(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="quicklink.api")

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.post(
            "/v1/process",
            json={"template": "{clipboard}", "clipboard": "x"},
        )

    assert response.status_code == 200
    request_id = response.headers["X-Quicklink-Request-Id"]
    messages = [record.message for record in caplog.records if record.name == "quicklink.api"]
    assert any('"event":"start"' in message and request_id in message for message in messages)
    assert any('"event":"done"' in message and request_id in message for message in messages)


@pytest.mark.anyio
async def test_api_logs_request_id_and_error_code_for_failure(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="quicklink.api")

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.post(
            "/v1/process",
            json={"template": "{argument name=q}", "strict": True},
        )

    assert response.status_code == 422
    request_id = response.headers["X-Quicklink-Request-Id"]
    messages = [record.message for record in caplog.records if record.name == "quicklink.api"]
    assert any(
        '"event":"error"' in message
        and request_id in message
        and '"error_code":"MISSING_ARGUMENTS"' in message
        and '"failure_stage":"process"' in message
        for message in messages
    )
