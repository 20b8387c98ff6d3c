from __future__ import annotations

import json
from pathlib import Path

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from app.web_api import create_app
from core.command_service import CommandService
from core.learning_logger import LearningLogger


def build_client(tmp_path: Path | None = None) -> TestClient:
    learning_logger = None
    if tmp_path is not None:
        learning_logger = LearningLogger(log_path=tmp_path / "compiles.jsonl", redact=False)
    app = create_app(service=CommandService(learning_logger=learning_logger))
    return TestClient(app)


def test_health_check() -> None:
    client = build_client()
    response = client.get("/api/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["timestamp"]


def test_compile_returns_plan_and_insights(tmp_path) -> None:
    client = build_client(tmp_path)
    response = client.post(
        "/api/compile",
        json={"message": "delete all inactive users", "session_token": "web-1"},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["command"]["intent"]["primary"] == "management"
    assert [step["stepId"] for step in payload["command"]["executionPlan"]] == ["validation-1", "step-1"]
    assert payload["insights"] == ["High-risk operations detected. Additional validation recommended."]
    assert payload["outcome"] == "success"
    assert payload["metadata"]["high_risk"] is True

    row = json.loads((tmp_path / "compiles.jsonl").read_text(encoding="utf-8").strip())
    assert row["session_id"] == "web-1"


def test_compile_rejects_blank_message() -> None:
    client = build_client()
    response = client.post("/api/compile", json={"message": "   "})
    assert response.status_code == 400


def test_extract_returns_payload() -> None:
    client = build_client()
    response = client.post("/api/extract", json={"text": 'Result:\n{"value": [1, 2]}'})
    assert response.status_code == 200
    assert response.json() == {"payload": {"value": [1, 2]}}


def test_extract_failure_maps_to_422() -> None:
    client = build_client()
    response = client.post("/api/extract", json={"text": "no data here"})
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["kind"] == "NoJsonFound"
    assert detail["preview"] == "no data here"


def test_unwrap_envelope() -> None:
    client = build_client()
    envelope = {"result": {"content": [{"type": "text", "text": 'Users:\n[{"id": "u1"}]'}]}}
    response = client.post("/api/unwrap", json={"envelope": envelope})
    assert response.status_code == 200
    assert response.json() == {"payload": [{"id": "u1"}]}


def test_unwrap_strict_rejects_error_envelope() -> None:
    client = build_client()
    envelope = {"error": {"code": -32000, "message": "throttled"}, "content": [{"json": {}}]}
    lenient = client.post("/api/unwrap", json={"envelope": envelope})
    assert lenient.status_code == 200

    strict = client.post("/api/unwrap", json={"envelope": envelope, "strict": True})
    assert strict.status_code == 422
    assert strict.json()["detail"]["kind"] == "InvalidEnvelope"


def test_unwrap_empty_content() -> None:
    client = build_client()
    response = client.post("/api/unwrap", json={"envelope": {"content": []}})
    assert response.status_code == 422
    assert response.json()["detail"]["kind"] == "EmptyContent"
