from __future__ import annotations

import asyncio
from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest
from fastapi.testclient import TestClient

from legallens import app as app_module
from legallens.application import UploadController, reset_upload_controller
from legallens.core.schema import AnalysisResult


@pytest.fixture(autouse=True)
def reset_state():
    reset_upload_controller()
    yield
    reset_upload_controller()


@pytest.mark.parametrize(("raw", "expected"), [("", None), ("none", None), (" OFF ", None), ("12.5", 12.5)])
def test_timeout_from_env(monkeypatch, raw, expected):
    monkeypatch.setenv("ANALYSIS_API_TIMEOUT", raw)

    assert app_module._timeout_from_env() == expected


def test_timeout_defaults_when_unset(monkeypatch):
    monkeypatch.delenv("ANALYSIS_API_TIMEOUT", raising=False)

    assert app_module._timeout_from_env() == app_module.DEFAULT_TIMEOUT


def test_malformed_timeout_names_the_variable(monkeypatch):
    monkeypatch.setenv("ANALYSIS_API_TIMEOUT", "30s")

    with pytest.raises(ValueError, match="ANALYSIS_API_TIMEOUT"):
        app_module._timeout_from_env()


def test_build_controller_uses_configured_base(monkeypatch):
    monkeypatch.setenv("ANALYSIS_API_BASE", "https://lens.example.com/backend")
    monkeypatch.setenv("ANALYSIS_API_TIMEOUT", "none")

    controller = app_module.build_controller()

    assert controller.client.request_url == "https://lens.example.com/backend/api/analyze"
    asyncio.run(controller.aclose())


def test_cors_origins_from_env(monkeypatch):
    monkeypatch.setenv("API_CORS_ORIGINS", " https://a.example.com, ,https://b.example.com ")

    assert app_module._cors_origins_from_env() == ["https://a.example.com", "https://b.example.com"]


def test_cors_origins_default(monkeypatch):
    monkeypatch.delenv("API_CORS_ORIGINS", raising=False)

    assert app_module._cors_origins_from_env() == app_module.DEFAULT_CORS_ORIGINS


def test_configured_origin_is_allowed(monkeypatch, make_gated_client):
    monkeypatch.setenv("API_CORS_ORIGINS", "https://a.example.com")
    controller = UploadController(make_gated_client(AnalysisResult(summary="S", key_points=[], references=[])))

    with TestClient(app_module.create_app(controller)) as client:
        preflight = {"Access-Control-Request-Method": "GET"}
        allowed = client.options("/api/workflow", headers={"Origin": "https://a.example.com", **preflight})
        refused = client.options("/api/workflow", headers={"Origin": "http://localhost:3000", **preflight})

    assert allowed.status_code == 200
    assert allowed.headers["access-control-allow-origin"] == "https://a.example.com"
    assert "access-control-allow-origin" not in refused.headers
