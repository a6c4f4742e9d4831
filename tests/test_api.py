"""
Tests de la API HTTP con TestClient.

La configuración se inyecta con `app.dependency_overrides[get_settings]`.
"""

import base64
import gzip

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_lint_service
from api.main import app
from bpmn_lint_core.bpmn.parser import BpmnParser
from bpmn_lint_core.classification import ClassificationTable
from bpmn_lint_core.config import Settings, get_settings
from bpmn_lint_core.engine import LintService

from conftest import make_definitions


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def client(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


# ============================================================
# POST /lint-bpmn
# ============================================================

def test_valid_document(client, valid_xml):
    response = client.post("/lint-bpmn", json={"bpmnXml": valid_xml})

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "issues": []}


def test_blocking_issues_are_still_200(client, broken_xml):
    response = client.post("/lint-bpmn", json={"bpmnXml": broken_xml})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "error"
    assert len(body["issues"]) == 7
    assert body["issues"][0] == {
        "rule": "end-event-required",
        "id": "Process_1",
        "message": "Process is missing end event",
        "severity": "error",
    }
    assert "rawReports" not in body


def test_raw_reports_on_request(client, broken_xml):
    response = client.post("/lint-bpmn?raw=true", json={"bpmnXml": broken_xml})

    raw = response.json()["rawReports"]
    assert raw["no-bpmndi"] == [{"id": "Task_1", "message": "Element is missing bpmndi", "category": "error"}]


def test_gzip_base64_body(client, broken_xml):
    blob = base64.b64encode(gzip.compress(broken_xml.encode("utf-8"))).decode("ascii")

    response = client.post("/lint-bpmn", json={"bpmnGzipBase64": blob})

    assert response.status_code == 200
    assert response.json()["status"] == "error"


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"json": {}},
        {"json": {"bpmnXml": 42}},
        {"json": {"bpmnXml": ""}},
        {"content": b"not json", "headers": {"Content-Type": "application/json"}},
    ],
)
def test_bad_bodies_are_400(client, kwargs):
    response = client.post("/lint-bpmn", **kwargs)

    assert response.status_code == 400
    assert "detail" in response.json()


def test_missing_document_message(client):
    response = client.post("/lint-bpmn", json={})

    assert response.json() == {"detail": "Missing bpmnXml string in JSON body"}


def test_malformed_xml_is_400(client):
    response = client.post("/lint-bpmn", json={"bpmnXml": "<bpmn:definitions><oops>"})

    assert response.status_code == 400


def test_wrong_root_is_400(client):
    xml = '<bpmn:process xmlns:bpmn="http://www.omg.org/spec/BPMN/20100524/MODEL" id="P" />'

    response = client.post("/lint-bpmn", json={"bpmnXml": xml})

    assert response.status_code == 400
    assert "bpmn:Process" in response.json()["detail"]


def test_deeply_nested_document_is_400(client):
    depth = 1500
    body = (
        '<bpmn:process id="Process_1">'
        + "".join(f'<bpmn:subProcess id="Sub_{n}">' for n in range(depth))
        + "</bpmn:subProcess>" * depth
        + "</bpmn:process>"
    )

    response = client.post("/lint-bpmn", json={"bpmnXml": make_definitions(body)})

    assert response.status_code == 400


def test_invalid_gzip_base64_is_400(client):
    response = client.post("/lint-bpmn", json={"bpmnGzipBase64": "%%%"})

    assert response.status_code == 400


@pytest.mark.parametrize("settings", [Settings(max_bpmn_bytes=200)])
def test_document_too_large(client, valid_xml):
    response = client.post("/lint-bpmn", json={"bpmnXml": valid_xml})

    assert response.status_code == 413


def test_unexpected_failure_is_500(client, valid_xml):
    class ExplodingEngine:
        def evaluate(self, element):
            raise RuntimeError("boom")

        def describe(self):
            return {"extends": "recommended", "rules": {}}

    service = LintService(BpmnParser(), ExplodingEngine(), ClassificationTable())
    app.dependency_overrides[get_lint_service] = lambda: service

    response = client.post("/lint-bpmn", json={"bpmnXml": valid_xml})

    assert response.status_code == 500
    assert response.json() == {"detail": "Linting failed: boom"}


# ============================================================
# Auth
# ============================================================

@pytest.mark.parametrize("settings", [Settings(action_api_key="s3cret")])
def test_api_key_required_when_configured(client, valid_xml):
    assert client.post("/lint-bpmn", json={"bpmnXml": valid_xml}).status_code == 401
    assert client.post(
        "/lint-bpmn",
        json={"bpmnXml": valid_xml},
        headers={"Authorization": "Bearer wrong"},
    ).status_code == 401

    response = client.post(
        "/lint-bpmn",
        json={"bpmnXml": valid_xml},
        headers={"Authorization": "Bearer s3cret"},
    )
    assert response.status_code == 200


@pytest.mark.parametrize("settings", [Settings(action_api_key="s3cret")])
def test_health_is_public(client):
    assert client.get("/health").json()["status"] == "ok"
    assert client.get("/").status_code == 200


# ============================================================
# POST /lint-bpmn/upload y GET /lint-bpmn/rules
# ============================================================

def test_upload_plain_and_gzip(client, broken_xml):
    plain = client.post(
        "/lint-bpmn/upload",
        files={"file": ("diagram.bpmn", broken_xml.encode("utf-8"), "application/xml")},
    )
    compressed = client.post(
        "/lint-bpmn/upload",
        files={"file": ("diagram.bpmn.gz", gzip.compress(broken_xml.encode("utf-8")), "application/gzip")},
    )

    assert plain.status_code == 200
    assert compressed.status_code == 200
    assert plain.json() == compressed.json()


def test_upload_without_file_is_400(client):
    assert client.post("/lint-bpmn/upload").status_code == 400


def test_upload_empty_file_is_400(client):
    response = client.post("/lint-bpmn/upload", files={"file": ("empty.bpmn", b"", "application/xml")})

    assert response.status_code == 400


@pytest.mark.parametrize("settings", [Settings(lint_rules="fake-join=off", lint_scope="all")])
def test_rules_endpoint(client):
    body = client.get("/lint-bpmn/rules").json()

    assert body["extends"] == "recommended"
    assert body["scope"] == "all"
    assert body["rules"]["fake-join"] == "off"
    assert body["rules"]["label-required"] == "error"
