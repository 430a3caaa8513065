"""Error mapping of the AI functions client, against a stubbed transport."""

from __future__ import annotations

import pytest
import requests

from reportdesk.domain.exceptions import ExternalServiceError, NetworkError
from reportdesk.integrations import functions_client as module
from reportdesk.integrations.functions_client import FunctionsClient, functions_client


class FakeResponse:
    def __init__(self, status_code, body=None):
        self.status_code = status_code
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body


@pytest.fixture
def transport(monkeypatch):
    """Replaces ``requests.post``; set ``transport.response`` per test."""

    class Transport:
        response = FakeResponse(200, {})
        error = None
        calls = []

        def post(self, url, json=None, headers=None, timeout=None):
            self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
            if self.error is not None:
                raise self.error
            return self.response

    fake = Transport()
    fake.calls = []
    monkeypatch.setattr(module.requests, "post", fake.post)
    return fake


@pytest.fixture
def fc():
    return FunctionsClient("http://functions.test/", api_key="anon-key", timeout=5)


def test_generate_report_posts_payload(transport, fc):
    transport.response = FakeResponse(200, {"content": "Report text"})

    assert fc.generate_report("rt-1", {"site": "Tank 4"}) == "Report text"

    call = transport.calls[0]
    assert call["url"] == "http://functions.test/generate-report"
    assert call["json"] == {"reportTypeId": "rt-1", "userInputs": {"site": "Tank 4"}}
    assert call["headers"]["Authorization"] == "Bearer anon-key"
    assert call["timeout"] == 5


@pytest.mark.parametrize(
    "status, message",
    [
        (429, "Rate limit exceeded. Please try again later."),
        (401, "Invalid OpenAI API key. Please update your settings."),
        (402, "AI credits exhausted. Please add credits to continue."),
    ],
)
def test_gateway_statuses(transport, fc, status, message):
    transport.response = FakeResponse(status, {"error": "upstream says no"})

    with pytest.raises(ExternalServiceError) as exc_info:
        fc.generate_report("rt-1", {})

    assert exc_info.value.message == message
    assert exc_info.value.status_code == status


def test_server_error_uses_body_message(transport, fc):
    transport.response = FakeResponse(500, {"error": "Report type has no documents"})

    with pytest.raises(ExternalServiceError) as exc_info:
        fc.review_report("r-1")

    assert exc_info.value.message == "Report type has no documents"
    assert exc_info.value.status_code == 502


def test_server_error_without_body(transport, fc):
    transport.response = FakeResponse(500)

    with pytest.raises(ExternalServiceError, match="review-report failed"):
        fc.review_report("r-1")


def test_error_inside_success_body(transport, fc):
    transport.response = FakeResponse(200, {"error": "Model not available"})

    with pytest.raises(ExternalServiceError, match="Model not available"):
        fc.fetch_openai_models("sk-test")


def test_empty_generation(transport, fc):
    transport.response = FakeResponse(200, {"content": ""})

    with pytest.raises(ExternalServiceError, match="No content generated"):
        fc.generate_report("rt-1", {})


def test_connection_error(transport, fc):
    transport.error = requests.ConnectionError("refused")

    with pytest.raises(NetworkError):
        fc.parse_kb_document(file_path="a/b.pdf", report_type_id="rt-1", file_name="b.pdf", file_type="pdf")


def test_models_default_to_empty(transport, fc):
    transport.response = FakeResponse(200, {})
    assert fc.fetch_openai_models("sk-test") == []


def test_unconfigured(transport):
    with pytest.raises(ExternalServiceError, match="not configured"):
        FunctionsClient("").review_report("r-1")
    assert transport.calls == []


def test_app_client_built_from_config(app):
    client = functions_client()

    assert client.base_url == "http://functions.test"
    assert client.api_key == "test-key"
    assert functions_client() is client


def test_gateway_errors_reach_the_api(transport, app, headers, report_id):
    transport.response = FakeResponse(429, {})

    response = app.test_client().post(f"/api/v1/reports/{report_id}/review", headers=headers["staff"])

    assert response.status_code == 429
    assert response.get_json()["error"] == "ExternalServiceError"
