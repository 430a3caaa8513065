"""Report types, knowledge base documents and super admin settings."""

from __future__ import annotations

import io
import os

import pytest

from reportdesk.domain.exceptions import ExternalServiceError
from reportdesk.models.audit_log import AuditLog
from reportdesk.utils import media


@pytest.fixture
def report_type_id(client, headers):
    response = client.post(
        "/api/v1/report-types",
        json={"name": "Ultrasonic", "description": "UT thickness surveys"},
        headers=headers["admin"],
    )
    assert response.status_code == 201
    return response.get_json()["id"]


def upload_doc(client, headers, report_type_id, name="procedure.pdf"):
    return client.post(
        "/api/v1/knowledge-base/documents",
        data={"file": (io.BytesIO(b"%PDF-1.4 fake"), name), "report_type_id": report_type_id},
        content_type="multipart/form-data",
        headers=headers,
    )


class TestReportTypes:
    def test_listed_by_name(self, client, headers, report_type_id):
        client.post("/api/v1/report-types", json={"name": "Magnetic particle"}, headers=headers["admin"])

        response = client.get("/api/v1/report-types", headers=headers["staff"])
        assert [rt["name"] for rt in response.get_json()] == ["Magnetic particle", "Ultrasonic"]

    def test_staff_cannot_manage(self, client, headers):
        response = client.post("/api/v1/report-types", json={"name": "RT"}, headers=headers["staff"])
        assert response.status_code == 403

    def test_name_required(self, client, headers):
        response = client.post("/api/v1/report-types", json={"name": "  "}, headers=headers["admin"])
        assert response.status_code == 400

    def test_update(self, client, headers, report_type_id):
        response = client.put(
            f"/api/v1/report-types/{report_type_id}",
            json={"description": "Wall thickness"},
            headers=headers["admin"],
        )
        assert response.status_code == 200
        assert response.get_json()["description"] == "Wall thickness"
        assert response.get_json()["name"] == "Ultrasonic"

    def test_reports_must_reference_known_type(self, client, headers, report_type_id):
        ok = client.post(
            "/api/v1/reports", json={"title": "UT", "report_type_id": report_type_id}, headers=headers["staff"]
        )
        assert ok.status_code == 201

        bad = client.post(
            "/api/v1/reports", json={"title": "UT", "report_type_id": "missing"}, headers=headers["staff"]
        )
        assert bad.status_code == 400
        assert bad.get_json()["message"] == "Unknown report type"


class TestKnowledgeBaseDocuments:
    def test_upload_extracts_content(self, app, client, headers, functions, report_type_id):
        response = upload_doc(client, headers["admin"], report_type_id)

        assert response.status_code == 201
        body = response.get_json()
        assert body["content"] == "Parsed procedure.pdf"
        assert body["file_type"] == "pdf"
        assert body["file_path"].startswith(f"{report_type_id}/")
        assert functions.calls[0][0] == "parse-kb-document"

        stored = os.path.join(app.config["UPLOAD_FOLDER"], media.KNOWLEDGE_BASE_BUCKET, body["file_path"])
        assert os.path.exists(stored)

        listed = client.get(
            f"/api/v1/knowledge-base/documents?report_type_id={report_type_id}", headers=headers["admin"]
        ).get_json()
        assert [doc["id"] for doc in listed] == [body["id"]]
        assert "content" not in listed[0]

    def test_extraction_failure_keeps_the_upload(self, client, headers, functions, report_type_id):
        functions.parse_error = ExternalServiceError("parser crashed", upstream_status=500)

        response = upload_doc(client, headers["admin"], report_type_id, name="notes.txt")

        assert response.status_code == 201
        assert response.get_json()["content"] == "Document uploaded: notes.txt. Content extraction failed."

    def test_rejects_unsupported_files(self, client, headers, functions, report_type_id):
        response = upload_doc(client, headers["admin"], report_type_id, name="photo.png")
        assert response.status_code == 400
        assert functions.calls == []

    def test_requires_report_type(self, client, headers, functions):
        response = client.post(
            "/api/v1/knowledge-base/documents",
            data={"file": (io.BytesIO(b"text"), "notes.txt")},
            content_type="multipart/form-data",
            headers=headers["admin"],
        )
        assert response.status_code == 400
        assert response.get_json()["message"] == "Please select a report type and file"

    def test_delete_removes_file(self, app, client, headers, functions, report_type_id):
        body = upload_doc(client, headers["admin"], report_type_id).get_json()
        stored = os.path.join(app.config["UPLOAD_FOLDER"], media.KNOWLEDGE_BASE_BUCKET, body["file_path"])

        response = client.delete(f"/api/v1/knowledge-base/documents/{body['id']}", headers=headers["admin"])

        assert response.status_code == 200
        assert not os.path.exists(stored)
        assert client.get("/api/v1/knowledge-base/documents", headers=headers["admin"]).get_json() == []

    def test_deleting_report_type_removes_documents(self, app, client, headers, functions, report_type_id):
        body = upload_doc(client, headers["admin"], report_type_id).get_json()
        stored = os.path.join(app.config["UPLOAD_FOLDER"], media.KNOWLEDGE_BASE_BUCKET, body["file_path"])

        response = client.delete(f"/api/v1/report-types/{report_type_id}", headers=headers["admin"])

        assert response.status_code == 200
        assert not os.path.exists(stored)
        assert client.get("/api/v1/knowledge-base/documents", headers=headers["admin"]).get_json() == []


class TestAiAssist:
    def test_generate(self, client, headers, functions, report_type_id):
        response = client.post(
            "/api/v1/reports/generate",
            json={"reportTypeId": report_type_id, "userInputs": {"location": "Tank 4"}},
            headers=headers["staff"],
        )
        assert response.status_code == 200
        assert response.get_json() == {"content": "Generated report body"}
        assert functions.calls == [("generate-report", report_type_id, {"location": "Tank 4"})]

    def test_generate_requires_report_type(self, client, headers, functions):
        response = client.post("/api/v1/reports/generate", json={"userInputs": {}}, headers=headers["staff"])
        assert response.status_code == 400
        assert functions.calls == []

    def test_review_visible_report(self, client, headers, functions, report_id):
        response = client.post(f"/api/v1/reports/{report_id}/review", headers=headers["staff"])
        assert response.status_code == 200
        assert response.get_json()["review"]["score"] == 8

    def test_review_hidden_report(self, client, headers, functions, report_id):
        response = client.post(f"/api/v1/reports/{report_id}/review", headers=headers["other_staff"])
        assert response.status_code == 404
        assert functions.calls == []

    def test_inactive_cannot_generate(self, client, headers, functions, report_type_id):
        response = client.post(
            "/api/v1/reports/generate",
            json={"reportTypeId": report_type_id, "userInputs": {}},
            headers=headers["inactive"],
        )
        assert response.status_code == 403


class TestSettings:
    def test_only_super_admin(self, client, headers):
        response = client.put(
            "/api/v1/super-admin/settings/openai_model", json={"value": {"model": "x"}}, headers=headers["admin"]
        )
        assert response.status_code == 403

    def test_api_key_is_masked(self, app, client, headers):
        value = {"model": "gpt-4o-mini", "apiKey": "sk-secret-1234"}
        response = client.put(
            "/api/v1/super-admin/settings/openai_model", json={"value": value}, headers=headers["super_admin"]
        )
        assert response.status_code == 200
        assert response.get_json()["value"] == {"model": "gpt-4o-mini", "apiKey": "...1234"}

        response = client.get("/api/v1/super-admin/settings/openai_model", headers=headers["super_admin"])
        assert response.get_json()["value"]["apiKey"] == "...1234"

        entry = AuditLog.query.filter_by(action="setting.update").one()
        assert entry.payload["fields"] == ["model"]

    def test_missing_setting(self, client, headers):
        response = client.get("/api/v1/super-admin/settings/unknown", headers=headers["super_admin"])
        assert response.status_code == 404

    def test_models_use_saved_key(self, client, headers, functions):
        client.put(
            "/api/v1/super-admin/settings/openai_model",
            json={"value": {"model": "gpt-4o", "apiKey": "sk-saved"}},
            headers=headers["super_admin"],
        )

        response = client.post("/api/v1/super-admin/openai-models", json={}, headers=headers["super_admin"])

        assert response.status_code == 200
        assert response.get_json() == {"models": [{"id": "gpt-4o-mini"}]}
        assert functions.calls == [("fetch-openai-models", "sk-saved")]

    def test_models_need_a_key(self, client, headers, functions):
        response = client.post("/api/v1/super-admin/openai-models", json={}, headers=headers["super_admin"])
        assert response.status_code == 400
        assert functions.calls == []
