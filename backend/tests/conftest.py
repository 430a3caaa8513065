"""Shared fixtures: an app on in-memory SQLite, one user per role, auth headers."""

from __future__ import annotations

import pytest
from flask import g
from flask_jwt_extended import create_access_token

from reportdesk import create_app
from reportdesk.auth_context import AuthContext
from reportdesk.domain.roles import Role
from reportdesk.extensions import db
from reportdesk.models.user import Profile, UserRole, load_role


class FakeFunctionsClient:
    """Stands in for the AI functions; records every call."""

    def __init__(self):
        self.calls = []
        self.parse_error = None

    def generate_report(self, report_type_id, user_inputs):
        self.calls.append(("generate-report", report_type_id, user_inputs))
        return "Generated report body"

    def review_report(self, report_id):
        self.calls.append(("review-report", report_id))
        return {"score": 8, "suggestions": ["Add photos"]}

    def parse_kb_document(self, *, file_path, report_type_id, file_name, file_type):
        self.calls.append(("parse-kb-document", file_path, report_type_id, file_name, file_type))
        if self.parse_error is not None:
            raise self.parse_error
        return {"content": f"Parsed {file_name}"}

    def fetch_openai_models(self, api_key):
        self.calls.append(("fetch-openai-models", api_key))
        return [{"id": "gpt-4o-mini"}]


@pytest.fixture
def app(tmp_path):
    app = create_app("testing")
    app.config["UPLOAD_FOLDER"] = str(tmp_path / "uploads")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def functions(app):
    fake = FakeFunctionsClient()
    app.extensions["functions_client"] = fake
    return fake


def make_user(email, role: Role | None, password="secret123"):
    profile = Profile()
    profile.email = email
    profile.full_name = email.split("@")[0].title()
    profile.set_password(password)
    db.session.add(profile)
    db.session.flush()

    if role is not None and role is not Role.INACTIVE:
        row = UserRole()
        row.user_id = profile.id
        row.role = role.value
        db.session.add(row)

    db.session.commit()
    return profile


@pytest.fixture
def users(app):
    return {
        "super_admin": make_user("root@example.com", Role.SUPER_ADMIN),
        "admin": make_user("admin@example.com", Role.ADMIN),
        "staff": make_user("staff@example.com", Role.STAFF),
        "other_staff": make_user("other@example.com", Role.STAFF),
        "inactive": make_user("new@example.com", None),
    }


@pytest.fixture
def headers(users):
    """``headers["staff"]`` etc. carry a bearer token for that user."""
    return {
        name: {"Authorization": f"Bearer {create_access_token(identity=profile.id)}"}
        for name, profile in users.items()
    }


@pytest.fixture
def signed_in(app):
    """Run application code as a given user outside of an HTTP request."""
    contexts = []

    def sign_in(profile):
        ctx = app.test_request_context()
        ctx.push()
        contexts.append(ctx)

        auth = AuthContext(role_loader=load_role)
        auth.sign_in(profile.id, profile.email)
        g.auth = auth
        return auth

    yield sign_in

    for ctx in reversed(contexts):
        ctx.pop()


@pytest.fixture
def report_id(client, headers):
    response = client.post("/api/v1/reports", json={"title": "Tank inspection"}, headers=headers["staff"])
    assert response.status_code == 201
    return response.get_json()["id"]

