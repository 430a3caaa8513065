"""Company folders and photo upload blocks."""

from __future__ import annotations

import io
import os

import pytest

from reportdesk.domain.exceptions import NotFoundError, ValidationError
from reportdesk.utils import media

from .helpers import add_block


def complete_report(client, headers, title, client_name):
    report = client.post(
        "/api/v1/reports", json={"title": title, "client_name": client_name}, headers=headers["staff"]
    ).get_json()
    add_block(client, headers["staff"], report["id"], "text")
    client.post(f"/api/v1/reports/{report['id']}/submit", headers=headers["staff"])
    client.post(f"/api/v1/reports/{report['id']}/approve", headers=headers["admin"])
    return report["id"]


class TestCompanyReports:
    def test_grouped_by_client(self, client, headers, report_id):
        older = complete_report(client, headers, "First", "beta Corp")
        newer = complete_report(client, headers, "Second", "beta Corp")
        complete_report(client, headers, "Third", "Acme")
        complete_report(client, headers, "Fourth", None)

        folders = client.get("/api/v1/reports/company", headers=headers["other_staff"]).get_json()

        assert [folder["client_name"] for folder in folders] == ["Acme", "beta Corp", "Unassigned"]
        beta = folders[1]
        assert beta["count"] == 2
        assert [report["id"] for report in beta["reports"]] == [newer, older]
        # Drafts never show up
        assert report_id not in {r["id"] for folder in folders for r in folder["reports"]}

    def test_search(self, client, headers):
        complete_report(client, headers, "First", "Acme")
        complete_report(client, headers, "Second", "Beta")

        folders = client.get("/api/v1/reports/company?search=acm", headers=headers["staff"]).get_json()
        assert [folder["client_name"] for folder in folders] == ["Acme"]


@pytest.fixture
def photo_block(client, headers, report_id):
    return add_block(client, headers["staff"], report_id, "photo_upload").get_json()["id"]


def upload(client, headers, report_id, block_id, name="crack.jpg", caption="Weld toe"):
    return client.post(
        f"/api/v1/reports/{report_id}/blocks/{block_id}/photos",
        data={"file": (io.BytesIO(b"\xff\xd8fake-jpeg"), name), "caption": caption},
        content_type="multipart/form-data",
        headers=headers,
    )


def stored_file(app, url):
    path = media.path_from_public_url(media.PHOTOS_BUCKET, url)
    return os.path.join(app.config["UPLOAD_FOLDER"], media.PHOTOS_BUCKET, path)


class TestPhotos:
    def test_upload_and_remove(self, app, client, headers, report_id, photo_block):
        response = upload(client, headers["staff"], report_id, photo_block)
        assert response.status_code == 201

        photos = response.get_json()["content"]["photos"]
        assert len(photos) == 1
        assert photos[0]["filename"] == "crack.jpg"
        assert photos[0]["caption"] == "Weld toe"
        assert photos[0]["url"].startswith("/storage/inspection-photos/")

        file_path = stored_file(app, photos[0]["url"])
        assert os.path.exists(file_path)
        assert client.get(photos[0]["url"]).status_code == 200

        response = client.delete(
            f"/api/v1/reports/{report_id}/blocks/{photo_block}/photos/0", headers=headers["staff"]
        )
        assert response.status_code == 200
        assert response.get_json()["content"]["photos"] == []
        assert not os.path.exists(file_path)

    def test_rejects_non_images(self, client, headers, report_id, photo_block):
        assert upload(client, headers["staff"], report_id, photo_block, name="virus.exe").status_code == 400

    def test_only_photo_blocks_take_photos(self, client, headers, report_id):
        text_block = add_block(client, headers["staff"], report_id, "text").get_json()["id"]
        assert upload(client, headers["staff"], report_id, text_block).status_code == 400

    def test_missing_photo_index(self, client, headers, report_id, photo_block):
        response = client.delete(
            f"/api/v1/reports/{report_id}/blocks/{photo_block}/photos/3", headers=headers["staff"]
        )
        assert response.status_code == 400

    def test_deleting_report_removes_its_photos(self, app, client, headers, report_id, photo_block):
        url = upload(client, headers["staff"], report_id, photo_block).get_json()["content"]["photos"][0]["url"]
        file_path = stored_file(app, url)

        client.delete(f"/api/v1/reports/{report_id}", headers=headers["staff"])
        assert not os.path.exists(file_path)

    def test_deleting_block_removes_its_photos(self, app, client, headers, report_id, photo_block):
        url = upload(client, headers["staff"], report_id, photo_block).get_json()["content"]["photos"][0]["url"]
        file_path = stored_file(app, url)

        client.delete(f"/api/v1/reports/{report_id}/blocks/{photo_block}", headers=headers["staff"])
        assert not os.path.exists(file_path)

    def test_download_stored_photo(self, client, headers, report_id, photo_block):
        url = upload(client, headers["staff"], report_id, photo_block).get_json()["content"]["photos"][0]["url"]
        path = media.path_from_public_url(media.PHOTOS_BUCKET, url)

        assert media.download(media.PHOTOS_BUCKET, path) == b"\xff\xd8fake-jpeg"
        with pytest.raises(NotFoundError):
            media.download(media.PHOTOS_BUCKET, "missing.jpg")
        with pytest.raises(ValidationError):
            media.download(media.PHOTOS_BUCKET, "../../etc/passwd")
