"""API tests for projects, templates, uploads and the video library."""

import pytest


def _project(client, name: str = "Launch Campaign", org: str | None = None) -> dict:
    headers = {"X-Org-Id": org} if org else {}
    response = client.post("/api/v1/projects", json={"name": name}, headers=headers)
    assert response.status_code == 201
    return response.json()


def _upload(client, project_id: str, filename: str = "teaser.mp4") -> dict:
    response = client.post(
        "/api/v1/uploads/complete",
        json={"filename": filename, "projectId": project_id, "durationSec": 10},
    )
    assert response.status_code == 201
    return response.json()["video"]


class TestProjectsAPI:
    """Tests for /api/v1/projects."""

    def test_crud(self, client):
        """Test create, list, update and delete."""
        created = _project(client)

        listed = client.get("/api/v1/projects").json()
        updated = client.put(
            f"/api/v1/projects/{created['id']}", json={"description": "Autumn"}
        ).json()
        deleted = client.delete(f"/api/v1/projects/{created['id']}")

        assert [p["id"] for p in listed] == [created["id"]]
        assert updated["description"] == "Autumn"
        assert updated["name"] == "Launch Campaign"
        assert deleted.status_code == 204
        assert client.get("/api/v1/projects").json() == []

    def test_validation_error_shape(self, client):
        """Test that schema violations return the error body with 400."""
        response = client.post("/api/v1/projects", json={"name": ""})

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["message"] == "Invalid input data"
        assert body["details"]

    def test_delete_with_videos_conflicts(self, client):
        """Test that a project with videos cannot be deleted."""
        project = _project(client)
        _upload(client, project["id"])

        response = client.delete(f"/api/v1/projects/{project['id']}")

        assert response.status_code == 409
        assert response.json()["code"] == "PROJECT_HAS_VIDEOS"

    def test_unknown_org(self, client):
        """Test that an unknown organization cannot create projects."""
        response = client.post(
            "/api/v1/projects", json={"name": "Ghost"}, headers={"X-Org-Id": "org-404"}
        )

        assert response.status_code == 404
        assert response.json()["code"] == "ORGANIZATION_NOT_FOUND"


class TestTemplatesAPI:
    """Tests for /api/v1/templates."""

    def test_crud(self, client):
        """Test create, replace and delete."""
        created = client.post(
            "/api/v1/templates",
            json={"name": "Teaser", "prompt": "A fast teaser for a launch", "stylePreset": "bold"},
        )
        assert created.status_code == 201
        template = created.json()
        assert template["stylePreset"] == "bold"

        replaced = client.put(
            f"/api/v1/templates/{template['id']}",
            json={"name": "Teaser v2", "prompt": "A calmer teaser for a launch"},
        ).json()
        assert replaced["name"] == "Teaser v2"
        assert replaced["stylePreset"] is None

        assert client.delete(f"/api/v1/templates/{template['id']}").status_code == 204
        assert client.get("/api/v1/templates").json() == []

    def test_missing_template(self, client):
        """Test that replacing an unknown template is a 404."""
        response = client.put(
            "/api/v1/templates/missing",
            json={"name": "Nope", "prompt": "Does not matter at all"},
        )

        assert response.status_code == 404
        assert response.json()["code"] == "TEMPLATE_NOT_FOUND"


class TestUploadsAPI:
    """Tests for /api/v1/uploads/complete."""

    def test_complete_upload(self, client):
        """Test that a finished upload becomes a ready video."""
        project = _project(client)

        video = _upload(client, project["id"], filename="city-tour.mov")

        assert video["title"] == "city-tour"
        assert video["status"] == "ready"
        assert video["sourceType"] == "uploaded"
        assert video["metadata"]["mimeType"] == "video/quicktime"
        assert set(k for k, v in video["urls"].items() if v) == {"mp4", "thumb"}

    def test_rejects_non_video(self, client):
        """Test that non-video files are rejected."""
        project = _project(client)

        response = client.post(
            "/api/v1/uploads/complete",
            json={"filename": "slides.pdf", "projectId": project["id"], "durationSec": 10},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid file type. Only video files are allowed."


class TestVideosAPI:
    """Tests for /api/v1/videos."""

    def test_list_filter_and_paginate(self, client):
        """Test listing with search, limit and cursor."""
        project = _project(client)
        for name in ("alpha.mp4", "beta.mp4", "gamma.mp4"):
            _upload(client, project["id"], filename=name)

        first = client.get("/api/v1/videos", params={"limit": 2, "sortBy": "title-az"}).json()
        second = client.get(
            "/api/v1/videos",
            params={"limit": 2, "sortBy": "title-az", "cursor": first["nextCursor"]},
        ).json()
        searched = client.get("/api/v1/videos", params={"query": "BET"}).json()

        assert [v["title"] for v in first["items"]] == ["alpha", "beta"]
        assert first["total"] == 3
        assert [v["title"] for v in second["items"]] == ["gamma"]
        assert second["nextCursor"] is None
        assert [v["title"] for v in searched["items"]] == ["beta"]

    def test_create_video(self, client):
        """Test registering videos directly with their initial status."""
        project = _project(client)
        payload = {"title": "Studio cut", "projectId": project["id"], "durationSec": 30}

        uploaded = client.post("/api/v1/videos", json={**payload, "sourceType": "uploaded"})
        generated = client.post("/api/v1/videos", json={**payload, "sourceType": "generated"})

        assert uploaded.status_code == 201
        assert uploaded.json()["status"] == "ready"
        assert uploaded.json()["sourceType"] == "uploaded"
        assert generated.status_code == 201
        assert generated.json()["status"] == "queued"
        assert client.get("/api/v1/videos").json()["total"] == 2

    @pytest.mark.parametrize(
        "overrides",
        [{"title": ""}, {"durationSec": 0}, {"durationSec": 301}, {"sourceType": "stock"}],
    )
    def test_create_video_invalid(self, client, overrides):
        """Test that invalid video bodies are rejected with 400."""
        project = _project(client)
        payload = {
            "title": "Studio cut",
            "projectId": project["id"],
            "sourceType": "uploaded",
            "durationSec": 30,
            **overrides,
        }

        response = client.post("/api/v1/videos", json=payload)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_status_filter_repeated(self, client):
        """Test that status can be given several times."""
        project = _project(client)
        _upload(client, project["id"])

        ready = client.get("/api/v1/videos", params=[("status", "ready"), ("status", "failed")])
        queued = client.get("/api/v1/videos", params={"status": "queued"})

        assert ready.json()["total"] == 1
        assert queued.json()["total"] == 0

    @pytest.mark.parametrize(
        "params",
        [{"limit": 0}, {"limit": 101}, {"sortBy": "random"}, {"minScore": 101}],
    )
    def test_invalid_query(self, client, params):
        """Test that out-of-range query parameters are rejected with 400."""
        response = client.get("/api/v1/videos", params=params)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_invalid_cursor(self, client):
        """Test that a malformed cursor is rejected."""
        response = client.get("/api/v1/videos", params={"cursor": "abc"})

        assert response.status_code == 400

    def test_detail_update_delete(self, client):
        """Test detail, partial update and delete of one video."""
        project = _project(client)
        video = _upload(client, project["id"])

        detail = client.get(f"/api/v1/videos/{video['id']}").json()
        updated = client.put(
            f"/api/v1/videos/{video['id']}",
            json={"feedbackSummary": "Tighten the intro", "status": "failed"},
        ).json()
        deleted = client.delete(f"/api/v1/videos/{video['id']}")
        missing = client.get(f"/api/v1/videos/{video['id']}")

        assert detail["video"]["id"] == video["id"]
        assert detail["versions"] == []
        assert updated["feedbackSummary"] == "Tighten the intro"
        assert updated["status"] == "failed"
        assert deleted.status_code == 204
        assert missing.status_code == 404
        assert missing.json()["code"] == "VIDEO_NOT_FOUND"

    def test_other_org_cannot_see_video(self, client):
        """Test that videos are invisible to other organizations."""
        project = _project(client)
        video = _upload(client, project["id"])

        response = client.get(f"/api/v1/videos/{video['id']}", headers={"X-Org-Id": "org-2"})
        listing = client.get("/api/v1/videos", headers={"X-Org-Id": "org-2"}).json()

        assert response.status_code == 404
        assert listing["total"] == 0
