"""Integration tests for project endpoints."""

import asyncio

import pytest


def create_project(client, headers, **overrides):
    body = {"title": "T", "type": "novel", **overrides}
    return client.post("/api/projects", json=body, headers=headers)


class TestProjectsAuth:
    """Every project route requires a bearer token."""

    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", "/api/projects"),
            ("get", "/api/projects/p1"),
            ("post", "/api/projects"),
            ("patch", "/api/projects/p1"),
            ("delete", "/api/projects/p1"),
            ("post", "/api/projects/p1/publish"),
        ],
    )
    def test_missing_token(self, client, method, path):
        response = client.request(method.upper(), path, json={})
        assert response.status_code == 401
        data = response.json()
        assert data["error"] == "Unauthorized"
        assert data["message"] == "Missing or invalid authorization header"

    def test_invalid_token(self, client, invalid_user_headers):
        response = client.get("/api/projects", headers=invalid_user_headers)
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid or expired token"

    def test_lowercase_scheme_rejected(self, client, free_user_headers):
        token = free_user_headers["Authorization"].removeprefix("Bearer ")
        response = client.get("/api/projects", headers={"Authorization": f"bearer {token}"})
        assert response.status_code == 401


class TestCreateProjectAPI:
    """Tests for POST /api/projects."""

    def test_create_for_fresh_free_user(self, client, free_user_headers):
        response = create_project(client, free_user_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Project created successfully"
        project = data["data"]
        assert project["status"] == "draft"
        assert project["word_count"] == 0
        assert project["tags"] == []
        assert project["is_published"] is False
        assert project["content"] == ""

    def test_create_with_all_fields(self, client, free_user, sample_project_request):
        user, headers = free_user
        response = client.post("/api/projects", json=sample_project_request, headers=headers)
        assert response.status_code == 201
        project = response.json()["data"]
        assert project["user_id"] == user.id
        assert project["tags"] == ["family", "survival"]
        assert project["genre"] == "historical"

    def test_fourth_free_project_forbidden(self, client, free_user_headers):
        for i in range(3):
            assert create_project(client, free_user_headers, title=f"P{i}").status_code == 201

        response = create_project(client, free_user_headers, title="P3")
        assert response.status_code == 403
        data = response.json()
        assert data["code"] == "QUOTA_EXCEEDED"
        assert data["message"] == (
            "Project limit reached for free tier. Upgrade to create more projects."
        )
        assert data["details"]["limit"] == 3

    def test_pro_user_not_limited(self, client, pro_user):
        _, headers = pro_user
        for i in range(5):
            assert create_project(client, headers, title=f"P{i}").status_code == 201

    @pytest.mark.parametrize("body", [{"type": "novel"}, {"title": "T"}, {"title": "", "type": "novel"}])
    def test_missing_fields(self, client, free_user_headers, body):
        response = client.post("/api/projects", json=body, headers=free_user_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Title and type are required"

    def test_invalid_type(self, client, free_user_headers):
        response = create_project(client, free_user_headers, type="screenplay")
        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid project type. Must be one of:")

    def test_invalid_tags(self, client, free_user_headers):
        response = create_project(client, free_user_headers, tags="not-a-list")
        assert response.status_code == 400

    def test_user_without_profile(self, client, gateway):
        identity = asyncio.run(gateway.create_account("ghost@test.com", "pw123456"))
        token = gateway.issue_token(identity)
        response = create_project(client, {"Authorization": f"Bearer {token}"})
        assert response.status_code == 404
        assert response.json()["error"] == "User not found"


class TestReadProjectsAPI:
    """Tests for GET /api/projects and GET /api/projects/{id}."""

    def test_list_empty(self, client, free_user_headers):
        response = client.get("/api/projects", headers=free_user_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": [], "count": 0}

    def test_list_newest_update_first(self, client, free_user_headers):
        ids = [create_project(client, free_user_headers, title=f"P{i}").json()["data"]["id"] for i in range(3)]
        client.patch(f"/api/projects/{ids[0]}", json={"content": "touched"}, headers=free_user_headers)

        data = client.get("/api/projects", headers=free_user_headers).json()

        assert data["count"] == 3
        assert [p["id"] for p in data["data"]] == [ids[0], ids[2], ids[1]]

    def test_get_own_project(self, client, free_user_headers):
        project_id = create_project(client, free_user_headers).json()["data"]["id"]
        response = client.get(f"/api/projects/{project_id}", headers=free_user_headers)
        assert response.status_code == 200
        assert response.json()["data"]["id"] == project_id

    def test_get_nonexistent(self, client, free_user_headers):
        response = client.get("/api/projects/does-not-exist", headers=free_user_headers)
        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "Project not found"
        assert data["success"] is False


class TestCrossUserAccess:
    """Another user's project is indistinguishable from a missing one."""

    @pytest.fixture
    def foreign_project_id(self, client, other_user):
        _, headers = other_user
        return create_project(client, headers, title="Private").json()["data"]["id"]

    def test_get(self, client, free_user_headers, foreign_project_id):
        response = client.get(f"/api/projects/{foreign_project_id}", headers=free_user_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "Project not found"

    def test_patch(self, client, free_user_headers, other_user, foreign_project_id):
        response = client.patch(
            f"/api/projects/{foreign_project_id}",
            json={"title": "Stolen"},
            headers=free_user_headers,
        )
        assert response.status_code == 404

        _, owner_headers = other_user
        owned = client.get(f"/api/projects/{foreign_project_id}", headers=owner_headers)
        assert owned.json()["data"]["title"] == "Private"

    def test_delete(self, client, free_user_headers, other_user, foreign_project_id):
        response = client.delete(f"/api/projects/{foreign_project_id}", headers=free_user_headers)
        assert response.status_code == 404

        _, owner_headers = other_user
        assert client.get(f"/api/projects/{foreign_project_id}", headers=owner_headers).status_code == 200

    def test_publish(self, client, free_user_headers, foreign_project_id):
        response = client.post(
            f"/api/projects/{foreign_project_id}/publish", headers=free_user_headers
        )
        assert response.status_code == 404

    def test_not_listed(self, client, free_user_headers, foreign_project_id):
        data = client.get("/api/projects", headers=free_user_headers).json()
        assert foreign_project_id not in [p["id"] for p in data["data"]]


class TestUpdateProjectAPI:
    """Tests for PATCH /api/projects/{id}."""

    @pytest.fixture
    def project(self, client, free_user_headers):
        return create_project(client, free_user_headers).json()["data"]

    def test_content_updates_word_count(self, client, free_user_headers, project):
        response = client.patch(
            f"/api/projects/{project['id']}",
            json={"content": "  hello   world "},
            headers=free_user_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Project updated successfully"
        assert data["data"]["word_count"] == 2

    def test_empty_content(self, client, free_user_headers, project):
        client.patch(f"/api/projects/{project['id']}", json={"content": "a b c"}, headers=free_user_headers)
        response = client.patch(
            f"/api/projects/{project['id']}", json={"content": ""}, headers=free_user_headers
        )
        assert response.json()["data"]["word_count"] == 0

    def test_server_fields_ignored(self, client, free_user_headers, other_user, project):
        other, _ = other_user
        response = client.patch(
            f"/api/projects/{project['id']}",
            json={
                "title": "Renamed",
                "id": "hijacked",
                "user_id": other.id,
                "created_at": "2000-01-01T00:00:00Z",
                "word_count": 12345,
                "is_published": True,
            },
            headers=free_user_headers,
        )
        assert response.status_code == 200
        updated = response.json()["data"]
        assert updated["title"] == "Renamed"
        assert updated["id"] == project["id"]
        assert updated["user_id"] == project["user_id"]
        assert updated["created_at"] == project["created_at"]
        assert updated["word_count"] == 0
        assert updated["is_published"] is False

    def test_status_and_tags(self, client, free_user_headers, project):
        response = client.patch(
            f"/api/projects/{project['id']}",
            json={"status": "in_progress", "tags": ["draft-2"]},
            headers=free_user_headers,
        )
        data = response.json()["data"]
        assert data["status"] == "in_progress"
        assert data["tags"] == ["draft-2"]

    def test_invalid_status(self, client, free_user_headers, project):
        response = client.patch(
            f"/api/projects/{project['id']}", json={"status": "lost"}, headers=free_user_headers
        )
        assert response.status_code == 400

    def test_status_published_rejected(self, client, free_user_headers, project):
        response = client.patch(
            f"/api/projects/{project['id']}", json={"status": "published"}, headers=free_user_headers
        )
        assert response.status_code == 400

    def test_update_nonexistent(self, client, free_user_headers):
        response = client.patch("/api/projects/missing", json={"title": "X"}, headers=free_user_headers)
        assert response.status_code == 404


class TestDeleteProjectAPI:
    def test_delete(self, client, free_user_headers):
        project_id = create_project(client, free_user_headers).json()["data"]["id"]

        response = client.delete(f"/api/projects/{project_id}", headers=free_user_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Project deleted successfully"}

        assert client.get(f"/api/projects/{project_id}", headers=free_user_headers).status_code == 404

    def test_delete_nonexistent(self, client, free_user_headers):
        response = client.delete("/api/projects/missing", headers=free_user_headers)
        assert response.status_code == 404


class TestPublishProjectAPI:
    def test_publish(self, client, free_user_headers):
        project_id = create_project(client, free_user_headers).json()["data"]["id"]

        response = client.post(f"/api/projects/{project_id}/publish", headers=free_user_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Project published successfully"
        assert data["data"]["is_published"] is True
        assert data["data"]["status"] == "published"
        assert data["data"]["published_at"] is not None

    def test_publish_nonexistent(self, client, free_user_headers):
        response = client.post("/api/projects/missing/publish", headers=free_user_headers)
        assert response.status_code == 404
