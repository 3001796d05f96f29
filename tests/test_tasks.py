"""Tests for the /v1/tasks endpoints."""

import uuid
from unittest.mock import patch

import pytest

from taskapi.schemas.common import MAX_PAGE


@pytest.fixture
def create_task(client, auth_headers):
    def _create(title="Write report", **fields):
        resp = client.post("/v1/tasks", json={"title": title, **fields}, headers=auth_headers)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()["data"]["task"]
    return _create


class TestCreate:
    def test_create_defaults(self, create_task):
        task = create_task()
        assert task["title"] == "Write report"
        assert task["description"] == ""
        assert task["status"] == "pending"
        assert task["due_date"] is None
        uuid.UUID(task["id"])

    def test_due_date_stored_as_utc(self, create_task):
        task = create_task(due_date="2026-12-01T10:00:00+02:00")
        assert task["due_date"] == "2026-12-01T08:00:00+00:00"

    @pytest.mark.parametrize("payload", [{}, {"title": ""}, {"title": "   "}, {"title": "x" * 256}])
    def test_invalid_title(self, client, auth_headers, payload):
        resp = client.post("/v1/tasks", json=payload, headers=auth_headers)
        assert resp.status_code == 400
        assert "title" in resp.get_json()["errors"]

    def test_requires_auth(self, client):
        resp = client.post("/v1/tasks", json={"title": "x"})
        assert resp.status_code == 401

    def test_unexpected_failure_is_generic_500(self, client, app, auth_headers):
        repo = app.extensions["taskapi.repositories"].tasks
        with patch.object(repo, "create", side_effect=RuntimeError("disk on fire")):
            resp = client.post("/v1/tasks", json={"title": "x"}, headers=auth_headers)
        assert resp.status_code == 500
        body = resp.get_json()
        assert body["message"] == "Failed to create task"
        assert body["error_id"]
        assert "disk on fire" not in resp.get_data(as_text=True)


class TestRead:
    def test_get_own_task(self, client, auth_headers, create_task):
        task = create_task()
        resp = client.get(f"/v1/tasks/{task['id']}", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.get_json()["data"]["task"]["id"] == task["id"]

    def test_invalid_id_is_400(self, client, auth_headers):
        resp = client.get("/v1/tasks/not-a-uuid", headers=auth_headers)
        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Invalid task ID"

    def test_missing_task_is_404(self, client, auth_headers):
        resp = client.get(f"/v1/tasks/{uuid.uuid4()}", headers=auth_headers)
        assert resp.status_code == 404
        assert resp.get_json()["message"] == "Task not found"

    def test_other_users_task_is_404(self, client, create_task, register_user):
        task = create_task()
        other = register_user(email="bob@example.com", name="Bob")
        resp = client.get(f"/v1/tasks/{task['id']}",
                          headers={"Authorization": f"Bearer {other['token']}"})
        assert resp.status_code == 404


class TestList:
    def test_empty_list(self, client, auth_headers):
        resp = client.get("/v1/tasks", headers=auth_headers)
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["tasks"] == []
        assert data["pagination"] == {"page": 1, "limit": 10, "total": 0, "total_pages": 0}

    def test_pagination_newest_first(self, client, auth_headers, create_task):
        for title in ("first", "second", "third"):
            create_task(title)

        page1 = client.get("/v1/tasks?page=1&limit=2", headers=auth_headers).get_json()["data"]
        page2 = client.get("/v1/tasks?page=2&limit=2", headers=auth_headers).get_json()["data"]

        assert [t["title"] for t in page1["tasks"]] == ["third", "second"]
        assert [t["title"] for t in page2["tasks"]] == ["first"]
        assert page1["pagination"] == {"page": 1, "limit": 2, "total": 3, "total_pages": 2}

    def test_bad_params_fall_back_to_defaults(self, client, auth_headers):
        resp = client.get("/v1/tasks?page=abc&limit=-5", headers=auth_headers)
        pagination = resp.get_json()["data"]["pagination"]
        assert pagination["page"] == 1
        assert pagination["limit"] == 10

    def test_huge_page_is_capped(self, client, auth_headers, create_task):
        create_task()
        resp = client.get("/v1/tasks?page=100000000000000000000", headers=auth_headers)
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["tasks"] == []
        assert data["pagination"]["page"] == MAX_PAGE
        assert data["pagination"]["total"] == 1

    def test_limit_is_capped(self, client, auth_headers):
        resp = client.get("/v1/tasks?limit=1000", headers=auth_headers)
        assert resp.get_json()["data"]["pagination"]["limit"] == 100

    def test_only_own_tasks_listed(self, client, create_task, register_user):
        create_task()
        other = register_user(email="bob@example.com", name="Bob")
        resp = client.get("/v1/tasks", headers={"Authorization": f"Bearer {other['token']}"})
        assert resp.get_json()["data"]["tasks"] == []


class TestUpdate:
    def test_partial_update(self, client, auth_headers, create_task):
        task = create_task(description="draft")
        resp = client.put(f"/v1/tasks/{task['id']}", json={"status": "in_progress"}, headers=auth_headers)
        assert resp.status_code == 200
        updated = resp.get_json()["data"]["task"]
        assert updated["status"] == "in_progress"
        assert updated["title"] == task["title"]
        assert updated["description"] == "draft"

        fetched = client.get(f"/v1/tasks/{task['id']}", headers=auth_headers).get_json()["data"]["task"]
        assert fetched["status"] == "in_progress"

    def test_invalid_status_is_400(self, client, auth_headers, create_task):
        task = create_task()
        resp = client.put(f"/v1/tasks/{task['id']}", json={"status": "archived"}, headers=auth_headers)
        assert resp.status_code == 400
        assert "status" in resp.get_json()["errors"]

    def test_update_missing_task_is_404(self, client, auth_headers):
        resp = client.put(f"/v1/tasks/{uuid.uuid4()}", json={"title": "x"}, headers=auth_headers)
        assert resp.status_code == 404


class TestDelete:
    def test_delete_then_gone(self, client, auth_headers, create_task):
        task = create_task()
        resp = client.delete(f"/v1/tasks/{task['id']}", headers=auth_headers)
        assert resp.status_code == 204

        assert client.get(f"/v1/tasks/{task['id']}", headers=auth_headers).status_code == 404
        assert client.delete(f"/v1/tasks/{task['id']}", headers=auth_headers).status_code == 404
        listed = client.get("/v1/tasks", headers=auth_headers).get_json()["data"]
        assert listed["pagination"]["total"] == 0

    def test_cannot_delete_other_users_task(self, client, create_task, register_user):
        task = create_task()
        other = register_user(email="bob@example.com", name="Bob")
        resp = client.delete(f"/v1/tasks/{task['id']}",
                             headers={"Authorization": f"Bearer {other['token']}"})
        assert resp.status_code == 404
