"""Tests for the project, session, message and media routes."""
from sqlmodel import select

from seaward.models import ProjectSession, SessionMessage
from tests.conftest import user_message


class TestProjects:

    def test_create_and_list(self, client, auth_headers):
        created = client.post("/api/projects", json={
            "name": "Blog",
            "public_address": "https://blog.example.com",
            "ssh_credentials": [{"address": "1.2.3.4", "port": 22, "username": "devbox", "password": "pw"}],
        }, headers=auth_headers)

        assert created.status_code == 201
        assert created.json()["ssh_credentials"][0]["address"] == "1.2.3.4"

        listed = client.get("/api/projects", headers=auth_headers).json()
        assert listed["total_docs"] == 1
        assert listed["docs"][0]["name"] == "Blog"

    def test_get_includes_sessions(self, client, auth_headers, project, project_session):
        response = client.get(f"/api/projects/{project.id}", headers=auth_headers)

        assert response.status_code == 200
        assert [s["id"] for s in response.json()["project_sessions"]] == [project_session.id]

    def test_other_users_get_404(self, client, other_headers, project):
        assert client.get(f"/api/projects/{project.id}", headers=other_headers).status_code == 404
        assert client.delete(f"/api/projects/{project.id}", headers=other_headers).status_code == 404

    def test_admin_can_read_any_project(self, client, admin_headers, project):
        assert client.get(f"/api/projects/{project.id}", headers=admin_headers).status_code == 200

    def test_update(self, client, auth_headers, project):
        response = client.patch(f"/api/projects/{project.id}", json={"name": "Renamed"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"
        assert response.json()["public_address"] == "https://storefront.example.com"

    def test_delete_cascades(self, client, auth_headers, db, project, project_session):
        client.put(
            f"/api/sessions/{project_session.id}/messages",
            json={"messages": [user_message("u1", "hi")]},
            headers=auth_headers,
        )

        assert client.delete(f"/api/projects/{project.id}", headers=auth_headers).status_code == 204
        db.expire_all()
        assert db.exec(select(ProjectSession)).all() == []
        assert db.exec(select(SessionMessage)).all() == []

    def test_list_with_bad_sort_is_400(self, client, auth_headers):
        assert client.get("/api/projects?sort=nope", headers=auth_headers).status_code == 400


class TestSessions:

    def test_create_with_default_name_and_list(self, client, auth_headers, project):
        created = client.post(f"/api/projects/{project.id}/sessions", headers=auth_headers)

        assert created.status_code == 201
        assert created.json()["name"].startswith("Session ")

        listed = client.get(f"/api/projects/{project.id}/sessions", headers=auth_headers).json()
        assert listed["docs"][0]["id"] == created.json()["id"]

    def test_create_with_name(self, client, auth_headers, project):
        created = client.post(f"/api/projects/{project.id}/sessions", json={"name": "Bugfix"}, headers=auth_headers)

        assert created.json()["name"] == "Bugfix"

    def test_rename_and_delete(self, client, auth_headers, project_session):
        renamed = client.patch(f"/api/sessions/{project_session.id}", json={"name": "Renamed"}, headers=auth_headers)
        assert renamed.json()["name"] == "Renamed"

        assert client.delete(f"/api/sessions/{project_session.id}", headers=auth_headers).status_code == 204
        assert client.get(f"/api/sessions/{project_session.id}", headers=auth_headers).status_code == 404

    def test_messages_round_trip(self, client, auth_headers, project_session):
        saved = client.put(f"/api/sessions/{project_session.id}/messages", json={"messages": [
            user_message("u1", "hello"),
            {"id": "a1", "role": "assistant", "parts": [
                {"type": "step-start"},
                {"type": "tool-invocation", "toolInvocation": {
                    "state": "result", "step": 0, "toolCallId": "c1", "toolName": "browserAgentTool",
                    "args": {"prompt": "p"}, "result": {"final_result": "ok"},
                }},
            ]},
            {"id": "broken", "role": "assistant", "parts": [{"type": "unknown"}]},
        ]}, headers=auth_headers)

        assert saved.json()["success"] is True

        messages = client.get(f"/api/sessions/{project_session.id}/messages", headers=auth_headers).json()["messages"]
        assert [m["id"] for m in messages] == ["u1", "a1"]
        assert "metadata" not in messages[0]
        assert messages[1]["parts"][1]["toolInvocation"]["result"] == {"final_result": "ok"}

    def test_other_users_cannot_read_messages(self, client, other_headers, project_session):
        response = client.get(f"/api/sessions/{project_session.id}/messages", headers=other_headers)

        assert response.status_code == 404


class TestMessages:

    def test_crud(self, client, auth_headers, project_session):
        created = client.post("/api/messages", json={
            "role": "user",
            "parts": [{"type": "text", "text": "hi"}],
            "project_session": project_session.id,
        }, headers=auth_headers)
        assert created.status_code == 201
        message_id = created.json()["id"]
        assert created.json()["project_session"] == project_session.id

        patched = client.patch(f"/api/messages/{message_id}", json={"metadata": {"pinned": True}}, headers=auth_headers)
        assert patched.json()["metadata"] == {"pinned": True}
        assert patched.json()["parts"] == [{"type": "text", "text": "hi"}]

        listed = client.get(f"/api/messages?session_id={project_session.id}", headers=auth_headers).json()
        assert [m["id"] for m in listed["docs"]] == [message_id]

        assert client.delete(f"/api/messages/{message_id}", headers=auth_headers).status_code == 204
        assert client.get(f"/api/messages/{message_id}", headers=auth_headers).status_code == 404

    def test_invalid_parts_are_rejected(self, client, auth_headers, project_session):
        response = client.post("/api/messages", json={
            "role": "user", "parts": [{"type": "nope"}], "project_session": project_session.id,
        }, headers=auth_headers)

        assert response.status_code == 422

    def test_cannot_post_into_someone_elses_session(self, client, other_headers, project_session):
        response = client.post("/api/messages", json={
            "role": "user", "parts": [], "project_session": project_session.id,
        }, headers=other_headers)

        assert response.status_code == 404


class TestMedia:

    def test_crud(self, client, auth_headers):
        created = client.post("/api/media", json={"alt": "Logo", "filename": "logo.png"}, headers=auth_headers)
        assert created.status_code == 201
        media_id = created.json()["id"]

        assert client.patch(f"/api/media/{media_id}", json={"alt": "New logo"}, headers=auth_headers).json()["alt"] == "New logo"
        assert client.get("/api/media", headers=auth_headers).json()["total_docs"] == 1
        assert client.delete(f"/api/media/{media_id}", headers=auth_headers).status_code == 204
        assert client.get(f"/api/media/{media_id}", headers=auth_headers).status_code == 404

    def test_alt_is_required(self, client, auth_headers):
        assert client.post("/api/media", json={"filename": "x.png"}, headers=auth_headers).status_code == 422


def test_list_routes_use_the_page_envelope(client, auth_headers, project_session):
    response = client.get(f"/api/projects/{project_session.project_id}/sessions", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"docs", "total_docs", "limit", "page", "total_pages", "has_next_page", "has_prev_page"}
    assert set(body["docs"][0]) == {"id", "name", "project_id", "created_at", "updated_at"}
    assert body["docs"][0]["created_at"].endswith("Z") or body["docs"][0]["created_at"].endswith("+00:00")
