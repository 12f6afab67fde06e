"""Tests for the CRUD services."""
from datetime import datetime, timedelta, timezone

import pytest
from sqlmodel import select

from seaward.models import ProjectSession, SessionMessage, UserProject
from seaward.services.media_service import MediaService
from seaward.services.message_service import MessageService
from seaward.services.project_service import ProjectService
from seaward.services.session_service import SessionService
from seaward.services.user_service import UserService
from tests.conftest import user_message


def text_parts(text):
    return [{"type": "text", "text": text}]


class TestSessionService:

    def test_create_session_uses_default_name(self, db, project):
        project_session = SessionService(db).create_session_for_project(project.id)

        assert project_session.project_id == project.id
        assert project_session.name.startswith("Session ")

    def test_create_session_for_missing_project_leaves_no_orphan(self, db):
        assert SessionService(db).create_session_for_project("missing") is None
        assert db.exec(select(ProjectSession)).all() == []

    def test_save_creates_then_updates_messages(self, db, project_session):
        service = SessionService(db)

        assert service.save_session_messages(project_session.id, [user_message("u1", "first")])
        assert service.save_session_messages(project_session.id, [
            user_message("u1", "edited"),
            {"id": "a1", "role": "assistant", "parts": text_parts("reply"), "metadata": {"model": "o3"}},
        ])

        messages = service.get_session_messages(project_session.id)
        assert [m["id"] for m in messages] == ["u1", "a1"]
        assert messages[0]["parts"] == text_parts("edited")
        assert messages[1]["metadata"] == {"model": "o3"}

    def test_save_skips_invalid_messages(self, db, project_session):
        service = SessionService(db)

        ok = service.save_session_messages(project_session.id, [
            {"id": "bad", "role": "robot", "parts": []},
            user_message("u1", "valid"),
        ])

        assert ok is True
        assert [m["id"] for m in service.get_session_messages(project_session.id)] == ["u1"]

    def test_save_to_missing_session_fails(self, db):
        assert SessionService(db).save_session_messages("missing", [user_message("u1", "x")]) is False

    def test_save_honours_created_at_and_touches_session(self, db, project_session):
        before = project_session.updated_at
        service = SessionService(db)

        service.save_session_messages(project_session.id, [
            user_message("late", "second", createdAt="2025-05-02T10:00:00Z"),
            user_message("early", "first", createdAt="2025-05-01T10:00:00Z"),
        ])

        assert [m["id"] for m in service.get_session_messages(project_session.id)] == ["early", "late"]
        stored = db.get(SessionMessage, "early")
        assert stored.created_at == datetime(2025, 5, 1, 10, 0, 0, tzinfo=timezone.utc)
        db.refresh(project_session)
        assert project_session.updated_at >= before

    def test_update_without_created_at_keeps_it(self, db, project_session):
        service = SessionService(db)
        service.save_session_messages(project_session.id, [
            user_message("u1", "x", createdAt="2025-05-01T10:00:00Z"),
        ])

        service.save_session_messages(project_session.id, [user_message("u1", "y")])

        assert db.get(SessionMessage, "u1").created_at == datetime(2025, 5, 1, 10, 0, 0, tzinfo=timezone.utc)

    def test_delete_session_removes_messages(self, db, project_session):
        service = SessionService(db)
        service.save_session_messages(project_session.id, [user_message("u1", "x"), user_message("u2", "y")])

        assert service.delete_session(project_session.id) is True
        assert db.exec(select(SessionMessage)).all() == []
        assert db.get(ProjectSession, project_session.id) is None

    def test_delete_session_aborts_when_messages_cannot_be_listed(self, db, project_session, monkeypatch):
        service = SessionService(db)
        session_id = project_session.id

        def broken_exec(*args, **kwargs):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(db, "exec", broken_exec)

        assert service.delete_session(session_id) is False
        monkeypatch.undo()
        assert db.get(ProjectSession, session_id) is not None

    def test_failed_write_marks_result_and_keeps_going(self, db, project, project_session):
        other = ProjectSession(name="other", project_id=project.id)
        db.add(other)
        db.commit()
        service = SessionService(db)
        service.save_session_messages(other.id, [user_message("dup", "elsewhere")])

        ok = service.save_session_messages(project_session.id, [
            user_message("dup", "clashes with the other session"),
            user_message("u2", "still saved"),
        ])

        assert ok is False
        assert [m["id"] for m in service.get_session_messages(project_session.id)] == ["u2"]
        assert [m["id"] for m in service.get_session_messages(other.id)] == ["dup"]

    def test_failed_session_touch_marks_result(self, db, project_session, monkeypatch):
        service = SessionService(db)
        commit = db.commit
        commits = []

        def commit_messages_only():
            commits.append(True)
            if len(commits) > 1:
                raise RuntimeError("database unavailable")
            commit()

        monkeypatch.setattr(db, "commit", commit_messages_only)

        assert service.save_session_messages(project_session.id, [user_message("u1", "x")]) is False
        monkeypatch.undo()
        assert [m["id"] for m in service.get_session_messages(project_session.id)] == ["u1"]

    def test_find_sessions_paginates_most_recent_first(self, db, project):
        service = SessionService(db)
        now = datetime.now(timezone.utc)
        for index in range(3):
            db.add(ProjectSession(name=f"s{index}", project_id=project.id, updated_at=now + timedelta(minutes=index)))
        db.commit()

        page = service.find_sessions(project.id, limit=2, page=1)

        assert [s.name for s in page["docs"]] == ["s2", "s1"]
        assert page["total_docs"] == 3
        assert page["total_pages"] == 2
        assert page["has_next_page"] is True
        assert page["has_prev_page"] is False

    def test_find_sessions_with_unknown_sort_returns_none(self, db, project):
        assert SessionService(db).find_sessions(project.id, sort="-nope") is None


class TestMessageValidation:

    def test_invalid_role_is_rejected_before_write(self, db, project_session):
        db.add(SessionMessage(id="m1", role="robot", parts=[], project_session_id=project_session.id))

        with pytest.raises(ValueError):
            db.commit()
        db.rollback()

    def test_invalid_parts_are_rejected_before_write(self, db, project_session):
        db.add(SessionMessage(
            id="m1", role="user", parts=[{"type": "nonsense"}], project_session_id=project_session.id,
        ))

        with pytest.raises(Exception):
            db.commit()
        db.rollback()

    def test_string_created_at_is_normalised(self, db, project_session):
        message = SessionMessage(
            id="m1", role="user", parts=text_parts("x"), project_session_id=project_session.id,
        )
        message.created_at = "2025-03-04T05:06:07+02:00"
        db.add(message)
        db.commit()

        assert db.get(SessionMessage, "m1").created_at == datetime(2025, 3, 4, 3, 6, 7, tzinfo=timezone.utc)


class TestMessageService:

    def test_create_generates_id(self, db, project_session):
        message = MessageService(db).create_message("user", text_parts("hi"), project_session.id)

        assert message.id
        assert message.parts == text_parts("hi")

    def test_create_rejects_invalid_parts(self, db, project_session):
        assert MessageService(db).create_message("user", [{"type": "bogus"}], project_session.id) is None

    def test_update_only_changes_message_fields(self, db, project_session):
        service = MessageService(db)
        message = service.create_message("user", text_parts("hi"), project_session.id)

        updated = service.update_message(message.id, {
            "parts": text_parts("changed"),
            "metadata": {"pinned": True},
            "project_session_id": "elsewhere",
        })

        assert updated.parts == text_parts("changed")
        assert updated.message_metadata == {"pinned": True}
        assert updated.project_session_id == project_session.id

    def test_find_defaults_to_creation_order(self, db, project_session):
        service = MessageService(db)
        first = service.create_message("user", text_parts("1"), project_session.id)
        second = service.create_message("assistant", text_parts("2"), project_session.id)
        second.created_at = first.created_at + timedelta(seconds=1)
        db.add(second)
        db.commit()

        page = service.find_messages(project_session.id)

        assert [m.id for m in page["docs"]] == [first.id, second.id]

    def test_delete_missing_message_returns_false(self, db):
        assert MessageService(db).delete_message("missing") is False


class TestProjectService:

    def test_delete_project_cascades_through_sessions(self, db, project, project_session):
        SessionService(db).save_session_messages(project_session.id, [user_message("u1", "x")])
        project_id = project.id

        assert ProjectService(db).delete_project(project_id) is True
        assert db.get(UserProject, project_id) is None
        assert db.exec(select(ProjectSession)).all() == []
        assert db.exec(select(SessionMessage)).all() == []

    def test_find_projects_only_returns_the_users(self, db, project, other_user):
        db.add(UserProject(name="Theirs", user_id=other_user.id))
        db.commit()

        page = ProjectService(db).find_projects(project.user_id)

        assert [p.name for p in page["docs"]] == ["Storefront"]

    def test_update_missing_project_returns_none(self, db):
        assert ProjectService(db).update_project("missing", {"name": "x"}) is None


class TestMediaService:

    def test_alt_is_required(self, db):
        assert MediaService(db).create_media_metadata({"filename": "a.png"}) is None

    def test_crud(self, db):
        service = MediaService(db)
        media = service.create_media_metadata({"alt": "Avatar", "filename": "a.png"})

        assert service.update_media_metadata(media.id, {"alt": "New avatar"}).alt == "New avatar"
        assert service.find_media()["total_docs"] == 1
        assert service.delete_media(media.id) is True
        assert service.get_media(media.id) is None


class TestUserService:

    def test_authenticate_checks_password(self, db, user):
        service = UserService(db)

        assert service.authenticate(user.email, "secret-password").id == user.id
        assert service.authenticate(user.email, "wrong") is None
        assert service.authenticate("nobody@example.com", "secret-password") is None

    def test_settings_only_for_self_or_admin(self, db, user, other_user, admin_user):
        service = UserService(db)

        assert service.update_user_settings(other_user, user.id, {"username": "x"})["success"] is False
        assert service.update_user_settings(user, user.id, {"username": "renamed"}) == {
            "success": True, "message": "User settings updated successfully",
        }
        assert service.update_user_settings(admin_user, user.id, {"username": "by-admin"})["success"] is True

    def test_only_admins_change_roles(self, db, user, admin_user):
        service = UserService(db)

        assert service.update_user_settings(user, user.id, {"role": "admin"})["success"] is False
        assert service.update_user_settings(admin_user, user.id, {"role": "admin"})["success"] is True
        db.refresh(user)
        assert user.is_admin


class TestTimestamps:

    def test_stored_timestamps_come_back_in_utc(self, db, project):
        db.expire_all()

        reloaded = db.get(UserProject, project.id)

        assert reloaded.created_at.tzinfo is not None
        assert reloaded.updated_at.utcoffset() == timedelta(0)

    def test_naive_created_at_is_read_as_utc(self, db, project_session):
        message = SessionMessage(
            id="m1", role="user", parts=text_parts("x"), project_session_id=project_session.id,
            created_at=datetime(2025, 1, 2, 3, 4, 5),
        )
        db.add(message)
        db.commit()
        db.expire_all()

        assert db.get(SessionMessage, "m1").created_at == datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
