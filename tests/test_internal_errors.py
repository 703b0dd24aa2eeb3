"""数据库写入失败：返回 500，且不留下任何数据"""
import pytest
from sqlalchemy.exc import OperationalError

from app import create_app
from config.settings import TestingConfig
from extensions.database import db
from models import Comment, Issue, User
from repositories.comment_repository import CommentRepository
from repositories.issue_repository import IssueRepository
from repositories.user_repository import UserRepository


def _db_down():
    raise OperationalError("COMMIT", {}, Exception("database is locked"))


def test_user_commit_failure(api, monkeypatch):
    monkeypatch.setattr(UserRepository, "commit", staticmethod(_db_down))
    resp = api("POST", "/api/users", json_data={"email": "a@x.com", "name": "Alice"})
    assert resp["_http_status"] == 500, resp
    assert resp["code"] == 500
    assert resp["message"] == "Database error"
    assert db.session.query(User).count() == 0


def test_issue_commit_failure(api, make_user, make_project, monkeypatch):
    owner = make_user()
    project = make_project(owner.id)
    monkeypatch.setattr(IssueRepository, "commit", staticmethod(_db_down))

    resp = api("POST", f"/api/projects/{project.id}/issues", json_data={
        "title": "Lost", "priority": "low", "created_by": owner.id,
    })
    assert resp["_http_status"] == 500, resp
    assert resp["message"] == "Database error"
    assert db.session.query(Issue).count() == 0


def test_comment_commit_failure(api, make_user, make_project, make_issue, monkeypatch):
    owner = make_user()
    issue = make_issue(make_project(owner.id).id, owner.id)
    monkeypatch.setattr(CommentRepository, "commit", staticmethod(_db_down))

    resp = api("POST", f"/api/issues/{issue.id}/comments",
               json_data={"user_id": owner.id, "content": "hello"})
    assert resp["_http_status"] == 500, resp
    assert db.session.query(Comment).count() == 0


def test_invalid_mutation_roles_fail_at_startup(monkeypatch):
    monkeypatch.setattr(TestingConfig, "PROJECT_MUTATION_ROLES", ["admin"])
    with pytest.raises(RuntimeError, match="PROJECT_MUTATION_ROLES"):
        create_app("testing")


def test_edit_only_mutation_roles_accepted(monkeypatch):
    monkeypatch.setattr(TestingConfig, "PROJECT_MUTATION_ROLES", ["edit"])
    app = create_app("testing")
    assert app.config["PROJECT_MUTATION_ROLES"] == ["edit"]
