import uuid
import pytest
from typing import Dict, Any, Optional

from app import create_app
from extensions.database import db
from services.user_service import UserService
from services.project_service import ProjectService
from services.project_member_service import ProjectMemberService
from services.issue_service import IssueService


@pytest.fixture()
def app():
    """测试用 Flask 应用（内存 SQLite），每个用例独立建表 / 删表"""
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def api(client):
    """
    统一的接口调用方法，返回响应 JSON，并附带 _http_status
    用法：api("POST", "/api/users", json_data={...})
    """
    def _request(method: str, path: str,
                 params: Optional[Dict] = None,
                 json_data: Optional[Dict] = None) -> Dict[str, Any]:
        resp = client.open(path, method=method.upper(), query_string=params, json=json_data)
        result = resp.get_json(silent=True) or {"_raw_text": resp.get_data(as_text=True)}
        result["_http_status"] = resp.status_code
        return result
    return _request


def _suffix(n=8):
    return uuid.uuid4().hex[:n]


@pytest.fixture()
def make_user(app):
    def _create(name: str = None, email: str = None, **kwargs):
        sfx = _suffix()
        return UserService.create_user(
            email=email or f"user_{sfx}@example.com",
            name=name or f"User {sfx}",
            **kwargs,
        )
    return _create


@pytest.fixture()
def make_project(app):
    def _create(created_by: int, name: str = None, **overrides):
        sfx = _suffix()
        payload = {
            "name": name or f"Project {sfx}",
            "description": "demo project",
            "github_repo_url": f"https://github.com/octo/repo-{sfx}",
            "created_by": created_by,
        }
        payload.update(overrides)
        return ProjectService.create_project(**payload)
    return _create


@pytest.fixture()
def make_issue(app):
    def _create(project_id: int, created_by: int, **overrides):
        payload = {
            "project_id": project_id,
            "title": f"Issue {_suffix()}",
            "priority": "medium",
            "created_by": created_by,
        }
        payload.update(overrides)
        return IssueService.create_issue(**payload)
    return _create


@pytest.fixture()
def invite(app):
    def _invite(project_id: int, user_id: int, role: str = "view"):
        return ProjectMemberService.invite_user(project_id, user_id, role)
    return _invite
