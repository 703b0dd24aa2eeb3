import pytest

from extensions.database import db
from models import Project, ProjectMember
from repositories.project_member_repository import ProjectMemberRepository
from services.project_service import ProjectService
from utils.exceptions import ValidationError


@pytest.fixture
def alice(make_user):
    return make_user(name="Alice", email="a@x.com")


def _project_payload(created_by, **overrides):
    payload = {
        "name": "Tracker",
        "description": "demo",
        "github_repo_url": "https://github.com/octo/tracker",
        "github_owner": "octo",
        "github_repo_name": "tracker",
        "created_by": created_by,
    }
    payload.update(overrides)
    return payload


def test_create_project_adds_creator_as_edit_member(api, alice):
    resp = api("POST", "/api/projects", json_data=_project_payload(alice.id))
    assert resp["_http_status"] == 201, resp
    project = resp["data"]
    assert project["created_by"] == alice.id
    assert project["github_owner"] == "octo"

    members = api("GET", f"/api/projects/{project['id']}/members")
    assert members["_http_status"] == 200
    assert len(members["data"]) == 1
    assert members["data"][0]["user_id"] == alice.id
    assert members["data"][0]["role"] == "edit"


def test_create_project_derives_repo_fields_from_url(app, alice):
    project = ProjectService.create_project(
        name="Derived",
        github_repo_url="https://github.com/octo/hello-world.git",
        created_by=alice.id,
    )
    assert project.github_owner == "octo"
    assert project.github_repo_name == "hello-world"


def test_explicit_repo_fields_win_over_url(app, alice):
    project = ProjectService.create_project(
        **_project_payload(alice.id, github_owner="someone", github_repo_name="else")
    )
    assert project.github_owner == "someone"
    assert project.github_repo_name == "else"


def test_create_project_rejects_non_url(api, alice):
    resp = api("POST", "/api/projects", json_data=_project_payload(alice.id, github_repo_url="not a url"))
    assert resp["_http_status"] == 400, resp


def test_create_project_requires_owner_for_non_github_url(app, alice):
    with pytest.raises(ValidationError):
        ProjectService.create_project(
            name="Elsewhere",
            github_repo_url="https://gitlab.com/octo/repo",
            created_by=alice.id,
        )


def test_create_project_unknown_creator(api):
    resp = api("POST", "/api/projects", json_data=_project_payload(999))
    assert resp["_http_status"] == 404, resp
    assert "user not found" in resp["message"].lower()
    assert db.session.query(Project).count() == 0


def test_create_project_is_atomic(app, alice, monkeypatch):
    def _boom(**_kwargs):
        raise RuntimeError("membership insert failed")

    monkeypatch.setattr(ProjectMemberRepository, "create", staticmethod(_boom))
    with pytest.raises(RuntimeError):
        ProjectService.create_project(**_project_payload(alice.id))

    assert db.session.query(Project).count() == 0
    assert db.session.query(ProjectMember).count() == 0


def test_list_projects(api, alice, make_project):
    p1 = make_project(alice.id)
    p2 = make_project(alice.id)
    resp = api("GET", "/api/projects")
    assert [p["id"] for p in resp["data"]] == [p1.id, p2.id]


def test_user_projects_merges_owned_and_member(api, make_user, make_project, invite):
    alice = make_user()
    bob = make_user()
    owned = make_project(bob.id)
    joined = make_project(alice.id)
    make_project(alice.id)  # bob 无关
    invite(joined.id, bob.id, "view")

    resp = api("GET", f"/api/users/{bob.id}/projects")
    assert resp["_http_status"] == 200
    assert [p["id"] for p in resp["data"]] == [owned.id, joined.id]


def test_user_projects_no_duplicates_for_creator_member(app, make_user, make_project, invite):
    alice = make_user()
    bob = make_user()
    project = make_project(alice.id)
    invite(project.id, bob.id, "edit")

    # alice 既是创建人，又有 edit 成员行
    ids = [p.id for p in ProjectService.get_user_projects(alice.id)]
    assert ids == [project.id]


def test_user_projects_unknown_user_is_empty(api):
    resp = api("GET", "/api/users/12345/projects")
    assert resp["_http_status"] == 200
    assert resp["data"] == []
