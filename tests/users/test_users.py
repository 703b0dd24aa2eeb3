import pytest

from extensions.database import db
from models import User
from repositories.user_repository import UserRepository
from services.user_service import UserService
from utils.exceptions import ConflictError, ValidationError


def test_create_user_api(api):
    resp = api("POST", "/api/users", json_data={
        "email": "a@x.com",
        "name": "Alice",
        "github_username": "alice",
    })
    assert resp["_http_status"] == 201, resp
    data = resp["data"]
    assert data["id"]
    assert data["email"] == "a@x.com"
    assert data["name"] == "Alice"
    assert data["github_username"] == "alice"
    assert data["avatar_url"] is None
    assert data["created_at"]


def test_create_user_optional_fields_default_to_null(api):
    resp = api("POST", "/api/users", json_data={"email": "b@x.com", "name": "Bob"})
    assert resp["_http_status"] == 201, resp
    assert resp["data"]["github_username"] is None
    assert resp["data"]["avatar_url"] is None


@pytest.mark.parametrize("email", ["", "not-an-email", "a@b", None, 42])
def test_create_user_rejects_invalid_email(api, email):
    resp = api("POST", "/api/users", json_data={"email": email, "name": "Alice"})
    assert resp["_http_status"] == 400, resp


def test_create_user_requires_name(api):
    resp = api("POST", "/api/users", json_data={"email": "a@x.com", "name": "  "})
    assert resp["_http_status"] == 400, resp
    assert "name" in resp["message"].lower()


def test_duplicate_email_conflict_keeps_count(app, api):
    first = api("POST", "/api/users", json_data={"email": "a@x.com", "name": "Alice"})
    assert first["_http_status"] == 201
    before = UserRepository.count()

    second = api("POST", "/api/users", json_data={"email": "a@x.com", "name": "Another"})
    assert second["_http_status"] == 409, second
    assert "already exists" in second["message"]
    assert UserRepository.count() == before


def test_duplicate_email_caught_by_unique_constraint(app, monkeypatch):
    UserService.create_user(email="a@x.com", name="Alice")
    # 模拟并发：预检查放行，由唯一约束兜底
    monkeypatch.setattr(UserRepository, "exists_email", staticmethod(lambda email: False))

    with pytest.raises(ConflictError):
        UserService.create_user(email="a@x.com", name="Alice again")
    assert db.session.query(User).count() == 1


def test_email_is_trimmed(app):
    user = UserService.create_user(email="  c@x.com ", name="Carol")
    assert user.email == "c@x.com"


def test_service_rejects_non_string_github_username(app):
    with pytest.raises(ValidationError):
        UserService.create_user(email="d@x.com", name="Dan", github_username=123)


def test_list_users(api, make_user):
    u1 = make_user(name="One")
    u2 = make_user(name="Two")
    resp = api("GET", "/api/users")
    assert resp["_http_status"] == 200
    ids = [u["id"] for u in resp["data"]]
    assert ids == [u1.id, u2.id]


def test_list_users_empty(api):
    resp = api("GET", "/api/users")
    assert resp["_http_status"] == 200
    assert resp["data"] == []
