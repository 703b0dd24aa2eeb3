import pytest

from extensions.database import db
from models import Attachment


@pytest.fixture
def ctx(make_user, make_project, make_issue):
    owner = make_user()
    outsider = make_user()
    project = make_project(owner.id)
    issue = make_issue(project.id, owner.id)
    return {"owner": owner, "outsider": outsider, "issue": issue}


def _payload(uploaded_by, **overrides):
    payload = {
        "filename": "trace.log",
        "file_url": "https://files.example.com/trace.log",
        "file_size": 2048,
        "mime_type": "text/plain",
        "uploaded_by": uploaded_by,
    }
    payload.update(overrides)
    return payload


def test_add_and_list_attachment(api, ctx):
    path = f"/api/issues/{ctx['issue'].id}/attachments"
    resp = api("POST", path, json_data=_payload(ctx["owner"].id))
    assert resp["_http_status"] == 201, resp
    assert resp["data"]["filename"] == "trace.log"
    assert resp["data"]["uploaded_at"]

    listed = api("GET", path)["data"]
    assert len(listed) == 1
    assert listed[0]["file_size"] == 2048


def test_outsider_cannot_attach(api, ctx):
    resp = api("POST", f"/api/issues/{ctx['issue'].id}/attachments",
               json_data=_payload(ctx["outsider"].id))
    assert resp["_http_status"] == 403
    assert db.session.query(Attachment).count() == 0


def test_attach_to_missing_issue(api, ctx):
    resp = api("POST", "/api/issues/999/attachments", json_data=_payload(ctx["owner"].id))
    assert resp["_http_status"] == 404
    assert "issue not found" in resp["message"].lower()


@pytest.mark.parametrize("overrides", [
    {"file_size": -1},
    {"file_size": "big"},
    {"filename": ""},
    {"mime_type": None},
])
def test_invalid_attachment_payload(api, ctx, overrides):
    resp = api("POST", f"/api/issues/{ctx['issue'].id}/attachments",
               json_data=_payload(ctx["owner"].id, **overrides))
    assert resp["_http_status"] == 400, resp
