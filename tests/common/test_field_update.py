import pytest

from utils import field_update
from utils.field_update import CLEARED, UNCHANGED, SetTo


def test_from_payload_three_states():
    updates = field_update.from_payload({"title": "x", "assigned_to": None}, ("title", "assigned_to", "status"))
    assert updates["title"] == SetTo("x")
    assert updates["assigned_to"] is CLEARED
    assert updates["status"] is UNCHANGED


def test_from_payload_ignores_unlisted_keys():
    updates = field_update.from_payload({"acting_user_id": 1}, ("title",))
    assert list(updates) == ["title"]


def test_resolve():
    assert field_update.resolve(UNCHANGED, current="old") == "old"
    assert field_update.resolve(CLEARED, current="old") is None
    assert field_update.resolve(SetTo(0), current="old") == 0
    with pytest.raises(TypeError):
        field_update.resolve("raw value")


def test_is_present():
    assert not field_update.is_present(UNCHANGED)
    assert field_update.is_present(CLEARED)
    assert field_update.is_present(SetTo(None))
