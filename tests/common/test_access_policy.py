import pytest

from utils.permissions import (
    ProjectAccessPolicy,
    has_project_access,
    is_project_member_or_creator,
)


def test_default_policy_allows_all_roles():
    policy = ProjectAccessPolicy()
    assert policy.allows("view")
    assert policy.allows("edit")
    assert not policy.allows(None)


def test_policy_from_roles_normalizes():
    policy = ProjectAccessPolicy.from_roles([" EDIT "])
    assert policy.allows("edit")
    assert not policy.allows("view")


def test_policy_rejects_unknown_role():
    with pytest.raises(ValueError):
        ProjectAccessPolicy.from_roles(["admin"])


def test_has_project_access(make_user, make_project, invite):
    owner, viewer, outsider = make_user(), make_user(), make_user()
    project = make_project(owner.id)
    invite(project.id, viewer.id, "view")

    assert has_project_access(project.id, owner.id)
    assert has_project_access(project.id, viewer.id)
    assert not has_project_access(project.id, outsider.id)
    assert not has_project_access(project.id, None)
    assert not has_project_access(9999, owner.id)

    edit_only = ProjectAccessPolicy.from_roles(["edit"])
    assert has_project_access(project.id, owner.id, policy=edit_only)
    assert not has_project_access(project.id, viewer.id, policy=edit_only)


def test_member_or_creator_ignores_policy(app, make_user, make_project, invite):
    app.config["PROJECT_MUTATION_ROLES"] = ["edit"]
    owner, viewer, outsider = make_user(), make_user(), make_user()
    project = make_project(owner.id)
    invite(project.id, viewer.id, "view")

    assert is_project_member_or_creator(project.id, owner.id)
    assert is_project_member_or_creator(project.id, viewer.id)
    assert not is_project_member_or_creator(project.id, outsider.id)
