"""
项目访问控制：
  - has_project_access: 操作人是否可以在项目下写入（建 issue / 评论 / 附件）
  - is_project_member_or_creator: 候选指派人是否属于项目（任意角色均可）
  - resolve_project_for_issue: issue -> project_id，不存在时抛 NotFoundError
约定：先校验存在性，再校验权限，最后才写入。本模块只读，不产生副作用。
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

from flask import current_app, has_app_context

from constants.roles import ProjectRole, normalize_role
from repositories.issue_repository import IssueRepository
from repositories.project_member_repository import ProjectMemberRepository
from repositories.project_repository import ProjectRepository
from utils.exceptions import ForbiddenError, NotFoundError

ISSUE_NOT_FOUND = "Issue not found"
PROJECT_NOT_FOUND = "Project not found"
NO_PROJECT_ACCESS = "User does not have access to this project"
ASSIGNEE_NOT_MEMBER = "Assigned user is not a member of this project"


@dataclass(frozen=True)
class ProjectAccessPolicy:
    """
    成员角色 -> 是否允许写入 的判定规则。
    项目创建人始终放行；成员需持有 allowed_roles 中的角色。
    """
    allowed_roles: FrozenSet[str] = field(
        default_factory=lambda: frozenset(ProjectRole.values())
    )

    @classmethod
    def from_roles(cls, roles: Iterable[str]) -> "ProjectAccessPolicy":
        return cls(allowed_roles=frozenset(normalize_role(r) for r in roles))

    def allows(self, role: Optional[str]) -> bool:
        return role is not None and role in self.allowed_roles


def get_access_policy() -> ProjectAccessPolicy:
    """按配置 PROJECT_MUTATION_ROLES 构造策略；无应用上下文时使用默认（view/edit 均可）。"""
    if has_app_context():
        roles = current_app.config.get("PROJECT_MUTATION_ROLES")
        if roles:
            return ProjectAccessPolicy.from_roles(roles)
    return ProjectAccessPolicy()


def _membership_role(project_id: int, user_id: int) -> Optional[str]:
    member = ProjectMemberRepository.get_by_project_user(project_id, user_id)
    return member.role if member else None


def has_project_access(
    project_id: int,
    user_id: Optional[int],
    *,
    policy: ProjectAccessPolicy | None = None,
) -> bool:
    if user_id is None:
        return False
    creator_id = ProjectRepository.get_creator_id(project_id)
    if creator_id is None:
        return False
    if creator_id == user_id:
        return True
    policy = policy or get_access_policy()
    return policy.allows(_membership_role(project_id, user_id))


def is_project_member_or_creator(project_id: int, user_id: Optional[int]) -> bool:
    if user_id is None:
        return False
    creator_id = ProjectRepository.get_creator_id(project_id)
    if creator_id is None:
        return False
    if creator_id == user_id:
        return True
    return _membership_role(project_id, user_id) is not None


def resolve_project_for_issue(issue_id: int) -> int:
    project_id = IssueRepository.get_project_id(issue_id)
    if project_id is None:
        raise NotFoundError(ISSUE_NOT_FOUND)
    return project_id


def assert_project_access(project_id: int, user_id: Optional[int], policy: ProjectAccessPolicy | None = None):
    if not has_project_access(project_id, user_id, policy=policy):
        raise ForbiddenError(NO_PROJECT_ACCESS)
