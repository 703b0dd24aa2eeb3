from __future__ import annotations

from enum import Enum


class ProjectRole(str, Enum):
    """
    项目内成员角色：
    - VIEW: 只读成员（当前策略下同样允许创建 issue / 评论 / 附件）
    - EDIT: 可编辑成员；项目创建人自动成为 EDIT 成员
    """

    VIEW = "view"
    EDIT = "edit"

    @classmethod
    def values(cls) -> list[str]:
        return [role.value for role in cls]


ALL_PROJECT_ROLES: set[str] = set(ProjectRole.values())

# 项目创建人默认角色
CREATOR_ROLE = ProjectRole.EDIT


def normalize_role(raw: str | None) -> str:
    """
    清洗外部传入的角色值：
    - 去掉首尾空白、转小写
    - 校验是否在已注册角色中
    """
    if not isinstance(raw, str) or not raw.strip():
        raise ValueError(f"invalid project role: {raw!r}")
    value = raw.strip().lower()
    if value not in ALL_PROJECT_ROLES:
        raise ValueError(f"invalid project role: {raw!r}")
    return value
