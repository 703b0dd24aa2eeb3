# constants/issue.py
"""
Issue 相关的枚举与常量集合
统一管理：
  - 优先级 Priority: low / medium / high / critical
  - 状态 Status: open / in_progress / resolved / closed
提供:
  - Enum 定义
  - values() 方法：返回所有 value 列表
  - 校验辅助函数
"""

from enum import Enum
from utils.exceptions import ValidationError


class IssuePriority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def values(cls):
        return [m.value for m in cls]


class IssueStatus(Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"

    @classmethod
    def values(cls):
        return [m.value for m in cls]


DEFAULT_ISSUE_STATUS = IssueStatus.OPEN.value


# -------- 校验辅助函数 --------
def validate_priority(priority: str):
    if priority not in IssuePriority.values():
        raise ValidationError(f"priority must be one of {IssuePriority.values()}")


def validate_status(status: str):
    if status not in IssueStatus.values():
        raise ValidationError(f"status must be one of {IssueStatus.values()}")


def validate_issue_fields(
        *,
        priority: str = None,
        status: str = None,
        skip_none: bool = True
):
    """
    统一校验多个字段
    :param skip_none: True 时 None 值跳过校验
    """
    if priority is not None or not skip_none:
        validate_priority(priority)
    if status is not None or not skip_none:
        validate_status(status)
