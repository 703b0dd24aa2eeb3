# -*- coding: utf-8 -*-
"""
__init__.py
--------------------------------------------------------------------
汇总导入所有模型，使得：
- Flask-Migrate/Alembic 自动检测模型。
- 外部模块可简化引用：from models import Issue, Comment
注意：
- 避免循环导入：各模型仅在这里集中 import。
"""

from .mixins import CreatedAtMixin, TimestampMixin
from .user import User
from .project import Project, ProjectMember
from .issue import Issue
from .comment import Comment
from .attachment import Attachment

__all__ = [
    "CreatedAtMixin", "TimestampMixin",
    "User", "Project", "ProjectMember",
    "Issue", "Comment", "Attachment",
]
