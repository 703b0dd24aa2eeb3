# -*- coding: utf-8 -*-
"""
issue.py
--------------------------------------------------------------------
Issue 实体：
- 隶属于唯一的 Project；评论与附件隶属于 Issue。
- assigned_to 若不为空，必须是项目创建人或项目成员（由服务层校验）。
- created_by 在创建时必须有项目访问权限。
"""

from extensions.database import db
from constants.issue import DEFAULT_ISSUE_STATUS
from .mixins import TimestampMixin, COMMON_TABLE_ARGS, iso


class Issue(TimestampMixin, db.Model):
    __tablename__ = "issues"
    __table_args__ = (
        db.Index("ix_issue_project_status", "project_id", "status"),
        COMMON_TABLE_ARGS,
    )

    id = db.Column(db.Integer, primary_key=True)
    project_id = db.Column(
        db.Integer, db.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = db.Column(db.String(512), nullable=False)
    description = db.Column(db.Text)
    priority = db.Column(db.String(16), nullable=False)
    status = db.Column(db.String(16), nullable=False, default=DEFAULT_ISSUE_STATUS)
    assigned_to = db.Column(db.Integer, db.ForeignKey("users.id"), index=True)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    due_date = db.Column(db.DateTime)

    project = db.relationship("Project", back_populates="issues")
    assignee = db.relationship("User", foreign_keys=[assigned_to])
    creator = db.relationship("User", foreign_keys=[created_by])
    comments = db.relationship(
        "Comment", back_populates="issue", cascade="all, delete-orphan"
    )
    attachments = db.relationship(
        "Attachment", back_populates="issue", cascade="all, delete-orphan"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "project_id": self.project_id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "status": self.status,
            "assigned_to": self.assigned_to,
            "created_by": self.created_by,
            "due_date": iso(self.due_date),
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }
