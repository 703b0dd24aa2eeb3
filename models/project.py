# -*- coding: utf-8 -*-
"""
project.py
--------------------------------------------------------------------
项目实体及成员：
- Project: 对应一个 GitHub 仓库（url / owner / name 冗余存储）。
- ProjectMember: 用户在项目内的角色（view / edit）。
约束：
- 每个项目有且只有一个创建人；创建人即使没有成员行也拥有完整权限。
- 创建项目时在同一事务内写入创建人的 edit 成员行。
- (project_id, user_id) 唯一，同一用户在同一项目最多一条成员记录。
"""

from extensions.database import db
from utils.datetime_helpers import utc_now
from .mixins import CreatedAtMixin, COMMON_TABLE_ARGS, iso


class Project(CreatedAtMixin, db.Model):
    __tablename__ = "projects"
    __table_args__ = (COMMON_TABLE_ARGS,)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    github_repo_url = db.Column(db.Text, nullable=False)
    github_repo_name = db.Column(db.String(255), nullable=False)
    github_owner = db.Column(db.String(255), nullable=False)
    created_by = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )

    creator = db.relationship(
        "User", backref=db.backref("created_projects", passive_deletes=True)
    )
    members = db.relationship(
        "ProjectMember", back_populates="project", cascade="all, delete-orphan"
    )
    issues = db.relationship(
        "Issue", back_populates="project", cascade="all, delete-orphan"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "github_repo_url": self.github_repo_url,
            "github_repo_name": self.github_repo_name,
            "github_owner": self.github_owner,
            "created_by": self.created_by,
            "created_at": iso(self.created_at),
        }


class ProjectMember(db.Model):
    __tablename__ = "project_members"
    __table_args__ = (
        db.UniqueConstraint("project_id", "user_id", name="uq_project_member_project_user"),
        COMMON_TABLE_ARGS,
    )
    id = db.Column(db.Integer, primary_key=True)
    project_id = db.Column(
        db.Integer, db.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role = db.Column(db.String(16), nullable=False)
    invited_at = db.Column(db.DateTime, nullable=False, default=utc_now)

    project = db.relationship("Project", back_populates="members")
    user = db.relationship(
        "User", backref=db.backref("project_memberships", cascade="all, delete-orphan")
    )

    def to_dict(self, user_basic: bool = False):
        data = {
            "id": self.id,
            "project_id": self.project_id,
            "user_id": self.user_id,
            "role": self.role,
            "invited_at": iso(self.invited_at),
        }
        if user_basic and self.user:
            data["user"] = self.user.to_basic_dict()
        return data
