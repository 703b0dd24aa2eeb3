# -*- coding: utf-8 -*-
"""
user.py
--------------------------------------------------------------------
用户实体。
说明：
- 通过 ProjectMember 与 Project 建立多对多关系并携带角色。
- 创建后不更新、不删除；email 全局唯一。
"""

from extensions.database import db
from .mixins import CreatedAtMixin, COMMON_TABLE_ARGS, iso


class User(CreatedAtMixin, db.Model):
    __tablename__ = "users"
    __table_args__ = (COMMON_TABLE_ARGS,)

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    github_username = db.Column(db.String(255))
    avatar_url = db.Column(db.Text)

    def __repr__(self):
        return f"<User id={self.id} email={self.email}>"

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "github_username": self.github_username,
            "avatar_url": self.avatar_url,
            "created_at": iso(self.created_at),
        }

    def to_basic_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "avatar_url": self.avatar_url,
        }
