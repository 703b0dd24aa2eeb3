# -*- coding: utf-8 -*-
"""
comment.py
--------------------------------------------------------------------
Issue 评论：
- 作者必须拥有 Issue 所在项目的访问权限（服务层校验）。
- 按 created_at 升序展示（最早的在前）。
"""


from extensions.database import db
from .mixins import TimestampMixin, COMMON_TABLE_ARGS, iso


class Comment(TimestampMixin, db.Model):
    __tablename__ = "comments"
    __table_args__ = (
        db.Index("ix_comment_issue_created", "issue_id", "created_at"),
        COMMON_TABLE_ARGS,
    )

    id = db.Column(db.Integer, primary_key=True)
    issue_id = db.Column(
        db.Integer, db.ForeignKey("issues.id", ondelete="CASCADE"), nullable=False
    )
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    content = db.Column(db.Text, nullable=False)

    issue = db.relationship("Issue", back_populates="comments")
    author = db.relationship("User", backref=db.backref("comments", passive_deletes=True))

    def to_dict(self):
        return {
            "id": self.id,
            "issue_id": self.issue_id,
            "user_id": self.user_id,
            "content": self.content,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }
