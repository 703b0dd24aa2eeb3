# -*- coding: utf-8 -*-
"""
attachment.py
--------------------------------------------------------------------
Issue 附件元数据：
- file_url 指向外部存储中已经上传好的文件，本系统不负责存储文件内容。
- 上传人必须拥有 Issue 所在项目的访问权限（服务层校验）。
"""


from extensions.database import db
from utils.datetime_helpers import utc_now
from .mixins import COMMON_TABLE_ARGS, iso


class Attachment(db.Model):
    __tablename__ = "attachments"
    __table_args__ = (COMMON_TABLE_ARGS,)

    id = db.Column(db.Integer, primary_key=True)
    issue_id = db.Column(
        db.Integer, db.ForeignKey("issues.id", ondelete="CASCADE"), nullable=False, index=True
    )
    filename = db.Column(db.String(255), nullable=False)
    file_url = db.Column(db.Text, nullable=False)
    file_size = db.Column(db.Integer, nullable=False)
    mime_type = db.Column(db.String(128), nullable=False)
    uploaded_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    uploaded_at = db.Column(db.DateTime, nullable=False, default=utc_now)

    issue = db.relationship("Issue", back_populates="attachments")
    uploader = db.relationship("User", backref=db.backref("attachments", passive_deletes=True))

    def to_dict(self):
        return {
            "id": self.id,
            "issue_id": self.issue_id,
            "filename": self.filename,
            "file_url": self.file_url,
            "file_size": self.file_size,
            "mime_type": self.mime_type,
            "uploaded_by": self.uploaded_by,
            "uploaded_at": iso(self.uploaded_at),
        }
