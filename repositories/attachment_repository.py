from __future__ import annotations

from typing import List, Mapping

from sqlalchemy import select

from extensions.database import db
from models.attachment import Attachment
from repositories.base_repository import BaseRepository


class AttachmentRepository(BaseRepository):
    """附件相关的持久化操作。

    仓储层仅负责写入附件元数据（文件名、外部 URL、大小、MIME 类型），
    文件本身需要由调用方事先上传到外部存储，这里只保存指向真实存储位置的
    ``file_url``，不会直接操作对象存储。"""

    @staticmethod
    def add_attachment(issue_id: int, payload: Mapping) -> Attachment:
        attachment = Attachment(
            issue_id=issue_id,
            filename=payload.get("filename"),
            file_url=payload.get("file_url"),
            file_size=payload.get("file_size"),
            mime_type=payload.get("mime_type"),
            uploaded_by=payload.get("uploaded_by"),
        )
        db.session.add(attachment)
        db.session.flush()
        return attachment

    @staticmethod
    def list_by_issue(issue_id: int) -> List[Attachment]:
        stmt = (
            select(Attachment)
            .where(Attachment.issue_id == issue_id)
            .order_by(Attachment.uploaded_at.asc(), Attachment.id.asc())
        )
        return list(db.session.execute(stmt).scalars().all())
