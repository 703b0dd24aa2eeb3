# -*- coding: utf-8 -*-
"""Issue 附件元数据服务：只登记外部存储地址，不处理文件内容。"""

import logging
from typing import List, Mapping

from sqlalchemy.exc import SQLAlchemyError

from models.attachment import Attachment
from repositories.attachment_repository import AttachmentRepository
from utils.exceptions import BizError, ForbiddenError, ValidationError
from utils.permissions import assert_project_access, resolve_project_for_issue
from utils.validators import is_blank, is_int

logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS = ("filename", "file_url", "mime_type")


class AttachmentService:

    @staticmethod
    def _validate_payload(payload: Mapping):
        for field in REQUIRED_TEXT_FIELDS:
            value = payload.get(field)
            if not isinstance(value, str) or is_blank(value):
                raise ValidationError(f"{field} is required")
        size = payload.get("file_size")
        if not is_int(size) or size < 0:
            raise ValidationError("file_size must be a non-negative integer")
        if not is_int(payload.get("uploaded_by")):
            raise ValidationError("uploaded_by must be an integer")

    @staticmethod
    def create_attachment(
        issue_id: int,
        filename: str,
        file_url: str,
        file_size: int,
        mime_type: str,
        uploaded_by: int,
    ) -> Attachment:
        if not is_int(issue_id):
            raise ValidationError("issue_id must be an integer")
        payload = {
            "filename": filename,
            "file_url": file_url,
            "file_size": file_size,
            "mime_type": mime_type,
            "uploaded_by": uploaded_by,
        }
        AttachmentService._validate_payload(payload)

        project_id = resolve_project_for_issue(issue_id)
        try:
            assert_project_access(project_id, uploaded_by)
        except ForbiddenError:
            logger.warning("attachment denied: issue=%s user=%s", issue_id, uploaded_by)
            raise

        try:
            attachment = AttachmentRepository.add_attachment(issue_id, payload)
            AttachmentRepository.commit()
        except SQLAlchemyError:
            AttachmentRepository.rollback()
            logger.exception("create attachment failed: issue=%s", issue_id)
            raise BizError("Database error", code=500)

        logger.info("attachment added: id=%s issue=%s", attachment.id, issue_id)
        return attachment

    @staticmethod
    def get_issue_attachments(issue_id: int) -> List[Attachment]:
        return AttachmentRepository.list_by_issue(issue_id)
