import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from models.comment import Comment
from repositories.comment_repository import CommentRepository
from utils.exceptions import BizError, ForbiddenError, ValidationError
from utils.permissions import assert_project_access, resolve_project_for_issue
from utils.validators import is_blank, is_int

logger = logging.getLogger(__name__)


class CommentService:

    @staticmethod
    def create_comment(issue_id: int, user_id: int, content: str) -> Comment:
        if not is_int(issue_id) or not is_int(user_id):
            raise ValidationError("issue_id and user_id must be integers")
        if not isinstance(content, str) or is_blank(content):
            raise ValidationError("Content is required")

        project_id = resolve_project_for_issue(issue_id)
        try:
            assert_project_access(project_id, user_id)
        except ForbiddenError:
            logger.warning("comment denied: issue=%s user=%s", issue_id, user_id)
            raise

        try:
            comment = CommentRepository.create(issue_id=issue_id, user_id=user_id, content=content)
            CommentRepository.commit()
        except SQLAlchemyError:
            CommentRepository.rollback()
            logger.exception("create comment failed: issue=%s", issue_id)
            raise BizError("Database error", code=500)
        return comment

    @staticmethod
    def get_issue_comments(issue_id: int) -> List[Comment]:
        return CommentRepository.list_by_issue(issue_id)
