from typing import List
from sqlalchemy import select
from extensions.database import db
from models.comment import Comment
from repositories.base_repository import BaseRepository
from utils.datetime_helpers import utc_now


class CommentRepository(BaseRepository):
    @staticmethod
    def create(issue_id: int, user_id: int, content: str) -> Comment:
        now = utc_now()
        comment = Comment(
            issue_id=issue_id,
            user_id=user_id,
            content=content,
            created_at=now,
            updated_at=now,
        )
        db.session.add(comment)
        db.session.flush()
        return comment

    @staticmethod
    def list_by_issue(issue_id: int) -> List[Comment]:
        # 最早的评论在前；同一时刻按 id 保证稳定顺序
        stmt = (
            select(Comment)
            .where(Comment.issue_id == issue_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        return list(db.session.execute(stmt).scalars().all())
