from typing import Optional, List, Dict, Any
from sqlalchemy import select
from extensions.database import db
from models.issue import Issue
from repositories.base_repository import BaseRepository
from utils.datetime_helpers import utc_now


class IssueRepository(BaseRepository):
    @staticmethod
    def create(
        project_id: int,
        title: str,
        description: Optional[str],
        priority: str,
        status: str,
        assigned_to: Optional[int],
        created_by: int,
        due_date=None,
    ) -> Issue:
        now = utc_now()
        issue = Issue(
            project_id=project_id,
            title=title,
            description=description,
            priority=priority,
            status=status,
            assigned_to=assigned_to,
            created_by=created_by,
            due_date=due_date,
            created_at=now,
            updated_at=now,
        )
        db.session.add(issue)
        db.session.flush()
        return issue

    @staticmethod
    def get_by_id(issue_id: int) -> Optional[Issue]:
        return db.session.get(Issue, issue_id)

    @staticmethod
    def get_project_id(issue_id: int) -> Optional[int]:
        stmt = select(Issue.project_id).where(Issue.id == issue_id)
        return db.session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def list_by_project(
        project_id: int,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        assigned_to: Optional[int] = None,
    ) -> List[Issue]:
        conditions = [Issue.project_id == project_id]
        if status:
            conditions.append(Issue.status == status)
        if priority:
            conditions.append(Issue.priority == priority)
        if assigned_to is not None:
            conditions.append(Issue.assigned_to == assigned_to)
        stmt = select(Issue).where(*conditions).order_by(Issue.id.asc())
        return list(db.session.execute(stmt).scalars().all())

    @staticmethod
    def apply_changes(issue: Issue, changes: Dict[str, Any], updated_at) -> Issue:
        """只写入 changes 中出现的字段；updated_at 每次都刷新。"""
        for field, value in changes.items():
            setattr(issue, field, value)
        issue.updated_at = updated_at
        db.session.flush()
        return issue
