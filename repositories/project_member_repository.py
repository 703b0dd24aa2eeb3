# repositories/project_member_repository.py
from typing import Optional, List
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from extensions.database import db
from models.project import ProjectMember
from repositories.base_repository import BaseRepository


class ProjectMemberRepository(BaseRepository):

    @staticmethod
    def get_by_project_user(project_id: int, user_id: int) -> Optional[ProjectMember]:
        stmt = select(ProjectMember).where(
            ProjectMember.project_id == project_id,
            ProjectMember.user_id == user_id
        )
        return db.session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def create(project_id: int, user_id: int, role: str) -> ProjectMember:
        m = ProjectMember(project_id=project_id, user_id=user_id, role=role)
        db.session.add(m)
        db.session.flush()
        return m

    @staticmethod
    def list_by_project(project_id: int, with_user: bool = False) -> List[ProjectMember]:
        stmt = select(ProjectMember).where(ProjectMember.project_id == project_id)
        if with_user:
            stmt = stmt.options(selectinload(ProjectMember.user))
        stmt = stmt.order_by(ProjectMember.id.asc())
        return list(db.session.execute(stmt).scalars().all())
