from typing import Optional, List
from sqlalchemy import select, or_
from extensions.database import db
from models.project import Project, ProjectMember
from repositories.base_repository import BaseRepository


class ProjectRepository(BaseRepository):
    @staticmethod
    def create(
        name: str,
        description: Optional[str],
        github_repo_url: str,
        github_repo_name: str,
        github_owner: str,
        created_by: int,
    ) -> Project:
        project = Project(
            name=name.strip(),
            description=description,
            github_repo_url=github_repo_url.strip(),
            github_repo_name=github_repo_name.strip(),
            github_owner=github_owner.strip(),
            created_by=created_by,
        )
        db.session.add(project)
        db.session.flush()
        return project

    @staticmethod
    def get_by_id(project_id: int) -> Optional[Project]:
        return db.session.get(Project, project_id)

    @staticmethod
    def get_creator_id(project_id: int) -> Optional[int]:
        stmt = select(Project.created_by).where(Project.id == project_id)
        return db.session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def list_all() -> List[Project]:
        stmt = select(Project).order_by(Project.id.asc())
        return list(db.session.execute(stmt).scalars().all())

    @staticmethod
    def list_for_user(user_id: int) -> List[Project]:
        """
        用户创建的项目 ∪ 用户作为成员的项目。
        使用 IN 子查询而非 JOIN，同一项目天然只出现一次。
        """
        member_project_ids = select(ProjectMember.project_id).where(
            ProjectMember.user_id == user_id
        )
        stmt = (
            select(Project)
            .where(or_(Project.created_by == user_id, Project.id.in_(member_project_ids)))
            .order_by(Project.id.asc())
        )
        return list(db.session.execute(stmt).scalars().all())
