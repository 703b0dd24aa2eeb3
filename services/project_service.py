import logging
from typing import Optional, List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from constants.roles import CREATOR_ROLE
from models.project import Project
from repositories.project_member_repository import ProjectMemberRepository
from repositories.project_repository import ProjectRepository
from repositories.user_repository import UserRepository
from services.user_service import USER_NOT_FOUND
from utils.exceptions import BizError, NotFoundError, ValidationError
from utils.validators import is_blank, is_int, parse_github_repo, validate_url

logger = logging.getLogger(__name__)


class ProjectService:

    @staticmethod
    def _resolve_repo_fields(
        github_repo_url: str,
        github_owner: Optional[str],
        github_repo_name: Optional[str],
    ):
        """owner / repo 未填写时从 GitHub 地址中解析。"""
        if is_blank(github_repo_url) or not validate_url(github_repo_url):
            raise ValidationError("github_repo_url must be a valid http(s) URL")
        owner = github_owner.strip() if isinstance(github_owner, str) else None
        repo = github_repo_name.strip() if isinstance(github_repo_name, str) else None
        if not owner or not repo:
            parsed = parse_github_repo(github_repo_url)
            if not parsed:
                raise ValidationError("github_owner and github_repo_name are required")
            owner = owner or parsed[0]
            repo = repo or parsed[1]
        return owner, repo

    @staticmethod
    def create_project(
        name: str,
        github_repo_url: str,
        created_by: int,
        description: Optional[str] = None,
        github_owner: Optional[str] = None,
        github_repo_name: Optional[str] = None,
    ) -> Project:
        if is_blank(name) or not isinstance(name, str):
            raise ValidationError("Project name is required")
        if not is_int(created_by):
            raise ValidationError("created_by must be an integer")
        if description is not None and not isinstance(description, str):
            raise ValidationError("description must be a string")
        owner, repo = ProjectService._resolve_repo_fields(github_repo_url, github_owner, github_repo_name)

        if not UserRepository.find_by_id(created_by):
            raise NotFoundError(USER_NOT_FOUND)

        # 项目与创建人成员行在同一事务内写入：要么都存在，要么都不存在
        try:
            project = ProjectRepository.create(
                name=name,
                description=description,
                github_repo_url=github_repo_url,
                github_repo_name=repo,
                github_owner=owner,
                created_by=created_by,
            )
            ProjectMemberRepository.create(
                project_id=project.id,
                user_id=created_by,
                role=CREATOR_ROLE.value,
            )
            ProjectRepository.commit()
        except IntegrityError:
            ProjectRepository.rollback()
            # 预检查之后创建人被删除，外键约束兜底
            raise NotFoundError(USER_NOT_FOUND)
        except SQLAlchemyError:
            ProjectRepository.rollback()
            logger.exception("create project failed: name=%s created_by=%s", name, created_by)
            raise BizError("Database error", code=500)
        except Exception:
            ProjectRepository.rollback()
            raise

        logger.info("project created: id=%s created_by=%s", project.id, created_by)
        return project

    @staticmethod
    def get_projects() -> List[Project]:
        return ProjectRepository.list_all()

    @staticmethod
    def get_user_projects(user_id: int) -> List[Project]:
        return ProjectRepository.list_for_user(user_id)
