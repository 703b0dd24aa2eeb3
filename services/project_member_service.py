# services/project_member_service.py
import logging
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from constants.roles import ProjectRole, normalize_role
from models.project import ProjectMember
from repositories.project_member_repository import ProjectMemberRepository
from repositories.project_repository import ProjectRepository
from repositories.user_repository import UserRepository
from services.user_service import USER_NOT_FOUND
from utils.exceptions import BizError, ConflictError, NotFoundError, ValidationError
from utils.permissions import PROJECT_NOT_FOUND
from utils.validators import is_int

logger = logging.getLogger(__name__)

ALREADY_MEMBER = "User is already a member of this project"


class ProjectMemberService:

    @staticmethod
    def invite_user(project_id: int, user_id: int, role: str) -> ProjectMember:
        """
        邀请用户加入项目。
        注意：当前不校验邀请人权限，任何调用方都可以邀请。
        重复邀请：预检查给出友好提示，并发情况下以 (project_id, user_id) 唯一约束为准。
        """
        if not is_int(project_id) or not is_int(user_id):
            raise ValidationError("project_id and user_id must be integers")
        try:
            role = normalize_role(role)
        except ValueError:
            raise ValidationError(f"role must be one of {ProjectRole.values()}")

        if not ProjectRepository.get_by_id(project_id):
            raise NotFoundError(PROJECT_NOT_FOUND)
        if not UserRepository.find_by_id(user_id):
            raise NotFoundError(USER_NOT_FOUND)

        if ProjectMemberRepository.get_by_project_user(project_id, user_id):
            raise ConflictError(ALREADY_MEMBER)

        try:
            member = ProjectMemberRepository.create(project_id=project_id, user_id=user_id, role=role)
            ProjectMemberRepository.commit()
        except IntegrityError:
            ProjectMemberRepository.rollback()
            logger.warning("duplicate membership rejected by constraint: project=%s user=%s",
                           project_id, user_id)
            raise ConflictError(ALREADY_MEMBER)
        except SQLAlchemyError:
            ProjectMemberRepository.rollback()
            logger.exception("invite failed: project=%s user=%s", project_id, user_id)
            raise BizError("Database error", code=500)

        logger.info("user invited: project=%s user=%s role=%s", project_id, user_id, role)
        return member

    @staticmethod
    def list_members(project_id: int, with_user: bool = False) -> List[ProjectMember]:
        return ProjectMemberRepository.list_by_project(project_id, with_user=with_user)
