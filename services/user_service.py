# services/user_service.py
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models.user import User
from repositories.user_repository import UserRepository
from utils.exceptions import BizError, ConflictError, ValidationError
from utils.validators import validate_email, is_blank

logger = logging.getLogger(__name__)

EMAIL_EXISTS = "Email already exists"
USER_NOT_FOUND = "User not found"


def _optional_text(value, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    value = value.strip()
    return value or None


class UserService:

    @staticmethod
    def create_user(email: str, name: str, github_username: Optional[str] = None,
                    avatar_url: Optional[str] = None) -> User:
        # 1. 基础校验
        if is_blank(email):
            raise ValidationError("Email is required")
        if not isinstance(email, str) or not validate_email(email.strip()):
            raise ValidationError("Invalid email format")
        email = email.strip()
        if is_blank(name) or not isinstance(name, str):
            raise ValidationError("Name is required")
        github_username = _optional_text(github_username, "github_username")
        avatar_url = _optional_text(avatar_url, "avatar_url")

        # 2. 唯一性预检查（最终以唯一约束为准）
        if UserRepository.exists_email(email):
            raise ConflictError(EMAIL_EXISTS)

        # 3. 持久化
        try:
            user = UserRepository.create(
                email=email,
                name=name.strip(),
                github_username=github_username,
                avatar_url=avatar_url,
            )
            UserRepository.commit()
        except IntegrityError:
            UserRepository.rollback()
            raise ConflictError(EMAIL_EXISTS)
        except SQLAlchemyError:
            UserRepository.rollback()
            logger.exception("create user failed: email=%s", email)
            raise BizError("Database error", code=500)

        logger.info("user created: id=%s email=%s", user.id, user.email)
        return user

    @staticmethod
    def get_users() -> List[User]:
        return UserRepository.list_all()
