# repositories/user_repository.py
from __future__ import annotations
from typing import List, Optional

from sqlalchemy import select, func

from models.user import User
from extensions.database import db
from repositories.base_repository import BaseRepository


class UserRepository(BaseRepository):
    """
    用户的仓储（数据访问）层。
    说明：
    - 不做业务规则判断（如邮箱格式），仅做纯粹的持久化读写。
    """

    @staticmethod
    def find_by_id(user_id: int) -> Optional[User]:
        return db.session.get(User, user_id)

    @staticmethod
    def exists_email(email: str) -> bool:
        stmt = select(func.count(User.id)).where(User.email == email)
        return (db.session.execute(stmt).scalar() or 0) > 0

    @staticmethod
    def create(email: str, name: str, github_username: Optional[str], avatar_url: Optional[str]) -> User:
        user = User(
            email=email,
            name=name,
            github_username=github_username,
            avatar_url=avatar_url,
        )
        db.session.add(user)
        db.session.flush()
        return user

    @staticmethod
    def list_all() -> List[User]:
        stmt = select(User).order_by(User.id.asc())
        return list(db.session.execute(stmt).scalars().all())

    @staticmethod
    def count() -> int:
        return db.session.execute(select(func.count(User.id))).scalar() or 0
