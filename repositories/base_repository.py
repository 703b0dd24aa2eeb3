from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from extensions.database import db


class BaseRepository:
    """
    仓储公共的事务控制。
    写操作只 add + flush，不自动 commit，由服务层显式调用 commit()，
    以便在一个事务中组合多个写入（如 创建项目 + 创建人成员行）。
    """

    @staticmethod
    def commit():
        try:
            db.session.commit()
        except (IntegrityError, SQLAlchemyError) as e:
            db.session.rollback()
            raise e

    @staticmethod
    def rollback():
        db.session.rollback()
