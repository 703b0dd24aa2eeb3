# models/mixins.py
from sqlalchemy import DateTime
from extensions.database import db
from utils.datetime_helpers import utc_now, datetime_to_iso

COMMON_TABLE_ARGS = {
    "mysql_engine": "InnoDB",
    "mysql_charset": "utf8mb4",
    "mysql_collate": "utf8mb4_unicode_ci",
}


class CreatedAtMixin:
    """只有创建时间的实体（用户 / 项目）"""
    created_at = db.Column(DateTime, nullable=False, default=utc_now, index=True)


class TimestampMixin(CreatedAtMixin):
    # 时间戳在 Python 侧生成，保证微秒精度且 created_at 与 updated_at 可以取同一时刻
    updated_at = db.Column(DateTime, nullable=False, default=utc_now, index=True)


def iso(dt):
    return datetime_to_iso(dt)
