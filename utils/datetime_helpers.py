# -*- coding: utf-8 -*-
"""Datetime helpers.

数据库中所有 ``datetime`` 均按 UTC 存储且不带时区信息（naive），
接口层统一输出带 ``+00:00`` 偏移的 ISO 8601 字符串。
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional


def utc_now() -> datetime:
    """当前 UTC 时间（naive，保留微秒）。"""

    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(dt: datetime) -> datetime:
    """带时区的时间转换为 naive UTC；naive 时间视为已是 UTC。"""

    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def advance_past(previous: Optional[datetime]) -> datetime:
    """返回严格晚于 ``previous`` 的当前时间。

    时钟精度不足（或同一微秒内连续写入）时，在 ``previous`` 基础上补 1 微秒。
    """

    now = utc_now()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def datetime_to_iso(dt: Optional[datetime]) -> Optional[str]:
    """将 ``datetime`` 格式化为 UTC ISO 字符串。

    :param dt: 需要转换的时间; ``None`` 时直接返回 ``None``。
    :return: 带 ``+00:00`` 时区偏移的 ISO 8601 格式字符串。
    """

    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()
