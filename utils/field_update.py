# -*- coding: utf-8 -*-
"""
field_update.py
--------------------------------------------------------------------
部分更新的三态取值：
- UNCHANGED: 请求中未出现该字段，保持原值
- SetTo(value): 显式设置为新值
- CLEARED: 显式置空（JSON 中的 null）
接口层用 from_payload() 把 JSON 转换为 {字段: 三态值}，服务层只认三态值，
不再依赖 “缺省” 与 “null” 的区别。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping


class _Unchanged:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "UNCHANGED"


class _Cleared:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "CLEARED"


UNCHANGED = _Unchanged()
CLEARED = _Cleared()


@dataclass(frozen=True)
class SetTo:
    value: Any


def from_payload(payload: Mapping[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    updates: Dict[str, Any] = {}
    for name in fields:
        if name not in payload:
            updates[name] = UNCHANGED
        elif payload[name] is None:
            updates[name] = CLEARED
        else:
            updates[name] = SetTo(payload[name])
    return updates


def is_present(update) -> bool:
    return update is not UNCHANGED


def resolve(update, current=None):
    """三态值 -> 实际要写入的值（UNCHANGED 返回 current）。"""
    if update is UNCHANGED:
        return current
    if update is CLEARED:
        return None
    if isinstance(update, SetTo):
        return update.value
    raise TypeError(f"not a field update: {update!r}")
