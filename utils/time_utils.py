"""
时间处理工具模块

提供标准化的时间处理函数，消除重复的时间戳生成代码。

核心功能:
- 获取当前 UTC datetime
- 统一时间戳格式
- 统计窗口截止时间计算
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def get_current_datetime() -> datetime:
    """
    获取当前 UTC 时间的datetime对象

    返回:
        datetime: 当前 UTC 时间的datetime对象
    """
    return datetime.now(timezone.utc)


def get_current_timestamp_ms() -> int:
    """
    获取当前 UTC 时间的毫秒级时间戳

    返回:
        int: 当前 UTC 时间的毫秒级时间戳（13位整数）
    """
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def get_processing_time_ms(start_time: datetime) -> float:
    """
    计算处理时间（毫秒）

    参数:
        start_time: 开始时间

    返回:
        float: 从开始时间到现在经过的毫秒数
    """
    return (get_current_datetime() - start_time).total_seconds() * 1000


def days_ago(days: int, now: Optional[datetime] = None) -> datetime:
    """
    计算统计窗口的起始时间

    参数:
        days: 向前回溯的天数
        now: 基准时间，为None则使用当前 UTC 时间

    返回:
        datetime: ``now - days`` 对应的 UTC 时间
    """
    return (now or get_current_datetime()) - timedelta(days=days)


def to_isoformat(dt: Optional[datetime] = None) -> str:
    """
    格式化时间戳为ISO格式字符串

    参数:
        dt: 要格式化的时间，为None则使用当前 UTC 时间

    返回:
        str: ISO格式时间戳 (e.g., "2024-01-15T10:30:45.123Z")
    """
    if dt is None:
        dt = get_current_datetime()
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
