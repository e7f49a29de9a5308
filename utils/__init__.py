"""
系统工具模块

该包提供推荐服务的通用工具函数和混入类。

模块组织:
- time_utils: 时间处理工具
- logger_utils: 日志工具
"""

from .time_utils import (
    get_current_datetime,
    get_current_timestamp_ms,
    get_processing_time_ms,
    days_ago,
    to_isoformat,
)
from .logger_utils import get_component_logger, LoggerMixin, configure_logging

__all__ = [
    # 时间工具
    "get_current_datetime",
    "get_current_timestamp_ms",
    "get_processing_time_ms",
    "days_ago",
    "to_isoformat",

    # 日志工具
    "get_component_logger",
    "LoggerMixin",
    "configure_logging",
]
