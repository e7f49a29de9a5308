"""
配置模块

统一导出应用配置实例，供各模块通过 ``from config import rec_config`` 使用。
"""

from .app import AppConfig
from .module import StrategyProfile

rec_config = AppConfig()

__all__ = ["AppConfig", "StrategyProfile", "rec_config"]
