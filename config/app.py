"""
应用程序集成配置模块

提供集成所有配置模块的主配置类。
"""

from pydantic_settings import SettingsConfigDict

from .deploy import DeploymentConfig
from .module import ModuleConfig
from .storage import StorageConfig


class AppConfig(DeploymentConfig, StorageConfig, ModuleConfig):
    """
    集成配置类

    继承所有配置模块，提供统一的配置接口。

    包含的配置模块：
    - DeploymentConfig: 部署配置（应用信息、API、日志）
    - StorageConfig: 存储系统配置（租户目录库、Redis）
    - ModuleConfig: 模块配置（推荐策略参数）
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )
