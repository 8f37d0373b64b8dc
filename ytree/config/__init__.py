"""配置模块

提供配置管理功能：
- YTreeSettings: 聚合配置，支持 YAML + 环境变量
- 子配置类: TreeSettings, LoggingSettings
- ConfigLoader: YAML 配置加载器

快速开始:
    from ytree.config import YTreeSettings, load_yaml_config

    settings = load_yaml_config("config/settings.yaml", YTreeSettings)
"""

from .settings import (
    YTreeSettings,
    TreeSettings,
    LoggingSettings,
)

from .loader import (
    ConfigLoader,
    load_yaml_config,
)

__all__ = [
    # Settings Classes
    "YTreeSettings",
    "TreeSettings",
    "LoggingSettings",

    # Config Loader
    "ConfigLoader",
    "load_yaml_config",
]
