"""日志模块

提供日志配置与管理：

使用示例:
    from ytree.log import setup_logger, setup_root_logger, get_logger

    # 打开树表转换的调试日志
    setup_logger("ytree.tree", level="DEBUG")

    # 从 YAML 配置初始化根日志器
    setup_root_logger(config_path="config/settings.yaml")

    # 模块内获取日志器
    logger = get_logger()
"""

from .logger import (
    setup_logger,
    setup_root_logger,
    create_formatter,
    MicrosecondFormatter,
    LoggingConfigProtocol,
    DEFAULT_LOG_FORMAT,
    get_logger,
)

__all__ = [
    "setup_logger",
    "setup_root_logger",
    "create_formatter",
    "MicrosecondFormatter",
    "LoggingConfigProtocol",
    "DEFAULT_LOG_FORMAT",
    "get_logger",
]
