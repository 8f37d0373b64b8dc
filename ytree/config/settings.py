"""
配置模块
提供树表转换的默认配置，业务项目可以继承并覆盖
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class TreeSettings(BaseSettings):
    """树表转换配置

    使用示例:
        from ytree.config import TreeSettings

        tree_config = TreeSettings(
            traversal="iterative",     # 显式栈遍历，避免深层数据触发递归上限
            validate_integrity=True,   # 转换前检查循环引用与多父节点
            max_depth=64,              # 层级上限，0 表示不限制
        )

    配置说明:
        - traversal: recursive 为递归展开；iterative 使用显式栈，
                     并在分支上出现重复节点时抛出 CycleError
        - validate_integrity: 转换前是否执行完整性检查（默认关闭）
        - max_depth: 展开层级超过该值时抛出 DepthLimitError
    """
    traversal: Literal["recursive", "iterative"] = Field(default="recursive", description="树展开方式")
    validate_integrity: bool = Field(default=False, description="转换前是否检查循环引用与多父节点")
    max_depth: int = Field(default=0, ge=0, description="最大展开层级，0表示不限制")

    class Config:
        env_prefix = "YTREE_TREE_"


class LoggingSettings(BaseSettings):
    """日志配置

    使用示例:
        from ytree.config import LoggingSettings

        log_config = LoggingSettings(
            level="DEBUG",
            file_path="logs/tree.log",
        )
    """
    level: str = Field(default="INFO", description="日志级别")
    file_path: Optional[str] = Field(default=None, description="日志文件路径，为空则不写文件")
    enable_console: bool = Field(default=True, description="是否启用控制台输出")
    log_format: Optional[str] = Field(default=None, description="日志格式，为空则使用默认格式")

    class Config:
        env_prefix = "YTREE_LOG_"


class YTreeSettings(BaseSettings):
    """ytree 基础配置

    将各子配置类聚合为嵌套结构，业务项目继承后只需添加项目特有的配置项。

    配置优先级（从高到低）:
        显式参数 / YAML 配置文件 > 环境变量 > 代码中的默认值

    内置子配置及环境变量前缀:
        - tree:    TreeSettings     (YTREE_TREE_)
        - logging: LoggingSettings  (YTREE_LOG_)

    使用示例:
        from ytree.config import YTreeSettings, load_yaml_config

        settings = load_yaml_config("config/settings.yaml", YTreeSettings)
        handler = TreeTableHandler(rows, ..., settings=settings.tree)

    YAML 配置示例 (config/settings.yaml):
        tree:
          traversal: "iterative"
          max_depth: 32
        logging:
          level: "DEBUG"
    """
    tree: TreeSettings = TreeSettings()
    logging: LoggingSettings = LoggingSettings()

    class Config:
        env_prefix = "YTREE_"
