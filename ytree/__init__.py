"""
ytree - 父子关系表树形转换库

将自关联的扁平数据转换为内存中的树形结构，提供异常、日志、配置等基础功能
"""

from .version import __version__, __author__, __description__

# 导出树形处理
from .tree import (
    TreeTableHandler,
    ResultMapper,
    FunctionResultMapper,
    DictResultMapper,
    build_tree_list,
)

# 导出异常
from .exceptions import (
    Err,
    ErrorCode,
    TreeException,
    TreeConfigError,
    DuplicateKeyError,
    CycleError,
    MultipleParentsError,
    DepthLimitError,
    TreeWarning,
    NullRowWarning,
    NullIdWarning,
    SelfReferenceWarning,
    MissingRowWarning,
)

# 导出日志
from .log import setup_logger, setup_root_logger, get_logger

# 导出配置
from .config import (
    YTreeSettings,
    TreeSettings,
    LoggingSettings,
    ConfigLoader,
    load_yaml_config,
)

__all__ = [
    # 版本
    "__version__",
    "__author__",
    "__description__",

    # 树形处理
    "TreeTableHandler",
    "ResultMapper",
    "FunctionResultMapper",
    "DictResultMapper",
    "build_tree_list",

    # 异常
    "Err",
    "ErrorCode",
    "TreeException",
    "TreeConfigError",
    "DuplicateKeyError",
    "CycleError",
    "MultipleParentsError",
    "DepthLimitError",
    "TreeWarning",
    "NullRowWarning",
    "NullIdWarning",
    "SelfReferenceWarning",
    "MissingRowWarning",

    # 日志
    "setup_logger",
    "setup_root_logger",
    "get_logger",

    # 配置
    "YTreeSettings",
    "TreeSettings",
    "LoggingSettings",
    "ConfigLoader",
    "load_yaml_config",
]
