"""异常处理模块

提供树表转换使用的异常类与诊断告警类。

使用示例:
    from ytree import Err, DuplicateKeyError

    try:
        forest = handler.to_forest()
    except DuplicateKeyError as e:
        print(e.key, e.row_index)

    # 快捷创建
    raise Err.cycle(key=2, path=[1, 2])
"""

from .exceptions import (
    # ===== 推荐使用 =====
    Err,                            # 异常快捷创建类
    ErrorCode,                      # 错误代码枚举
    ErrorCodeType,

    # ===== 异常 =====
    TreeException,                  # 树表异常基类
    TreeConfigError,                # 处理器配置错误
    DuplicateKeyError,              # ID 重复
    CycleError,                     # 循环引用
    MultipleParentsError,           # 多个父节点
    DepthLimitError,                # 层级超限

    # ===== 诊断告警 =====
    TreeWarning,
    NullRowWarning,
    NullIdWarning,
    SelfReferenceWarning,
    MissingRowWarning,
)

__all__ = [
    "Err",
    "ErrorCode",
    "ErrorCodeType",

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
]
