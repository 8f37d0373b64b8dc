"""树表异常类定义

定义树形转换过程中使用的异常与诊断告警体系。

- 异常（TreeException 子类）：结构性错误，立即中止转换
- 告警（TreeWarning 子类）：可恢复的数据问题，记录日志后继续转换
"""

import copy
from typing import Optional, List, Any, Dict, Union
from enum import Enum


class ErrorCode(str, Enum):
    """错误代码枚举

    继承自 str，可以直接作为字符串使用。

    使用示例:
        from ytree import ErrorCode, DuplicateKeyError

        try:
            handler.to_forest()
        except DuplicateKeyError as e:
            if e.code == ErrorCode.DUPLICATE_KEY:
                ...
    """

    # ==================== 通用错误 ====================
    TREE_ERROR = "TREE_ERROR"
    INVALID_CONFIG = "INVALID_CONFIG"

    # ==================== 数据结构错误 ====================
    DUPLICATE_KEY = "DUPLICATE_KEY"
    CYCLE_DETECTED = "CYCLE_DETECTED"
    MULTIPLE_PARENTS = "MULTIPLE_PARENTS"
    DEPTH_LIMIT_EXCEEDED = "DEPTH_LIMIT_EXCEEDED"


# 类型别名，支持枚举和字符串
ErrorCodeType = Union[str, ErrorCode]


class TreeException(Exception):
    """树表异常基类

    属性:
        message: 错误消息
        code: 错误代码（支持 ErrorCode 枚举或字符串）
        details: 详细错误信息列表
        extra: 额外的上下文信息

    使用示例:
        raise TreeException("转换失败", code=ErrorCode.TREE_ERROR)

        # 带额外上下文
        raise TreeException("转换失败", details=["第3行数据异常"], table="menu")
    """

    def __init__(
        self,
        message: str,
        code: ErrorCodeType = ErrorCode.TREE_ERROR,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        """初始化树表异常

        Args:
            message: 错误消息
            code: 错误代码
            details: 详细错误信息列表
            **extra: 额外的上下文信息
        """
        self.message = message
        self.code = code
        self.details = details or []
        self.extra = extra
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式

        Returns:
            包含异常信息的字典
        """
        return {
            "message": self.message,
            "code": self.code,
            # 返回深拷贝，避免调用方修改返回值反向污染异常对象内部状态
            "details": copy.deepcopy(self.details),
            "extra": copy.deepcopy(self.extra)
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r})"
        )


class TreeConfigError(TreeException):
    """处理器配置异常

    构造 TreeTableHandler 时缺少必需参数或参数互相冲突时抛出。
    """

    def __init__(
        self,
        message: str = "树表处理器配置错误",
        code: ErrorCodeType = ErrorCode.INVALID_CONFIG,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(message=message, code=code, details=details, **extra)


class DuplicateKeyError(TreeException):
    """ID 重复异常

    两行数据拥有相同的非空 ID。ID 唯一是后续父子关系分析的前提，
    出现重复时整个索引不可用，转换立即中止。

    使用示例:
        raise DuplicateKeyError(key=1, row_index=3)
    """

    def __init__(
        self,
        key: Any,
        row_index: int,
        message: Optional[str] = None,
        code: ErrorCodeType = ErrorCode.DUPLICATE_KEY,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        self.key = key
        self.row_index = row_index
        super().__init__(
            message=message or f"id 不允许重复: id={key!r}, 第{row_index}行",
            code=code,
            details=details,
            key=key,
            row_index=row_index,
            **extra
        )


class CycleError(TreeException):
    """循环引用异常

    同一分支上某个节点再次出现（子孙节点引用了自己的祖先）。
    """

    def __init__(
        self,
        key: Any,
        path: List[Any],
        message: Optional[str] = None,
        code: ErrorCodeType = ErrorCode.CYCLE_DETECTED,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        self.key = key
        self.path = list(path)
        super().__init__(
            message=message or f"出现循环引用: {self.path!r} -> {key!r}",
            code=code,
            details=details,
            key=key,
            path=self.path,
            **extra
        )


class MultipleParentsError(TreeException):
    """引用错乱异常

    同一节点可经由两条不同路径到达，即同一节点拥有多个父节点。
    """

    def __init__(
        self,
        key: Any,
        visited: List[Any],
        message: Optional[str] = None,
        code: ErrorCodeType = ErrorCode.MULTIPLE_PARENTS,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        self.key = key
        self.visited = list(visited)
        super().__init__(
            message=message or f"引用错乱, 同一节点只能有唯一的父节点: {self.visited!r} -> {key!r}",
            code=code,
            details=details,
            key=key,
            visited=self.visited,
            **extra
        )


class DepthLimitError(TreeException):
    """层级超限异常

    配置了 max_depth 且展开的节点层级超过该值时抛出。
    """

    def __init__(
        self,
        key: Any,
        level: int,
        max_depth: int,
        message: Optional[str] = None,
        code: ErrorCodeType = ErrorCode.DEPTH_LIMIT_EXCEEDED,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        self.key = key
        self.level = level
        self.max_depth = max_depth
        super().__init__(
            message=message or f"节点层级超限: id={key!r}, 层级={level}, 上限={max_depth}",
            code=code,
            details=details,
            key=key,
            level=level,
            max_depth=max_depth,
            **extra
        )


# ==================== 诊断告警 ====================

class TreeWarning(UserWarning):
    """树表诊断告警基类

    可恢复的数据问题。处理器不会抛出告警，而是记录到
    ``handler.diagnostics`` 并写入日志，转换继续进行。

    属性:
        message: 告警消息
        key: 相关的 ID（可能为 None）
        row_index: 相关的数据行号（未知时为 None）
    """

    def __init__(self, message: str, key: Any = None, row_index: Optional[int] = None):
        self.message = message
        self.key = key
        self.row_index = row_index
        super().__init__(message)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"key={self.key!r}, "
            f"row_index={self.row_index!r})"
        )


class NullRowWarning(TreeWarning):
    """数据行为 None，已略过"""


class NullIdWarning(TreeWarning):
    """数据行 id 为 None，无法作为节点被引用"""


class SelfReferenceWarning(TreeWarning):
    """数据行 id == pid，禁止加入自身子集"""


class MissingRowWarning(TreeWarning):
    """子节点 id 没有对应的数据行，该分支被剪除"""


class Err:
    """异常快捷创建类

    提供统一入口，通过 IDE 自动补全发现所有可用的异常类型。

    使用示例:
        from ytree import Err

        raise Err.duplicate(key=1, row_index=3)
        raise Err.cycle(key=2, path=[1, 2])
        raise Err.config("必须提供 get_id")
    """

    @staticmethod
    def config(message: str = "树表处理器配置错误", **kwargs) -> TreeConfigError:
        """处理器配置错误"""
        return TreeConfigError(message, **kwargs)

    @staticmethod
    def duplicate(key: Any, row_index: int, **kwargs) -> DuplicateKeyError:
        """ID 重复

        Args:
            key: 重复的 ID
            row_index: 出现重复的数据行号
            **kwargs: 额外参数（message, details 等）
        """
        return DuplicateKeyError(key, row_index, **kwargs)

    @staticmethod
    def cycle(key: Any, path: List[Any], **kwargs) -> CycleError:
        """循环引用

        Args:
            key: 再次出现的节点 ID
            path: 当前分支上的祖先 ID
            **kwargs: 额外参数（message, details 等）
        """
        return CycleError(key, path, **kwargs)

    @staticmethod
    def multiple_parents(key: Any, visited: List[Any], **kwargs) -> MultipleParentsError:
        """同一节点存在多个父节点

        Args:
            key: 重复到达的节点 ID
            visited: 本次遍历已访问过的节点 ID
            **kwargs: 额外参数（message, details 等）
        """
        return MultipleParentsError(key, visited, **kwargs)

    @staticmethod
    def depth_limit(key: Any, level: int, max_depth: int, **kwargs) -> DepthLimitError:
        """层级超限"""
        return DepthLimitError(key, level, max_depth, **kwargs)

    @staticmethod
    def fail(message: str = "树表转换失败", **kwargs) -> TreeException:
        """通用树表异常"""
        return TreeException(message, **kwargs)


__all__ = [
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
    "Err",
]
