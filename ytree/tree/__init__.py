"""树形结构模块

将自关联的扁平数据（id + pid）转换为内存中的树形结构。

主要组件:
- TreeTableHandler: 父子关系表处理器（索引、邻接表、树展开、完整性检查）
- ResultMapper: 结果映射协议，以及 FunctionResultMapper / DictResultMapper 实现
- build_tree_list: 字典行构建嵌套树的快捷函数

使用示例:
    from ytree.tree import TreeTableHandler, DictResultMapper, build_tree_list

    handler = TreeTableHandler(
        rows,
        get_id=lambda r: r["id"],
        get_parent_id=lambda r: r["pid"],
        result_mapper=DictResultMapper(level_field="level"),
    )
    forest = handler.to_forest()

    # 字典行的快捷方式
    tree = build_tree_list(rows, parent_field="pid")
"""

from .handler import TreeTableHandler, TRAVERSAL_RECURSIVE, TRAVERSAL_ITERATIVE
from .mapper import ResultMapper, FunctionResultMapper, DictResultMapper
from .tree_utils import build_tree_list

__all__ = [
    # 处理器
    "TreeTableHandler",
    "TRAVERSAL_RECURSIVE",
    "TRAVERSAL_ITERATIVE",

    # 结果映射
    "ResultMapper",
    "FunctionResultMapper",
    "DictResultMapper",

    # 工具函数
    "build_tree_list",
]
