"""结果映射器

数据行转换为结果节点分两步：
1. map_properties: 普通属性转换，自顶向下，可将祖先的信息一直传递到叶子
2. on_children: 子集准备好后调用，决定子集如何封装，并可做聚合计算

使用示例:
    from ytree.tree import TreeTableHandler, FunctionResultMapper, DictResultMapper

    # 方式1：两个函数
    mapper = FunctionResultMapper(
        row_mapper=lambda row, level, parent: Menu(row, level),
        on_children=lambda node, children: setattr(node, "children", children or []),
    )

    # 方式2：字典行直接使用内置映射器
    mapper = DictResultMapper(level_field="level", count_field="descendant_count")

    forest = TreeTableHandler(rows, get_id, get_pid, result_mapper=mapper).to_forest()
"""

from typing import (
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Protocol,
    TypeVar,
    runtime_checkable,
)

T = TypeVar("T")
R = TypeVar("R")

RowMapper = Callable[[Any, int, Optional[Any]], Any]
ChildrenCallback = Callable[[Any, Optional[List[Any]]], None]


@runtime_checkable
class ResultMapper(Protocol[T, R]):
    """数据行 ==> 结果节点

    T 为原数据行类型（如数据库查询出的行实体），R 为转换后的类型，
    无需转换时可令 T == R，map_properties 原样返回。
    """

    def map_properties(self, row: T, level: int, parent: Optional[R]) -> R:
        """普通属性转换

        Args:
            row: 关系表的数据行
            level: 当前层级，从 0 开始
            parent: 父节点，根节点为 None

        Returns:
            定制的结果节点
        """
        ...

    def on_children(self, parent: R, children: Optional[List[R]]) -> None:
        """子集数据准备好后调用，通常需要 ``parent.children = children``

        Args:
            parent: 已经封装好的结果节点
            children: 已经封装好的子节点列表；没有子节点时为 None
        """
        ...


class FunctionResultMapper:
    """把 row_mapper / on_children 两个函数适配为 ResultMapper"""

    def __init__(self, row_mapper: RowMapper, on_children: ChildrenCallback):
        self.row_mapper = row_mapper
        self.children_callback = on_children

    def map_properties(self, row, level, parent):
        return self.row_mapper(row, level, parent)

    def on_children(self, parent, children) -> None:
        self.children_callback(parent, children)


class DictResultMapper:
    """字典行映射器

    每行复制为新字典（不修改原始数据），子节点放入 children_field，
    叶子节点为空列表。

    Args:
        children_field: 子节点列表字段名
        level_field: 层级字段名，为 None 时不写入
        level_base: 写入层级字段时的起始值，默认根节点为 1
        count_field: 子孙节点数量字段名，为 None 时不统计

    使用示例:
        mapper = DictResultMapper(level_field="level", count_field="total")
        # {"id": 1, "level": 1, "total": 3, "children": [...]}
    """

    def __init__(
        self,
        children_field: str = "children",
        level_field: Optional[str] = None,
        level_base: int = 1,
        count_field: Optional[str] = None,
    ):
        self.children_field = children_field
        self.level_field = level_field
        self.level_base = level_base
        self.count_field = count_field

    def map_properties(
        self,
        row: Dict[str, Any],
        level: int,
        parent: Optional[Dict[str, Any]],
    ) -> Dict[str, Any]:
        node = dict(row)
        if self.level_field:
            node[self.level_field] = level + self.level_base
        return node

    def on_children(
        self,
        parent: Dict[str, Any],
        children: Optional[List[Dict[str, Any]]],
    ) -> None:
        children = children or []
        parent[self.children_field] = children
        # 子节点已先于父节点完成，直接累加其统计值
        if self.count_field:
            parent[self.count_field] = sum(1 + child[self.count_field] for child in children)


__all__ = [
    "ResultMapper",
    "FunctionResultMapper",
    "DictResultMapper",
    "RowMapper",
    "ChildrenCallback",
]
