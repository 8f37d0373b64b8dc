"""树形结构工具函数

基于 TreeTableHandler 的字典树构建函数。

使用示例:
    from ytree.tree import build_tree_list

    # 将扁平列表构建为嵌套树
    flat_list = [
        {"id": 1, "parent_id": None, "name": "根节点"},
        {"id": 2, "parent_id": 1, "name": "子节点1"},
        {"id": 3, "parent_id": 1, "name": "子节点2"},
    ]
    tree = build_tree_list(flat_list)
"""

from typing import List, Dict, Any, Optional, Callable

from .handler import TreeTableHandler
from .mapper import DictResultMapper


def build_tree_list(
    nodes: List[Dict[str, Any]],
    id_field: str = "id",
    parent_field: str = "parent_id",
    children_field: str = "children",
    root_parent_value: Any = None,
    sort_key: Optional[Callable[[Dict], Any]] = None,
    level_field: Optional[str] = None,
    **handler_options: Any,
) -> List[Dict[str, Any]]:
    """将扁平列表构建为嵌套树结构

    Args:
        nodes: 扁平的节点列表，每个节点是一个字典
        id_field: ID 字段名
        parent_field: 父节点 ID 字段名
        children_field: 子节点列表字段名（输出中使用）
        root_parent_value: 根节点的父节点值。为 None 时 pid 为空或指向不存在的行
            都视为根节点；否则只有 pid 等于该值（或为空）的行是根节点，
            指向不存在父节点的孤儿行会被丢弃
        sort_key: 排序函数，用于对同级节点排序
        level_field: 如果指定，将层级（根为 1）写入该字段
        **handler_options: 透传给 TreeTableHandler 的参数（traversal, validate 等）

    Returns:
        嵌套的树形结构列表

    Raises:
        DuplicateKeyError: 存在重复的 ID

    使用示例:
        flat_list = [
            {"id": 1, "parent_id": None, "name": "A"},
            {"id": 2, "parent_id": 1, "name": "A-1"},
            {"id": 3, "parent_id": 1, "name": "A-2"},
            {"id": 4, "parent_id": 2, "name": "A-1-1"},
        ]

        tree = build_tree_list(flat_list)
        # 结果:
        # [
        #     {
        #         "id": 1, "parent_id": None, "name": "A",
        #         "children": [
        #             {"id": 2, "parent_id": 1, "name": "A-1", "children": [
        #                 {"id": 4, "parent_id": 2, "name": "A-1-1", "children": []}
        #             ]},
        #             {"id": 3, "parent_id": 1, "name": "A-2", "children": []},
        #         ]
        #     }
        # ]
    """
    if not nodes:
        return []

    is_root_node = None
    if root_parent_value is not None:
        def is_root_node(node):
            parent_id = node.get(parent_field)
            return parent_id is None or parent_id == root_parent_value

    handler = TreeTableHandler(
        nodes,
        get_id=lambda node: node.get(id_field),
        get_parent_id=lambda node: node.get(parent_field),
        result_mapper=DictResultMapper(children_field=children_field, level_field=level_field),
        is_root_node=is_root_node,
        **handler_options,
    )
    roots = handler.to_forest()

    # 递归排序
    if sort_key:
        _sort_tree_recursive(roots, children_field, sort_key)

    return roots


def _sort_tree_recursive(
    nodes: List[Dict[str, Any]],
    children_field: str,
    sort_key: Callable[[Dict], Any],
):
    """递归排序树节点"""
    nodes.sort(key=sort_key)
    for node in nodes:
        children = node.get(children_field, [])
        if children:
            _sort_tree_recursive(children, children_field, sort_key)
