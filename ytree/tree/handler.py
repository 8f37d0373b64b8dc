"""父子关系表处理器

将自关联的扁平数据（每行带 id 和 pid）转换为内存中的树形结构：

    id  pid
    1   None
    2   1
    3   1
    4   2
    5   2
    6   3

处理分三步：
1. 建立 id -> 数据行 的索引（id 不允许重复）
2. 分析父子关系，得到 pid -> [子 id] 的邻接表：1->[2,3]; 2->[4,5]; 3->[6]
3. 从每个未处理过的根节点递归封装结果

表数据可以原样输入，不需要数据库端的自关联查询。实际场景中如果不需要整张表，
调用方需自行筛选出需要的记录。

使用示例:
    from ytree.tree import TreeTableHandler

    def to_node(row, level, parent):
        return {"id": row["id"], "name": row["name"], "level": level}

    def attach(node, children):
        node["children"] = children or []

    handler = TreeTableHandler(
        rows,
        get_id=lambda r: r["id"],
        get_parent_id=lambda r: r["pid"],
        row_mapper=to_node,
        on_children=attach,
    )
    forest = handler.to_forest()
"""

from typing import Any, Callable, Dict, Hashable, List, Optional, Sequence, Set

from ..config import TreeSettings
from ..exceptions import (
    Err,
    TreeWarning,
    NullRowWarning,
    NullIdWarning,
    SelfReferenceWarning,
    MissingRowWarning,
)
from ..log import get_logger
from .mapper import ChildrenCallback, FunctionResultMapper, ResultMapper, RowMapper

logger = get_logger()

TRAVERSAL_RECURSIVE = "recursive"
TRAVERSAL_ITERATIVE = "iterative"

# 完整性检查的显式栈中表示"离开当前节点"的标记
_LEAVE = object()


class _Frame:
    """显式栈遍历时的一层展开状态"""

    __slots__ = ("key", "node", "level", "child_ids", "pos", "children")

    def __init__(self, key, node, level, child_ids):
        self.key = key
        self.node = node
        self.level = level
        self.child_ids = child_ids
        self.pos = 0
        self.children = []


class TreeTableHandler:
    """父子关系表 -> 树形结构

    Args:
        data: 数据行列表
        get_id: 取行 id 的函数
        get_parent_id: 取行 pid 的函数，id 与 pid 类型一致
        row_mapper: ``(row, level, parent) -> node``
        on_children: ``(node, children) -> None``，子集准备好后调用
        result_mapper: 实现 ResultMapper 的对象，与上面两个函数二选一
        is_root_node: 判断根节点的函数，指定后优先使用
        traversal: 展开方式 recursive / iterative，默认取 settings
        validate: 转换前是否执行 validate_integrity，默认取 settings
        max_depth: 最大展开层级，0 表示不限制，默认取 settings
        settings: TreeSettings 配置

    Note:
        一个处理器实例只对应一次转换，索引、邻接表、结果均缓存在实例上，
        不支持多线程同时使用同一实例。
    """

    def __init__(
        self,
        data: Sequence[Any],
        get_id: Callable[[Any], Hashable],
        get_parent_id: Callable[[Any], Hashable],
        row_mapper: Optional[RowMapper] = None,
        on_children: Optional[ChildrenCallback] = None,
        *,
        result_mapper: Optional[ResultMapper] = None,
        is_root_node: Optional[Callable[[Any], bool]] = None,
        traversal: Optional[str] = None,
        validate: Optional[bool] = None,
        max_depth: Optional[int] = None,
        settings: Optional[TreeSettings] = None,
    ):
        if data is None:
            raise Err.config("data 不能为 None")
        if get_id is None or get_parent_id is None:
            raise Err.config("必须提供 get_id 和 get_parent_id")

        if result_mapper is not None:
            if row_mapper is not None or on_children is not None:
                raise Err.config("result_mapper 与 row_mapper/on_children 只能二选一")
            self.result_mapper = result_mapper
        elif row_mapper is not None and on_children is not None:
            self.result_mapper = FunctionResultMapper(row_mapper, on_children)
        else:
            raise Err.config("必须同时提供 row_mapper 和 on_children，或提供 result_mapper")

        settings = settings or TreeSettings()
        self.traversal = traversal or settings.traversal
        if self.traversal not in (TRAVERSAL_RECURSIVE, TRAVERSAL_ITERATIVE):
            raise Err.config(f"不支持的展开方式: {self.traversal!r}")
        self.validate = settings.validate_integrity if validate is None else validate
        self.max_depth = settings.max_depth if max_depth is None else max_depth
        if self.max_depth < 0:
            raise Err.config(f"max_depth 不能为负数: {self.max_depth}")

        self.data = data
        self.get_id = get_id
        self.get_parent_id = get_parent_id
        self.is_root_node = is_root_node

        self.diagnostics: List[TreeWarning] = []

        self._index: Optional[Dict[Any, Any]] = None
        self._adjacency: Optional[Dict[Any, List[Any]]] = None
        self._results: Optional[List[Any]] = None
        self._visited: Set[Any] = set()

    # ==================== 诊断 ====================

    def _diagnose(self, warning: TreeWarning, level: str = "warning"):
        self.diagnostics.append(warning)
        getattr(logger, level)(warning.message)

    # ==================== 索引 ====================

    def _build_index(self) -> Dict[Any, Any]:
        index: Dict[Any, Any] = {}
        for i, row in enumerate(self.data):
            if row is None:
                self._diagnose(NullRowWarning(f"数据行为 None, 略过, 行数: {i}", row_index=i))
                continue

            row_id = self.get_id(row)
            if row_id is None:
                continue
            if row_id in index:
                raise Err.duplicate(key=row_id, row_index=i)
            index[row_id] = row

        logger.debug("索引建立完成: %d 行, %d 个 id", len(self.data), len(index))
        return index

    def get_index(self) -> Dict[Any, Any]:
        """获取 id -> 数据行 索引

        Raises:
            DuplicateKeyError: 存在重复的非空 id
        """
        if self._index is None:
            self._index = self._build_index()
        return self._index

    # ==================== 邻接表 ====================

    def _is_root(self, row, parent_id) -> bool:
        # 优先使用指定规则判断根节点
        if self.is_root_node is not None:
            return bool(self.is_root_node(row))
        # pid 为空或者 pid 指向的行不存在（可能在其他表中），都视为根节点
        return parent_id is None or parent_id not in self._index

    def _build_adjacency(self) -> Dict[Any, List[Any]]:
        adjacency: Dict[Any, List[Any]] = {}
        for i, row in enumerate(self.data):
            if row is None:
                continue

            row_id = self.get_id(row)
            parent_id = self.get_parent_id(row)

            if self._is_root(row, parent_id):
                if row_id is None:
                    self._diagnose(NullIdWarning(f"id == None, 忽略! 行数: {i}", row_index=i))
                    continue
                # 已作为父节点登记过子集时保留原列表
                adjacency.setdefault(row_id, [])
                continue

            if row_id is None:
                self._diagnose(NullIdWarning(f"id == None, 忽略! 行数: {i}", row_index=i))
                continue

            child_ids = adjacency.setdefault(parent_id, [])
            if row_id == parent_id:
                # 加入自身子集必然导致循环引用
                self._diagnose(SelfReferenceWarning(
                    f"id == pid, 忽略! id={row_id!r}", key=row_id, row_index=i
                ))
                continue
            child_ids.append(row_id)

        logger.debug("邻接表建立完成: %d 个节点", len(adjacency))
        return adjacency

    def get_adjacency(self) -> Dict[Any, List[Any]]:
        """获取 pid -> [子 id] 邻接表

        键的顺序为登记顺序，子 id 顺序与输入行顺序一致。根节点的值为空列表
        （除非它同时作为其他行的父节点登记过子集）。

        Raises:
            DuplicateKeyError: 存在重复的非空 id
        """
        if self._adjacency is None:
            self.get_index()
            self._adjacency = self._build_adjacency()
        return self._adjacency

    # ==================== 完整性检查 ====================

    def validate_integrity(self) -> bool:
        """检查引用链

        对邻接表中的每个键向下遍历：同一分支上出现两次相同节点为循环引用，
        同一次遍历中从不同路径到达同一节点为引用错乱。

        id 唯一已经基本避免了循环引用，因此默认不执行，可通过
        ``validate=True`` 在转换前自动执行。

        Returns:
            结构正常时返回 True

        Raises:
            CycleError: 出现循环引用
            MultipleParentsError: 同一节点存在多个父节点
        """
        adjacency = self.get_adjacency()
        for key in adjacency:
            visited = {key}
            branch = [key]
            on_branch = {key}
            stack = list(reversed(adjacency[key]))
            while stack:
                child_id = stack.pop()
                if child_id is _LEAVE:
                    on_branch.discard(branch.pop())
                    continue
                if child_id in on_branch:
                    raise Err.cycle(key=child_id, path=list(branch))
                if child_id in visited:
                    raise Err.multiple_parents(key=child_id, visited=sorted(visited, key=repr))
                visited.add(child_id)

                # 子节点全部出栈后才会弹出 _LEAVE，此时将 child_id 移出当前分支
                branch.append(child_id)
                on_branch.add(child_id)
                stack.append(_LEAVE)
                stack.extend(reversed(adjacency.get(child_id) or ()))
        return True
    # ==================== 树展开 ====================

    def _check_depth(self, key, level: int):
        if self.max_depth and level > self.max_depth:
            raise Err.depth_limit(key=key, level=level, max_depth=self.max_depth)

    def _lookup_row(self, key):
        row = self._index.get(key)
        if row is None:
            # pid 在 id 列中没有，而是指向其他表，或者数据错误
            self._diagnose(
                MissingRowWarning(f"id({key!r}) 对应的数据行不存在", key=key),
                level="debug",
            )
        return row

    def _expand(self, key, level: int, parent):
        row = self._lookup_row(key)
        if row is None:
            return None
        self._check_depth(key, level)

        # parent 参数的作用: 自顶向下, 可将祖先的信息一直传递到叶子
        node = self.result_mapper.map_properties(row, level, parent)
        child_ids = self._adjacency.get(key)
        if not child_ids:
            self.result_mapper.on_children(node, None)
            return node

        children = []
        for child_id in child_ids:
            child = self._expand(child_id, level + 1, node)
            if child is not None:
                children.append(child)
            self._visited.add(child_id)
        # 设置 children, 对子集数据聚合运算
        self.result_mapper.on_children(node, children)
        return node

    def _open_frame(self, key, level: int, parent) -> Optional[_Frame]:
        row = self._lookup_row(key)
        if row is None:
            return None
        self._check_depth(key, level)
        node = self.result_mapper.map_properties(row, level, parent)
        return _Frame(key, node, level, self._adjacency.get(key) or [])

    def _close_frame(self, frame: _Frame):
        if frame.child_ids:
            self.result_mapper.on_children(frame.node, frame.children)
        else:
            self.result_mapper.on_children(frame.node, None)

    def _expand_iterative(self, key):
        root = self._open_frame(key, 0, None)
        if root is None:
            return None

        stack = [root]
        branch = {key}
        while stack:
            frame = stack[-1]
            if frame.pos < len(frame.child_ids):
                child_id = frame.child_ids[frame.pos]
                frame.pos += 1
                if child_id in branch:
                    raise Err.cycle(key=child_id, path=[f.key for f in stack])
                child = self._open_frame(child_id, frame.level + 1, frame.node)
                if child is None:
                    self._visited.add(child_id)
                    continue
                stack.append(child)
                branch.add(child_id)
                continue

            stack.pop()
            branch.discard(frame.key)
            self._close_frame(frame)
            if stack:
                stack[-1].children.append(frame.node)
                self._visited.add(frame.key)
        return root.node

    def to_forest(self) -> List[Any]:
        """转换为树形结构

        按邻接表的登记顺序，从每个尚未被处理过的键开始展开。
        已作为其他节点的子节点处理过的 id 不会再作为根节点重复输出。
        多次调用返回同一个结果列表。

        Returns:
            根节点列表

        Raises:
            DuplicateKeyError: 存在重复的非空 id
            CycleError: 检查开启时出现循环引用，或显式栈展开时遇到循环
            MultipleParentsError: 检查开启时同一节点存在多个父节点
            DepthLimitError: 层级超过 max_depth
        """
        if self._results is not None:
            return self._results

        adjacency = self.get_adjacency()
        if self.validate:
            self.validate_integrity()

        expand = self._expand_iterative if self.traversal == TRAVERSAL_ITERATIVE else (
            lambda key: self._expand(key, 0, None)
        )

        results = []
        for key in adjacency:
            if key in self._visited:
                continue
            node = expand(key)
            if node is not None:
                results.append(node)
            self._visited.add(key)

        logger.debug("树形结构转换完成: %d 个根节点", len(results))
        self._results = results
        return results

    def get_results(self) -> List[Any]:
        """获取转换结果，未转换时先执行转换"""
        return self.to_forest()


__all__ = [
    "TreeTableHandler",
    "TRAVERSAL_RECURSIVE",
    "TRAVERSAL_ITERATIVE",
]
