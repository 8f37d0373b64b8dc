"""完整性检查与展开方式测试

测试 validate_integrity、显式栈展开、层级上限
"""

import pytest

from ytree.exceptions import (
    CycleError,
    MultipleParentsError,
    DepthLimitError,
    ErrorCode,
)

from tests.helpers import RecordingMapper, row, ids


class TestValidateIntegrity:
    """validate_integrity 测试"""

    def test_valid_tree(self, make_handler, sample_rows):
        """测试正常数据通过检查"""
        assert make_handler(sample_rows).validate_integrity() is True

    def test_two_node_cycle(self, make_handler):
        """测试两个节点互为父子"""
        handler = make_handler([row(1, 2), row(2, 1)])

        with pytest.raises(CycleError) as exc_info:
            handler.validate_integrity()

        assert exc_info.value.key == 2
        assert exc_info.value.path == [2, 1]
        assert exc_info.value.code == ErrorCode.CYCLE_DETECTED

    def test_longer_cycle_beside_valid_root(self, make_handler):
        """测试正常根节点旁边的长循环"""
        handler = make_handler([row(1), row(2, 4), row(3, 2), row(4, 3)])

        with pytest.raises(CycleError) as exc_info:
            handler.validate_integrity()

        assert exc_info.value.key == 4
        assert exc_info.value.path == [4, 2, 3]

    def test_multiple_parents(self, make_handler, sample_rows):
        """测试手工构造的邻接表中同一节点挂在两个父节点下"""
        handler = make_handler(sample_rows)
        handler.get_adjacency()[3].append(4)

        with pytest.raises(MultipleParentsError) as exc_info:
            handler.validate_integrity()

        assert exc_info.value.key == 4
        assert exc_info.value.code == ErrorCode.MULTIPLE_PARENTS
        assert 4 in exc_info.value.visited

    def test_validate_before_forest(self, make_handler):
        """测试开启检查后转换前即失败，映射器未被调用"""
        mapper = RecordingMapper()
        handler = make_handler([row(1, 2), row(2, 1)], result_mapper=mapper, validate=True)

        with pytest.raises(CycleError):
            handler.to_forest()

        assert mapper.calls == []

    def test_validate_option_passes_valid_data(self, make_handler, sample_rows):
        """测试开启检查不影响正常数据"""
        forest = make_handler(sample_rows, validate=True).to_forest()

        assert ids(forest) == [1, 7]

    def test_cycle_path_excludes_finished_siblings(self, make_handler, sample_rows):
        """测试循环路径只包含当前分支，不包含已遍历完的兄弟分支"""
        handler = make_handler(sample_rows)
        handler.get_adjacency()[6] = [1]

        with pytest.raises(CycleError) as exc_info:
            handler.validate_integrity()

        assert exc_info.value.key == 1
        assert exc_info.value.path == [1, 3, 6]

    def test_deep_chain_does_not_recurse(self, make_handler):
        """测试深层链表的检查不受递归上限影响"""
        rows = [row(0)] + [row(i, i - 1) for i in range(1, 2000)]

        assert make_handler(rows).validate_integrity() is True


class TestIterativeTraversal:
    """显式栈展开测试"""

    def test_same_forest_as_recursive(self, make_handler, sample_rows):
        """测试两种展开方式结果一致"""
        recursive = make_handler(sample_rows, traversal="recursive").to_forest()
        iterative = make_handler(sample_rows, traversal="iterative").to_forest()

        def shape(nodes):
            return [(n.id, n.level, n.path, n.leaf_count, shape(n.children)) for n in nodes or []]

        assert shape(recursive) == shape(iterative)

    def test_deep_chain(self, make_handler):
        """测试超过递归上限的深层数据"""
        depth = 3000
        rows = [row(0)] + [row(i, i - 1) for i in range(1, depth)]

        forest = make_handler(
            rows,
            traversal="iterative",
            row_mapper=lambda r, level, parent: {"id": r["id"], "level": level},
            on_children=lambda node, children: node.update(children=children or []),
        ).to_forest()

        node = forest[0]
        levels = 0
        while node["children"]:
            node = node["children"][0]
            levels += 1
        assert levels == depth - 1
        assert node["level"] == depth - 1

    def test_cycle_raises_instead_of_looping(self, make_handler):
        """测试遇到循环时抛出 CycleError"""
        handler = make_handler([row(1, 2), row(2, 1)], traversal="iterative")

        with pytest.raises(CycleError) as exc_info:
            handler.to_forest()

        assert exc_info.value.key == 2
        assert exc_info.value.path == [2, 1]

    def test_recursive_cycle_exhausts_stack(self, make_handler):
        """测试递归展开遇到未检查的循环时触发递归上限"""
        handler = make_handler([row(1, 2), row(2, 1)])

        with pytest.raises(RecursionError):
            handler.to_forest()

    def test_child_before_parent_key(self, make_handler):
        """测试邻接表登记顺序相关的行为与递归一致"""
        rows = [row(3, 2), row(2, 1), row(1)]

        forest = make_handler(rows, traversal="iterative").to_forest()

        assert ids(forest) == [2, 1]
        assert ids(forest[1].children) == [2]


class TestDepthLimit:
    """层级上限测试"""

    @pytest.mark.parametrize("traversal", ["recursive", "iterative"])
    def test_exceeding_limit_raises(self, make_handler, sample_rows, traversal):
        """测试超过层级上限"""
        handler = make_handler(sample_rows, max_depth=1, traversal=traversal)

        with pytest.raises(DepthLimitError) as exc_info:
            handler.to_forest()

        assert exc_info.value.key == 4
        assert exc_info.value.level == 2
        assert exc_info.value.max_depth == 1

    @pytest.mark.parametrize("traversal", ["recursive", "iterative"])
    def test_within_limit(self, make_handler, sample_rows, traversal):
        """测试层级恰好等于上限"""
        forest = make_handler(sample_rows, max_depth=2, traversal=traversal).to_forest()

        assert ids(forest) == [1, 7]

    def test_depth_limit_stops_recursive_cycle(self, make_handler):
        """测试层级上限可以截断递归展开中的循环"""
        handler = make_handler([row(1, 2), row(2, 1)], max_depth=10)

        with pytest.raises(DepthLimitError):
            handler.to_forest()
