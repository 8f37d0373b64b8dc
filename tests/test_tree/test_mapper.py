"""结果映射器测试"""

from ytree.tree import (
    TreeTableHandler,
    ResultMapper,
    FunctionResultMapper,
    DictResultMapper,
)

from tests.helpers import RecordingMapper, row


def _dict_forest(rows, mapper):
    return TreeTableHandler(
        rows,
        get_id=lambda r: r["id"],
        get_parent_id=lambda r: r["pid"],
        result_mapper=mapper,
    ).to_forest()


class TestResultMapperProtocol:
    """ResultMapper 协议测试"""

    def test_builtin_mappers_satisfy_protocol(self):
        """测试内置映射器满足协议"""
        assert isinstance(DictResultMapper(), ResultMapper)
        assert isinstance(FunctionResultMapper(lambda r, l, p: r, lambda n, c: None), ResultMapper)
        assert isinstance(RecordingMapper(), ResultMapper)

    def test_function_mapper_delegates(self):
        """测试 FunctionResultMapper 调用传入的函数"""
        attached = {}
        mapper = FunctionResultMapper(
            row_mapper=lambda r, level, parent: {"id": r["id"], "level": level, "parent": parent},
            on_children=lambda node, children: attached.update({node["id"]: children}),
        )

        node = mapper.map_properties(row(1), 3, None)
        mapper.on_children(node, None)

        assert node == {"id": 1, "level": 3, "parent": None}
        assert attached == {1: None}


class TestDictResultMapper:
    """DictResultMapper 测试"""

    def test_copies_rows(self, sample_rows):
        """测试不修改原始数据"""
        forest = _dict_forest(sample_rows, DictResultMapper())

        assert "children" not in sample_rows[0]
        assert forest[0] is not sample_rows[0]
        assert forest[0]["name"] == "n1"

    def test_leaf_gets_empty_children(self, sample_rows):
        """测试叶子节点 children 为空列表"""
        forest = _dict_forest(sample_rows, DictResultMapper(children_field="kids"))

        assert forest[1]["kids"] == []
        assert [n["id"] for n in forest[0]["kids"]] == [2, 3]

    def test_level_field(self, sample_rows):
        """测试层级字段，根节点从 level_base 开始"""
        forest = _dict_forest(sample_rows, DictResultMapper(level_field="level"))

        assert forest[0]["level"] == 1
        assert forest[0]["children"][0]["children"][0]["level"] == 3

        forest = _dict_forest(sample_rows, DictResultMapper(level_field="lvl", level_base=0))
        assert forest[0]["lvl"] == 0

    def test_descendant_count(self, sample_rows):
        """测试子孙数量自底向上聚合"""
        forest = _dict_forest(sample_rows, DictResultMapper(count_field="total"))

        one, seven = forest
        assert one["total"] == 5
        assert one["children"][0]["total"] == 2
        assert one["children"][1]["total"] == 1
        assert seven["total"] == 0

    def test_no_level_field_by_default(self, sample_rows):
        """测试默认不写入层级与统计字段"""
        forest = _dict_forest(sample_rows, DictResultMapper())

        assert set(forest[1]) == {"id", "pid", "name", "children"}
