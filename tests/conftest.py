"""
Pytest 公共配置和 Fixtures

提供测试所需的公共资源：
- 临时目录与临时文件
- 示例父子关系数据
- TreeTableHandler 工厂
"""

import os
import tempfile

import pytest

from tests.helpers import Node, attach_children, row


# ==================== 基础 Fixtures ====================

@pytest.fixture(scope="session")
def temp_dir():
    """创建临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def temp_file(temp_dir):
    """创建临时文件的工厂函数"""
    created_files = []

    def _create_file(filename: str, content: str = "") -> str:
        filepath = os.path.join(temp_dir, filename)
        if os.path.dirname(filepath):
            os.makedirs(os.path.dirname(filepath), exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)
        created_files.append(filepath)
        return filepath

    yield _create_file

    # 清理
    for f in created_files:
        if os.path.exists(f):
            os.remove(f)


@pytest.fixture(autouse=True)
def clear_config_cache():
    """每个测试前后清空 YAML 配置缓存"""
    from ytree.config import ConfigLoader

    ConfigLoader.clear_cache()
    yield
    ConfigLoader.clear_cache()


# ==================== 树表 Fixtures ====================

@pytest.fixture
def sample_rows():
    """
    1
    ├── 2
    │   ├── 4
    │   └── 5
    └── 3
        └── 6
    7
    """
    return [
        row(1),
        row(2, 1),
        row(3, 1),
        row(4, 2),
        row(5, 2),
        row(6, 3),
        row(7),
    ]


@pytest.fixture
def make_handler():
    """创建 TreeTableHandler 的工厂函数，默认使用 Node 映射"""
    from ytree.tree import TreeTableHandler

    def _make(rows, **kwargs):
        if "result_mapper" not in kwargs:
            kwargs.setdefault("row_mapper", Node)
            kwargs.setdefault("on_children", attach_children)
        return TreeTableHandler(
            rows,
            get_id=lambda r: r["id"],
            get_parent_id=lambda r: r["pid"],
            **kwargs
        )

    return _make
