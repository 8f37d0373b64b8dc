"""
测试辅助模块
"""

from .tree_helpers import (
    Node,
    attach_children,
    RecordingMapper,
    row,
    ids,
)

__all__ = [
    "Node",
    "attach_children",
    "RecordingMapper",
    "row",
    "ids",
]
