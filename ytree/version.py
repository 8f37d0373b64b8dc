"""版本信息"""

__version__ = "0.1.0"
__author__ = "ytree"
__description__ = "父子关系表数据转换为树形结构"
