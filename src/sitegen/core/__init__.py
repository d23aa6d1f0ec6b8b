from .node import NodeType, PathConflictError, TreeNode
from .tree import PathTree
from .merge import TreeMerger, merge_file_lists
from .materializer import MaterializeResult, TreeMaterializer, materialize

__all__ = [
    "NodeType",
    "PathConflictError",
    "TreeNode",
    "PathTree",
    "TreeMerger",
    "merge_file_lists",
    "MaterializeResult",
    "TreeMaterializer",
    "materialize",
]
