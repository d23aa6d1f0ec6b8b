# -*- coding: utf-8 -*-
"""
TreeNode - Project File Tree Node

Represents a file or folder of a generated project. Folders keep their
children sorted: folders first, then files, each group ordered by name.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class NodeType(str, Enum):
    """Node type"""
    FILE = "file"
    FOLDER = "folder"


class PathConflictError(ValueError):
    """A file and a folder were asked to live at the same path"""

    def __init__(self, path: str, existing: NodeType):
        self.path = path
        self.existing = existing
        super().__init__(f"Path conflict at '{path}': a {existing.value} already exists there")


def join_path(parent: str, name: str) -> str:
    return f"{parent}/{name}" if parent else name


def split_path(path: Optional[str]) -> List[str]:
    """Split a path on '/' dropping empty segments"""
    if not path:
        return []
    return [part for part in path.split("/") if part]


def normalize_path(path: Optional[str]) -> str:
    """Drop leading, trailing and doubled '/' ("" when nothing remains)"""
    return "/".join(split_path(path))


def sort_key(node: TreeNode) -> tuple:
    return (0 if node.is_folder else 1, node.name)


class TreeNode(BaseModel):
    """
    Project tree node - either a folder or a file

    Attributes:
        name: Last path segment
        node_type: file/folder
        path: Ancestor names joined with '/', plus own name
        content: File body (files only, None if unavailable)
        children: Child nodes (folders only)
    """
    name: str = Field(..., description="Node name")
    node_type: NodeType = Field(default=NodeType.FILE, description="Node type")
    path: str = Field(..., description="Full path from the tree root")
    content: Optional[str] = Field(default=None, description="File content")
    children: List[TreeNode] = Field(default_factory=list, description="Child nodes")

    @property
    def is_folder(self) -> bool:
        return self.node_type == NodeType.FOLDER

    @property
    def is_file(self) -> bool:
        return self.node_type == NodeType.FILE

    def get_child(self, name: str) -> Optional[TreeNode]:
        """Get a direct child by name"""
        if not self.is_folder:
            return None
        for child in self.children:
            if child.name == name:
                return child
        return None

    def add_child(self, child: TreeNode) -> TreeNode:
        """Insert a child keeping sibling order"""
        self.children.append(child)
        self.children.sort(key=sort_key)
        return child

    def sort_recursive(self) -> None:
        """Re-establish sibling order throughout the subtree"""
        if not self.is_folder:
            return
        self.children.sort(key=sort_key)
        for child in self.children:
            child.sort_recursive()

    def find_node(self, path_parts: List[str]) -> Optional[TreeNode]:
        """
        Find a descendant by path segments

        Args:
            path_parts: e.g. ["src", "utils", "math.ts"]
        """
        if not path_parts:
            return self
        child = self.get_child(path_parts[0])
        if child is None:
            return None
        return child.find_node(path_parts[1:])

    def get_all_files(self) -> List[TreeNode]:
        """All file nodes in depth-first display order"""
        if self.is_file:
            return [self]
        files = []
        for child in self.children:
            files.extend(child.get_all_files())
        return files

    def to_tree_str(self, prefix: str = "", is_last: bool = True) -> str:
        """Render this node and its descendants as an indented tree"""
        connector = "└── " if is_last else "├── "
        suffix = "/" if self.is_folder else ""
        result = f"{prefix}{connector}{self.name}{suffix}\n"

        child_prefix = prefix + ("    " if is_last else "│   ")
        for i, child in enumerate(self.children):
            result += child.to_tree_str(child_prefix, i == len(self.children) - 1)
        return result

    @classmethod
    def create_file(cls, name: str, path: str, content: Optional[str] = "") -> TreeNode:
        return cls(name=name, node_type=NodeType.FILE, path=path, content=content)

    @classmethod
    def create_folder(cls, name: str, path: str) -> TreeNode:
        return cls(name=name, node_type=NodeType.FOLDER, path=path)
