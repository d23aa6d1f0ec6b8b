# -*- coding: utf-8 -*-
"""
PathTree - Project File Tree

Hierarchical view of a generated project built from flat path -> content
pairs. Supports path-addressed upsert, flattening back to a file list and
conversion to the nested mount format used by the preview runtime.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from ..schemas.file_schemas import FlatFile, to_flat_files
from .node import NodeType, PathConflictError, TreeNode, join_path, split_path


class PathTree(BaseModel):
    """
    Project file tree

    The root is an unnamed folder; its children are the top-level entries.
    Every folder keeps its children sorted (folders before files, then by name).
    """
    root: TreeNode = Field(
        default_factory=lambda: TreeNode.create_folder("", ""),
        description="Unnamed root folder",
    )

    @property
    def nodes(self) -> List[TreeNode]:
        """Top-level entries"""
        return self.root.children

    @property
    def is_empty(self) -> bool:
        return len(self.root.children) == 0

    def get_node(self, path: str) -> Optional[TreeNode]:
        """
        Get a node by path, e.g. "src/utils" or "/src/App.tsx".
        The root is returned for "", "/" and ".".
        """
        path = path.strip()
        if path in ("", "/", "."):
            return self.root
        return self.root.find_node(split_path(path))

    def upsert_file(self, path: str, content: Optional[str]) -> TreeNode:
        """
        Create or replace the file at `path`, creating missing folders.

        Folders are matched by their accumulated path, so two folders that
        each hold an `index.ts` never collide.

        Raises:
            ValueError: the path has no segments
            PathConflictError: a segment names an existing node of the other kind
        """
        parts = split_path(path)
        if not parts:
            raise ValueError(f"Empty file path: {path!r}")

        folder = self._walk_folders(parts[:-1])
        name = parts[-1]
        file_path = join_path(folder.path, name)
        node = folder.get_child(name)
        if node is None:
            return folder.add_child(TreeNode.create_file(name, file_path, content))
        if node.is_folder:
            raise PathConflictError(file_path, node.node_type)
        node.content = content
        return node

    def ensure_folder(self, path: str) -> TreeNode:
        """Get or create the folder at `path`"""
        return self._walk_folders(split_path(path))

    def _walk_folders(self, parts: List[str]) -> TreeNode:
        folder = self.root
        current = ""
        for part in parts:
            current = join_path(current, part)
            child = folder.get_child(part)
            if child is None:
                child = folder.add_child(TreeNode.create_folder(part, current))
            elif not child.is_folder:
                raise PathConflictError(current, child.node_type)
            folder = child
        return folder

    def sort(self) -> None:
        self.root.sort_recursive()

    def copy_tree(self) -> PathTree:
        return self.model_copy(deep=True)

    def flatten(self) -> List[FlatFile]:
        """Files in display order as flat records"""
        return [FlatFile(path=node.path, content=node.content) for node in self.root.get_all_files()]

    def to_mount_tree(self) -> Dict[str, Any]:
        """
        Nested mount format keyed by path segment:
            folder -> {"directory": {...}}
            file   -> {"file": {"contents": str}}
        Files with unavailable content are mounted empty.
        """
        return _mount_children(self.root)

    def initial_file(self) -> Optional[TreeNode]:
        """The file reached by descending into the first entry of each folder"""
        node = self.root
        while node.is_folder:
            if not node.children:
                return None
            node = node.children[0]
        return node

    def tree_view(self) -> str:
        if self.is_empty:
            return "(empty)\n"
        result = ""
        for i, child in enumerate(self.nodes):
            result += child.to_tree_str("", i == len(self.nodes) - 1)
        return result

    @classmethod
    def from_flat_files(cls, files: Iterable[FlatFile | Dict[str, Any]]) -> PathTree:
        """Build a tree from flat records; later records win on repeated paths"""
        tree = cls()
        for item in to_flat_files(files):
            if split_path(item.path):
                tree.upsert_file(item.path, item.content)
        return tree

    @classmethod
    def from_mount_tree(cls, mount_tree: Dict[str, Any]) -> PathTree:
        """Inverse of to_mount_tree"""
        tree = cls()
        _load_mount(tree, mount_tree, "")
        return tree


def _mount_children(folder: TreeNode) -> Dict[str, Any]:
    entries: Dict[str, Any] = {}
    for child in folder.children:
        if child.node_type == NodeType.FOLDER:
            entries[child.name] = {"directory": _mount_children(child)}
        else:
            entries[child.name] = {"file": {"contents": child.content or ""}}
    return entries


def _load_mount(tree: PathTree, entries: Dict[str, Any], parent: str) -> None:
    for name, entry in entries.items():
        path = join_path(parent, name)
        if "directory" in entry:
            tree.ensure_folder(path)
            _load_mount(tree, entry["directory"], path)
        else:
            tree.upsert_file(path, entry.get("file", {}).get("contents", ""))
