# -*- coding: utf-8 -*-
"""
Cross-variant file list merge

Combines a base file set (e.g. a project template) with a freshly generated
one. Incoming files win on exact path collisions, and an incoming file also
evicts its language variant from the base (`app.js` replaces `app.ts`), so
the merged project never carries both flavours of the same module.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..schemas.file_schemas import FlatFile, to_flat_files

logger = logging.getLogger(__name__)

# (incoming suffix, conflicting suffix); only the first matching suffix applies
DEFAULT_SUFFIX_RULES: Tuple[Tuple[str, str], ...] = (
    (".js", ".ts"),
    (".jsx", ".tsx"),
    (".ts", ".js"),
    (".tsx", ".jsx"),
)

# incoming exact path -> paths it evicts
DEFAULT_EXACT_RULES: Dict[str, Tuple[str, ...]] = {
    "vite.config.js": ("vite.config.ts",),
    "vite.config.ts": ("vite.config.js",),
}


class TreeMerger:
    """
    Merge flat file lists with variant conflict resolution.

    Suffix rules are evaluated before exact-path rules; both are applied
    for every incoming file, then the incoming file is written at its own path.
    """

    def __init__(
        self,
        suffix_rules: Optional[Sequence[Tuple[str, str]]] = None,
        exact_rules: Optional[Dict[str, Sequence[str]]] = None,
    ):
        self.suffix_rules = tuple(suffix_rules if suffix_rules is not None else DEFAULT_SUFFIX_RULES)
        self.exact_rules = {
            path: tuple(evicts)
            for path, evicts in (exact_rules if exact_rules is not None else DEFAULT_EXACT_RULES).items()
        }

    def conflicting_paths(self, path: str) -> List[str]:
        """Paths an incoming file at `path` evicts, in rule order"""
        conflicts: List[str] = []
        for suffix, other in self.suffix_rules:
            if path.endswith(suffix):
                conflicts.append(path[: -len(suffix)] + other)
                break
        for evicted in self.exact_rules.get(path, ()):
            if evicted not in conflicts:
                conflicts.append(evicted)
        return conflicts

    def merge(
        self,
        base_files: Iterable[FlatFile | Dict[str, Any]],
        new_files: Iterable[FlatFile | Dict[str, Any]],
    ) -> List[FlatFile]:
        """
        Args:
            base_files: Existing project files
            new_files: Incoming files, applied in order

        Returns:
            One deduplicated list; surviving base files keep their position,
            new paths are appended in arrival order.
        """
        file_map: Dict[str, FlatFile] = {}
        for item in to_flat_files(base_files):
            file_map[item.path] = item

        for item in to_flat_files(new_files):
            for conflict in self.conflicting_paths(item.path):
                if conflict != item.path and file_map.pop(conflict, None) is not None:
                    logger.debug(f"{item.path} replaces variant {conflict}")
            file_map[item.path] = item

        return list(file_map.values())


_default_merger = TreeMerger()


def merge_file_lists(
    base_files: Iterable[FlatFile | Dict[str, Any]],
    new_files: Iterable[FlatFile | Dict[str, Any]],
) -> List[FlatFile]:
    """Merge with the default .js/.ts, .jsx/.tsx and vite.config rules"""
    return _default_merger.merge(base_files, new_files)
