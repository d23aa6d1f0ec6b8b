# -*- coding: utf-8 -*-
"""
TreeMaterializer - fold create-file steps into a PathTree
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from ..schemas.step_schemas import Step, StepKind
from .node import normalize_path
from .tree import PathTree

logger = logging.getLogger(__name__)


@dataclass
class MaterializeResult:
    """Updated tree plus the steps that were written into it"""
    tree: PathTree
    applied: List[Step] = field(default_factory=list)
    skipped: List[Step] = field(default_factory=list)


class TreeMaterializer:
    """
    Applies pending create-file steps to a tree.

    The input tree is never modified: steps are folded into a deep copy,
    so a PathConflictError half-way through leaves the caller's tree intact.
    Non-file steps are ignored; completed steps are not re-applied.
    """

    def apply(self, tree: PathTree, steps: Iterable[Step]) -> MaterializeResult:
        result = MaterializeResult(tree=tree.copy_tree())

        for step in steps:
            if step.kind != StepKind.CREATE_FILE or not step.is_pending:
                continue
            path = normalize_path(step.path)
            if not path:
                logger.debug(f"Skipping step {step.id}: degenerate path {step.path!r}")
                result.skipped.append(step)
                continue
            result.tree.upsert_file(path, step.content)
            result.applied.append(step)

        return result


def materialize(steps: Iterable[Step], tree: PathTree | None = None) -> PathTree:
    """Fold steps into `tree` (or an empty tree) and return the new tree"""
    return TreeMaterializer().apply(tree or PathTree(), steps).tree
