# -*- coding: utf-8 -*-
"""
Unit Tests for TreeMaterializer
"""

import pytest

from conftest import SAMPLE_DOCUMENT
from sitegen.core.materializer import TreeMaterializer, materialize
from sitegen.core.node import PathConflictError
from sitegen.core.tree import PathTree
from sitegen.parsing.stream import parse_full
from sitegen.schemas.step_schemas import Step, StepStatus


class TestApply:
    """Folding steps into a tree"""

    def test_only_file_steps_are_applied(self):
        steps = parse_full(SAMPLE_DOCUMENT)
        result = TreeMaterializer().apply(PathTree(), steps)

        assert [s.path for s in result.applied] == [
            "package.json",
            "src/App.tsx",
            "src/components/Hero.tsx",
        ]
        assert [f.path for f in result.tree.flatten()] == [
            "src/components/Hero.tsx",
            "src/App.tsx",
            "package.json",
        ]

    def test_deterministic(self):
        steps = [
            Step.create_file(1, "b.ts", "b"),
            Step.run_command(2, "npm install"),
            Step.create_file(3, "a/c.ts", "c"),
            Step.set_title(4, "T"),
            Step.create_file(5, "a.ts", "a"),
        ]
        first = materialize(steps)
        second = materialize(steps)
        assert first == second
        assert first.to_mount_tree() == second.to_mount_tree()

    def test_last_write_wins(self):
        steps = [Step.create_file(1, "a.ts", "one"), Step.create_file(2, "a.ts", "two")]
        assert materialize(steps).get_node("a.ts").content == "two"

    def test_completed_steps_are_not_reapplied(self):
        steps = [Step.create_file(1, "a.ts", "a").mark_completed()]
        result = TreeMaterializer().apply(PathTree(), steps)
        assert result.applied == []
        assert result.tree.is_empty

    def test_degenerate_paths_are_skipped(self):
        steps = [Step.create_file(1, "/", "x"), Step.create_file(2, "//src///a.ts", "a")]
        result = TreeMaterializer().apply(PathTree(), steps)
        assert [s.id for s in result.skipped] == [1]
        assert result.tree.get_node("src/a.ts").content == "a"

    def test_input_tree_untouched(self):
        tree = PathTree.from_flat_files([{"path": "a.ts", "content": "old"}])
        result = TreeMaterializer().apply(tree, [Step.create_file(1, "a.ts", "new")])
        assert tree.get_node("a.ts").content == "old"
        assert result.tree.get_node("a.ts").content == "new"

    def test_conflict_leaves_input_tree_intact(self):
        tree = PathTree.from_flat_files([{"path": "src/App.tsx", "content": "x"}])
        steps = [Step.create_file(1, "lib/a.ts", "a"), Step.create_file(2, "src", "oops")]

        with pytest.raises(PathConflictError):
            TreeMaterializer().apply(tree, steps)

        assert [f.path for f in tree.flatten()] == ["src/App.tsx"]

    def test_steps_keep_their_status(self):
        steps = [Step.create_file(1, "a.ts", "a")]
        TreeMaterializer().apply(PathTree(), steps)
        assert steps[0].status == StepStatus.PENDING
