# -*- coding: utf-8 -*-
"""
Build Workflow

Drives one chat/build session: streams a model turn through the step parser,
folds file steps into the live project tree as soon as they complete, and
reconciles the generated files with the project's existing files when the
turn ends.

Usage:
    from sitegen import BuildWorkflow, OpenAIGenerator

    wf = BuildWorkflow(generator=OpenAIGenerator({...}), workspace=LocalWorkspace("./site"))
    result = wf.run(prompt="A landing page for a bakery")
    print(result.title, len(result.files))
    wf.mount()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..core.materializer import TreeMaterializer
from ..core.merge import merge_file_lists
from ..core.node import normalize_path
from ..core.tree import PathTree
from ..generators.base import BaseGenerator
from ..parsing.stream import DEFAULT_PROJECT_TITLE, StepStream
from ..schemas.file_schemas import FlatFile, to_flat_files
from ..schemas.step_schemas import Step, StepKind, mark_completed
from ..workspaces.base import BaseWorkspace, get_logger

StepsCallback = Callable[[List[Step]], None]


@dataclass
class BuildResult:
    """Outcome of one model turn"""
    title: str = DEFAULT_PROJECT_TITLE
    steps: List[Step] = field(default_factory=list)
    commands: List[str] = field(default_factory=list)
    files: List[FlatFile] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    response_text: str = ""

    @property
    def tree(self) -> PathTree:
        return PathTree.from_flat_files(self.files)


class BuildWorkflow:
    """
    Single-owner session around one project tree.

    Chunks must be fed one at a time; each call to `feed` finishes parsing
    and materializing before it returns. If the stream fails mid-turn, the
    steps applied so far stay in `tree` and the error propagates.
    """

    def __init__(
        self,
        generator: Optional[BaseGenerator] = None,
        workspace: Optional[BaseWorkspace] = None,
        base_files: Optional[Iterable[FlatFile | Dict[str, Any]]] = None,
        on_steps: Optional[StepsCallback] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            generator: Model client used by `run`
            workspace: Runtime that receives the project on `mount`
            base_files: Existing project files (template or persisted project)
            on_steps: Called with each batch of newly extracted steps, still pending
            logger: Defaults to a stream logger named after the class
        """
        self.generator = generator
        self.workspace = workspace
        self.on_steps = on_steps
        self.logger = logger or get_logger(self.__class__.__name__)

        self.parser = StepStream()
        self.materializer = TreeMaterializer()
        self.base_files: List[FlatFile] = [
            FlatFile(path=normalize_path(f.path), content=f.content)
            for f in to_flat_files(base_files or [])
            if normalize_path(f.path)
        ]
        self.tree = PathTree.from_flat_files(self.base_files)

        self.steps: List[Step] = []
        self.commands: List[str] = []
        self.generated: List[FlatFile] = []
        self.removed: List[str] = []

    # ------------------------------------------------------------------
    # Turn lifecycle
    # ------------------------------------------------------------------

    def start_turn(self) -> None:
        """Prepare for a new model response; the project tree carries over"""
        self.parser.reset()
        self.steps = []
        self.commands = []
        self.generated = []
        self.removed = []

    def feed(self, chunk: str) -> List[Step]:
        """
        Parse one chunk and apply the steps it completed.

        Returns:
            The new steps, marked completed
        """
        new_steps = self.parser.parse_chunk(chunk)
        if not new_steps:
            return []

        if self.on_steps is not None:
            self.on_steps(new_steps)

        result = self.materializer.apply(self.tree, new_steps)
        self.tree = result.tree
        for step in result.applied:
            self.generated.append(FlatFile(path=normalize_path(step.path), content=step.content))
            self.logger.debug(f"Applied {step.label}")

        for step in new_steps:
            if step.kind == StepKind.RUN_COMMAND and step.content:
                self.commands.append(step.content)
            elif step.kind == StepKind.SET_TITLE:
                self.logger.info(f"Project title: {step.title}")

        completed = mark_completed(new_steps)
        self.steps.extend(completed)
        return completed

    def finish(self, response_text: str = "") -> BuildResult:
        """
        Close the turn: merge generated files over the base files, resolving
        .js/.ts variants, and make the merged set the new project baseline.
        """
        merged = merge_file_lists(self.base_files, self.generated)
        kept = {f.path for f in merged}
        self.removed = [f.path for f in self.base_files if f.path not in kept]
        self.base_files = merged
        self.tree = PathTree.from_flat_files(merged)

        result = BuildResult(
            title=self.parser.title or DEFAULT_PROJECT_TITLE,
            steps=list(self.steps),
            commands=list(self.commands),
            files=merged,
            removed=list(self.removed),
            response_text=response_text,
        )
        self.logger.info(
            f"Turn finished: {len(self.generated)} files generated, "
            f"{len(merged)} in project, {len(self.commands)} commands"
        )
        return result

    def run_chunks(self, chunks: Iterable[str]) -> BuildResult:
        """Consume an already-open stream of text chunks as one turn"""
        self.start_turn()
        parts: List[str] = []
        for chunk in chunks:
            parts.append(chunk)
            self.feed(chunk)
        return self.finish("".join(parts))

    def run(
        self,
        prompt: Optional[str] = None,
        messages: Optional[List[Dict[str, str]]] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> BuildResult:
        """Stream one model turn through the session"""
        if self.generator is None:
            raise ValueError("BuildWorkflow.run requires a generator")
        return self.run_chunks(
            self.generator.stream(prompt=prompt, messages=messages, extra_params=extra_params)
        )

    # ------------------------------------------------------------------
    # Runtime hand-off
    # ------------------------------------------------------------------

    def _require_workspace(self) -> BaseWorkspace:
        if self.workspace is None:
            raise ValueError("No workspace configured")
        return self.workspace

    def mount(self) -> Dict[str, Any]:
        """Hand the current project tree to the workspace, dropping evicted variants"""
        workspace = self._require_workspace()
        mount_tree = self.tree.to_mount_tree()
        if self.removed:
            workspace.remove(self.removed)
        workspace.mount(mount_tree)
        return mount_tree

    def run_commands(self) -> List[Tuple[str, str, str]]:
        """
        Run this turn's shell steps in order, stopping at the first failure.

        Returns:
            [(command, output, exit_code_or_error), ...]
        """
        workspace = self._require_workspace()
        results: List[Tuple[str, str, str]] = []
        for command in self.commands:
            self.logger.info(f"$ {command}")
            output, status = workspace.run(command)
            results.append((command, output, status))
            if status.startswith("Error") or status == "-1":
                self.logger.error(f"Command failed ({status}): {command}")
                break
        return results
