# -*- coding: utf-8 -*-
"""
sitegen - streamed website generation

Turns a live model response written in the boltArtifact protocol into a
project file tree, step by step, and keeps that tree consistent across turns.
"""

__version__ = "0.1.0"

from .core.node import NodeType, PathConflictError, TreeNode
from .core.tree import PathTree
from .core.merge import TreeMerger, merge_file_lists
from .core.materializer import MaterializeResult, TreeMaterializer, materialize
from .schemas.step_schemas import Step, StepKind, StepStatus, mark_completed
from .schemas.file_schemas import FlatFile
from .parsing.extractor import ParserState, ScanPhase
from .parsing.stream import StepStream, iter_steps, parse_artifact_files, parse_full
from .parsing.sse import StreamError, StreamEvent, decode_sse_lines, iter_text_deltas
from .generators.base import BaseGenerator
from .generators.openai_generator import OpenAIGenerator
from .generators.replay_generator import ReplayGenerator
from .generators.config import (
    GeneratorConfig,
    OpenAIGeneratorConfig,
    ReplayGeneratorConfig,
)
from .workspaces.base import BaseWorkspace
from .workspaces.local_workspace import LocalWorkspace
from .workflows.build_workflow import BuildResult, BuildWorkflow
from .prompts.build_prompts import BUILD_SYSTEM_PROMPT, get_build_system_prompt

__all__ = [
    # Core
    "NodeType",
    "PathConflictError",
    "TreeNode",
    "PathTree",
    "TreeMerger",
    "merge_file_lists",
    "MaterializeResult",
    "TreeMaterializer",
    "materialize",
    # Schemas
    "Step",
    "StepKind",
    "StepStatus",
    "mark_completed",
    "FlatFile",
    # Parsing
    "ParserState",
    "ScanPhase",
    "StepStream",
    "iter_steps",
    "parse_artifact_files",
    "parse_full",
    "StreamError",
    "StreamEvent",
    "decode_sse_lines",
    "iter_text_deltas",
    # Generators
    "BaseGenerator",
    "OpenAIGenerator",
    "ReplayGenerator",
    "GeneratorConfig",
    "OpenAIGeneratorConfig",
    "ReplayGeneratorConfig",
    # Workspaces
    "BaseWorkspace",
    "LocalWorkspace",
    # Workflows
    "BuildResult",
    "BuildWorkflow",
    # Prompts
    "BUILD_SYSTEM_PROMPT",
    "get_build_system_prompt",
]
