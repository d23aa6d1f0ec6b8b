# -*- coding: utf-8 -*-
"""
sitegen Schemas Module

Data schemas for extracted steps and flattened project files.
"""

from .step_schemas import (
    Step,
    StepKind,
    StepStatus,
    mark_completed,
)
from .file_schemas import (
    FlatFile,
    to_flat_files,
)

__all__ = [
    # Steps
    "Step",
    "StepKind",
    "StepStatus",
    "mark_completed",
    # Files
    "FlatFile",
    "to_flat_files",
]
