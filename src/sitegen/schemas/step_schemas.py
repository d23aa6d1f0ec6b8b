# -*- coding: utf-8 -*-
"""
Step Schemas

A step is one unit of generated work extracted from a model response:
set the project title, create a file, or run a shell command.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StepKind(str, Enum):
    """Kinds of generated work"""
    SET_TITLE = "set_title"
    CREATE_FILE = "create_file"
    RUN_COMMAND = "run_command"
    # Reserved by the protocol, never produced by the parser
    CREATE_FOLDER = "create_folder"
    EDIT_FILE = "edit_file"
    DELETE_FILE = "delete_file"


class StepStatus(str, Enum):
    """Step lifecycle status"""
    PENDING = "pending"
    COMPLETED = "completed"


class Step(BaseModel):
    """
    Immutable record of one extracted action.

    Attributes:
        id: Monotonic id, unique within one parser's lifetime
        kind: What the step does
        status: pending until the consumer has applied it
        path: Target file path (create_file only)
        content: File body or command text, trimmed
        title: Project title (set_title only)
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1, description="Step id")
    kind: StepKind = Field(..., description="Step kind")
    status: StepStatus = Field(default=StepStatus.PENDING, description="Step status")
    path: Optional[str] = Field(default=None, description="File path")
    content: Optional[str] = Field(default=None, description="File body or command")
    title: Optional[str] = Field(default=None, description="Artifact title")

    @property
    def is_pending(self) -> bool:
        return self.status == StepStatus.PENDING

    @property
    def label(self) -> str:
        """Short display text for the step"""
        if self.kind == StepKind.SET_TITLE:
            return self.title or ""
        if self.kind == StepKind.CREATE_FILE:
            return f"Create {self.path or 'file'}"
        if self.kind == StepKind.RUN_COMMAND:
            return "Run command"
        return self.kind.value

    def mark_completed(self) -> Step:
        """Return a completed copy of this step"""
        return self.model_copy(update={"status": StepStatus.COMPLETED})

    def same_action(self, other: Step) -> bool:
        """Compare two steps ignoring id and status"""
        return (
            self.kind == other.kind
            and self.path == other.path
            and self.content == other.content
            and self.title == other.title
        )

    @classmethod
    def set_title(cls, step_id: int, title: str) -> Step:
        return cls(id=step_id, kind=StepKind.SET_TITLE, title=title)

    @classmethod
    def create_file(cls, step_id: int, path: str, content: str) -> Step:
        return cls(id=step_id, kind=StepKind.CREATE_FILE, path=path, content=content)

    @classmethod
    def run_command(cls, step_id: int, command: str) -> Step:
        return cls(id=step_id, kind=StepKind.RUN_COMMAND, content=command)


def mark_completed(steps: list[Step]) -> list[Step]:
    """Transition every pending step to completed"""
    return [s.mark_completed() if s.is_pending else s for s in steps]
