# -*- coding: utf-8 -*-
"""
File Schemas

Flat path -> content records used at persistence and runtime-mount boundaries.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field


class FlatFile(BaseModel):
    """One file of a flattened project"""
    path: str = Field(..., description="Folder-separated path, no leading slash")
    content: Optional[str] = Field(default=None, description="File body (None if unavailable)")


def to_flat_files(items: Iterable[FlatFile | Dict[str, Any]]) -> List[FlatFile]:
    """Coerce dicts such as {"path": ..., "content": ...} into FlatFile records"""
    return [
        item if isinstance(item, FlatFile) else FlatFile.model_validate(item)
        for item in items
    ]
