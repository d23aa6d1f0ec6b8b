# -*- coding: utf-8 -*-
"""
Pydantic models for sitegen REST API request/response validation.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..schemas.file_schemas import FlatFile
from ..schemas.step_schemas import Step


# ---------------------------------------------------------------------------
# Shared generator config (overrides per-request)
# ---------------------------------------------------------------------------

class GeneratorParams(BaseModel):
    """LLM generator parameters that can be overridden per-request."""
    model: Optional[str] = Field(None, description="LLM model name")
    api_base: Optional[str] = Field(None, description="API base URL")
    api_key: Optional[str] = Field(None, description="API key")
    max_tokens: Optional[int] = Field(None, description="Max tokens to generate")
    temperature: Optional[float] = Field(None, description="Sampling temperature")


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class ParseRequest(BaseModel):
    """Request body for extracting steps from a complete model response."""
    document: str = Field(..., description="Full model response containing a boltArtifact")
    base_files: List[FlatFile] = Field(default_factory=list, description="Existing project files to merge under the result")


class MergeRequest(BaseModel):
    """Request body for merging two flat file lists."""
    base_files: List[FlatFile] = Field(default_factory=list, description="Existing project files")
    new_files: List[FlatFile] = Field(default_factory=list, description="Incoming files (take precedence)")


class BuildRequest(GeneratorParams):
    """Request body for generating a project from a prompt."""
    prompt: Optional[str] = Field(None, description="User prompt (either prompt or messages)")
    messages: Optional[List[Dict[str, str]]] = Field(None, description="Full chat history")
    base_files: List[FlatFile] = Field(default_factory=list, description="Existing project files")
    stack: Optional[str] = Field(None, description="Preferred stack for the system prompt")


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class ProjectResponse(BaseModel):
    """Steps and resulting project for the parse and build endpoints."""
    success: bool = True
    title: str
    steps: List[Step] = Field(default_factory=list)
    commands: List[str] = Field(default_factory=list)
    files: List[FlatFile] = Field(default_factory=list)
    mount_tree: Dict[str, Any] = Field(default_factory=dict)


class MergeResponse(BaseModel):
    """Response for the merge endpoint."""
    success: bool = True
    files: List[FlatFile] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None
