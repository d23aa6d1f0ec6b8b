# -*- coding: utf-8 -*-
"""
sitegen REST API route handlers.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import APIRouter, HTTPException

from ..core.merge import merge_file_lists
from ..core.node import PathConflictError
from ..generators.base import BaseGenerator
from ..generators.config import OpenAIGeneratorConfig
from ..generators.openai_generator import OpenAIGenerator
from ..parsing.sse import StreamError
from ..prompts.build_prompts import DEFAULT_STACK, get_build_system_prompt
from ..workflows.build_workflow import BuildResult, BuildWorkflow
from .models import (
    BuildRequest,
    ErrorResponse,
    MergeRequest,
    MergeResponse,
    ParseRequest,
    ProjectResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["sitegen"])

_default_generator: Optional[BaseGenerator] = None


def configure(generator: Optional[BaseGenerator] = None) -> None:
    """Set module-level defaults (called once at startup)."""
    global _default_generator
    _default_generator = generator


def _build_generator(body: BuildRequest) -> BaseGenerator:
    """Use the configured generator unless the request overrides the model settings."""
    overrides = (body.model, body.api_base, body.api_key, body.max_tokens, body.temperature)
    if _default_generator is not None and all(v is None for v in overrides):
        return _default_generator

    base = _default_generator.config if isinstance(_default_generator, OpenAIGenerator) else None
    config = OpenAIGeneratorConfig(
        model_name=body.model or (base.model_name if base else "gpt-4o-mini"),
        base_url=body.api_base or (base.base_url if base else "https://api.openai.com/v1"),
        api_key=body.api_key or (base.api_key if base else os.environ.get("OPENAI_API_KEY", "")),
        max_tokens=body.max_tokens or (base.max_tokens if base else 16000),
        temperature=body.temperature if body.temperature is not None else (base.temperature if base else 0.0),
        system_prompt=get_build_system_prompt(stack=body.stack or DEFAULT_STACK),
    )
    return OpenAIGenerator(config)


def _project_response(result: BuildResult) -> ProjectResponse:
    return ProjectResponse(
        title=result.title,
        steps=result.steps,
        commands=result.commands,
        files=result.files,
        mount_tree=result.tree.to_mount_tree(),
    )


# ---------------------------------------------------------------------------
# POST /api/v1/parse
# ---------------------------------------------------------------------------

@router.post(
    "/parse",
    response_model=ProjectResponse,
    responses={422: {"model": ErrorResponse}},
    summary="Extract steps and files from a model response",
)
async def parse_document(body: ParseRequest) -> ProjectResponse:
    workflow = BuildWorkflow(base_files=body.base_files, logger=logger)
    try:
        result = workflow.run_chunks([body.document])
    except PathConflictError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _project_response(result)


# ---------------------------------------------------------------------------
# POST /api/v1/merge
# ---------------------------------------------------------------------------

@router.post(
    "/merge",
    response_model=MergeResponse,
    summary="Merge two flat file lists",
    description="Incoming files win on path collisions and evict their .js/.ts variants.",
)
async def merge_files(body: MergeRequest) -> MergeResponse:
    return MergeResponse(files=merge_file_lists(body.base_files, body.new_files))


# ---------------------------------------------------------------------------
# POST /api/v1/build
# ---------------------------------------------------------------------------

@router.post(
    "/build",
    response_model=ProjectResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Generate a project from a prompt",
)
def build_project(body: BuildRequest) -> ProjectResponse:
    if (body.prompt is None) == (not body.messages):
        raise HTTPException(status_code=400, detail="Pass exactly one of 'prompt' or 'messages'")

    workflow = BuildWorkflow(
        generator=_build_generator(body),
        base_files=body.base_files,
        logger=logger,
    )
    try:
        result = workflow.run(prompt=body.prompt, messages=body.messages)
    except PathConflictError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except StreamError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    except Exception as exc:
        logger.exception("Build failed")
        raise HTTPException(status_code=500, detail=str(exc))
    return _project_response(result)
