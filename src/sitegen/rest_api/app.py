# -*- coding: utf-8 -*-
"""
sitegen REST API Application

A standalone FastAPI server exposing the artifact parser, the file list
merge and model-backed project generation. Provides auto-generated OpenAPI
documentation at /docs (Swagger UI) and /redoc (ReDoc).
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..generators.base import BaseGenerator
from . import routes


def create_app(generator: Optional[BaseGenerator] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        generator: Default LLM generator (optional; can be overridden per-request).
    """
    app = FastAPI(
        title="sitegen REST API",
        description=(
            "Turns streamed model artifacts into project file trees and "
            "reconciles generated files with existing projects."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    routes.configure(generator=generator)
    app.include_router(routes.router)

    @app.get("/", tags=["Health"])
    async def health_check():
        return {
            "service": "sitegen REST API",
            "version": __version__,
            "docs": "/docs",
        }

    return app


def run_server(
    generator: Optional[BaseGenerator] = None,
    host: str = "0.0.0.0",
    port: int = 5001,
):
    """
    Launch the sitegen REST API server.

    Args:
        generator: Default LLM generator (optional).
        host: Bind address.
        port: Bind port.
    """
    import uvicorn

    app = create_app(generator=generator)

    print(f"\n{'=' * 60}")
    print(f"sitegen REST API Server (FastAPI + Uvicorn)")
    print(f"{'=' * 60}")
    print()
    print(f"  Base URL : http://{host}:{port}")
    print(f"  Docs     : http://{host}:{port}/docs")
    print()
    print(f"  Endpoints:")
    print(f"    POST /api/v1/parse  - Extract steps and files from a response")
    print(f"    POST /api/v1/merge  - Merge two flat file lists")
    print(f"    POST /api/v1/build  - Generate a project from a prompt")
    print()
    if generator:
        print(f"  LLM default configured (can be overridden per-request)")
    else:
        print(f"  No default LLM - provide model/api_key in each build request")
    print(f"{'=' * 60}\n")

    uvicorn.run(app, host=host, port=port)
