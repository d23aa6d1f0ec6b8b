# -*- coding: utf-8 -*-
"""
sitegen CLI - Command Line Interface

Commands:
- sitegen-build: generate (or replay) a project and write it to a directory
- sitegen-merge: merge two flat file lists with .js/.ts variant resolution
- sitegen-serve: start the REST API server

Examples:
    # Generate a site with a model
    sitegen-build --prompt "A portfolio site for a photographer" --out-dir ./site

    # Replay a stored response, on top of an existing project
    sitegen-build --replay response.txt --base ./site --out-dir ./site

    # Replay a captured server-sent event stream
    sitegen-build --sse capture.txt --out-dir ./site

    # Merge two file lists
    sitegen-merge template.json generated.json -o merged.json
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

from .schemas.file_schemas import FlatFile, to_flat_files

SKIP_DIRS = {".git", "node_modules", "dist", "build", "__pycache__"}


def _build_generator(args):
    """Build the model generator from command line arguments"""
    from .generators.openai_generator import OpenAIGenerator
    from .generators.config import OpenAIGeneratorConfig
    from .prompts.build_prompts import get_build_system_prompt

    api_key = args.api_key or os.environ.get("OPENAI_API_KEY", "")
    if not api_key:
        print("Error: --api-key or OPENAI_API_KEY is required", file=sys.stderr)
        sys.exit(1)

    config = OpenAIGeneratorConfig(
        model_name=args.model,
        base_url=args.api_base,
        api_key=api_key,
        max_tokens=args.max_tokens,
        temperature=args.temperature,
        system_prompt=get_build_system_prompt(stack=args.stack),
    )
    return OpenAIGenerator(config)


def load_files(source: str | Path) -> List[FlatFile]:
    """
    Load a flat file list from a JSON file ([{"path", "content"}, ...])
    or from a project directory.
    """
    source = Path(source)
    if source.is_dir():
        files: List[FlatFile] = []
        for path in sorted(source.rglob("*")):
            rel = path.relative_to(source)
            if not path.is_file() or any(part in SKIP_DIRS for part in rel.parts):
                continue
            try:
                content = path.read_text(encoding="utf-8")
            except UnicodeDecodeError:
                continue
            files.append(FlatFile(path=rel.as_posix(), content=content))
        return files

    with open(source, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("files", [])
    return to_flat_files(data)


def dump_files(files: List[FlatFile]) -> str:
    return json.dumps([f.model_dump() for f in files], ensure_ascii=False, indent=2)


# ========== Shared arguments ==========

def _add_model_args(parser: argparse.ArgumentParser):
    """Add LLM arguments"""
    parser.add_argument(
        "--model",
        type=str,
        default=os.environ.get("SITEGEN_MODEL", "gpt-4o-mini"),
        help="LLM model name (default: gpt-4o-mini, env SITEGEN_MODEL)",
    )
    parser.add_argument(
        "--api-base",
        type=str,
        default=os.environ.get("SITEGEN_API_BASE", "https://api.openai.com/v1"),
        help="API base URL (env SITEGEN_API_BASE)",
    )
    parser.add_argument(
        "--api-key",
        type=str,
        default=os.environ.get("SITEGEN_API_KEY", os.environ.get("OPENAI_API_KEY", "")),
        help="API key (env SITEGEN_API_KEY or OPENAI_API_KEY)",
    )
    parser.add_argument(
        "--max-tokens",
        type=int,
        default=int(os.environ.get("SITEGEN_MAX_TOKENS", "16000")),
        help="Max generated tokens (default: 16000)",
    )
    parser.add_argument(
        "--temperature",
        type=float,
        default=float(os.environ.get("SITEGEN_TEMPERATURE", "0.0")),
        help="Sampling temperature (default: 0.0)",
    )
    parser.add_argument(
        "--stack",
        type=str,
        default=os.environ.get("SITEGEN_STACK", "React + Vite + TypeScript + Tailwind CSS"),
        help="Preferred project stack for the system prompt",
    )


# ========== sitegen-build ==========

def cli_build(argv: Optional[List[str]] = None):
    """
    CLI entry: sitegen-build
    """
    parser = argparse.ArgumentParser(
        prog="sitegen-build",
        description="Generate a project from a prompt (or a stored response) and write it to disk",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--prompt", "-p", type=str, help="Describe the site to build")
    source.add_argument("--replay", type=str, help="Replay a stored model response file")
    source.add_argument("--sse", type=str, help="Replay a captured server-sent event stream")
    parser.add_argument("--out-dir", "-o", type=str, required=True, help="Project output directory")
    parser.add_argument("--base", type=str, help="Existing project: JSON file list or directory")
    parser.add_argument("--chunk-size", type=int, default=50, help="Replay chunk size (default: 50)")
    parser.add_argument("--run-commands", action="store_true", help="Run the shell steps after writing files")
    parser.add_argument("--files-json", type=str, help="Also write the merged file list as JSON")
    parser.add_argument(
        "--verbose",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Print steps as they arrive (default: on)",
    )
    _add_model_args(parser)
    args = parser.parse_args(argv)

    from .workflows.build_workflow import BuildWorkflow
    from .workspaces.local_workspace import LocalWorkspace

    base_files = load_files(args.base) if args.base else []

    def _print_steps(steps):
        if args.verbose:
            for step in steps:
                print(f"  [{step.id}] {step.label}")

    workflow = BuildWorkflow(
        workspace=LocalWorkspace(root_path=args.out_dir),
        base_files=base_files,
        on_steps=_print_steps,
    )

    if args.prompt:
        workflow.generator = _build_generator(args)
        result = workflow.run(prompt=args.prompt)
    elif args.replay:
        from .generators.replay_generator import ReplayGenerator

        workflow.generator = ReplayGenerator.from_file(args.replay, chunk_size=args.chunk_size)
        result = workflow.run(prompt="")
    else:
        from .parsing.sse import decode_sse_lines, iter_text_deltas

        with open(args.sse, "r", encoding="utf-8") as f:
            result = workflow.run_chunks(iter_text_deltas(decode_sse_lines(f)))

    workflow.mount()
    if args.files_json:
        Path(args.files_json).write_text(dump_files(result.files), encoding="utf-8")

    if args.verbose:
        print(f"\n{'='*60}")
        print(f"sitegen-build done: {result.title}")
        print(f"Output: {Path(args.out_dir).resolve()}")
        print(f"Files: {len(result.files)}  Commands: {len(result.commands)}")
        print(f"{'='*60}")
        print(result.tree.tree_view())

    if args.run_commands:
        for command, output, status in workflow.run_commands():
            print(f"$ {command}\n{output}")
            if status.startswith("Error") or status == "-1":
                sys.exit(1)


# ========== sitegen-merge ==========

def cli_merge(argv: Optional[List[str]] = None):
    """
    CLI entry: sitegen-merge
    """
    parser = argparse.ArgumentParser(
        prog="sitegen-merge",
        description="Merge two flat file lists; incoming files win and evict .js/.ts variants",
    )
    parser.add_argument("base", type=str, help="Base file list (JSON) or project directory")
    parser.add_argument("incoming", type=str, help="Incoming file list (JSON) or project directory")
    parser.add_argument("--output", "-o", type=str, help="Write the merged list here (default: stdout)")
    args = parser.parse_args(argv)

    from .core.merge import merge_file_lists

    merged = merge_file_lists(load_files(args.base), load_files(args.incoming))
    text = dump_files(merged)
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
    else:
        print(text)


# ========== sitegen-serve ==========

def cli_serve(argv: Optional[List[str]] = None):
    """
    CLI entry: sitegen-serve
    """
    parser = argparse.ArgumentParser(prog="sitegen-serve", description="Start the sitegen REST API")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="Bind address")
    parser.add_argument("--port", type=int, default=5001, help="Bind port (default: 5001)")
    _add_model_args(parser)
    args = parser.parse_args(argv)

    from .rest_api.app import run_server

    generator = _build_generator(args) if args.api_key else None
    run_server(generator=generator, host=args.host, port=args.port)


if __name__ == "__main__":
    cli_build()
