# -*- coding: utf-8 -*-
"""
Server-sent event decoding for relayed model streams

A relay server forwards the model output as lines of the form

    data: {"type": "text_block", "delta": "<boltAction ..."}

with `message_start`, `text_block`, `done` and `error` event types.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, Iterator, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "


class StreamError(RuntimeError):
    """The upstream model stream reported a failure"""


class StreamEvent(BaseModel):
    """One decoded server-sent event"""
    type: str = Field(..., description="message_start | text_block | done | error")
    delta: str = Field("", description="Text fragment (text_block only)")
    error: Optional[str] = Field(None, description="Error message (error only)")
    payload: Dict[str, Any] = Field(default_factory=dict, description="Raw event body")


def decode_sse_lines(lines: Iterable[str]) -> Iterator[StreamEvent]:
    """Decode `data:` lines; other lines and undecodable bodies are skipped"""
    for line in lines:
        line = line.rstrip("\r\n")
        if not line.startswith(DATA_PREFIX):
            continue
        try:
            body = json.loads(line[len(DATA_PREFIX):])
        except json.JSONDecodeError:
            logger.warning(f"Skipping undecodable event: {line[:80]}")
            continue
        if not isinstance(body, dict) or "type" not in body:
            continue
        error = body.get("error")
        yield StreamEvent(
            type=str(body["type"]),
            delta=body.get("delta") or "",
            error=str(error) if error is not None else None,
            payload=body,
        )


def iter_text_deltas(events: Iterable[StreamEvent]) -> Iterator[str]:
    """
    Yield the text of `text_block` events until `done`.

    Raises:
        StreamError: on an `error` event
    """
    for event in events:
        if event.type == "text_block":
            if event.delta:
                yield event.delta
        elif event.type == "done":
            return
        elif event.type == "error":
            raise StreamError(event.error or "Model stream failed")
