# -*- coding: utf-8 -*-
"""
ActionExtractor - incremental scanner for the artifact protocol

The model wraps its work in an envelope:

    <boltArtifact id="..." title="My Site">
      <boltAction type="file" filePath="src/App.tsx">...</boltAction>
      <boltAction type="shell">npm install</boltAction>
    </boltArtifact>

`extract_steps` is called every time the buffer grows. It walks the buffer
from the watermark through three phases and returns the steps that became
complete. Nothing before the watermark is ever looked at again, and the
watermark only moves past text that can no longer change meaning, so an
action split over any number of chunks is matched exactly once.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..schemas.step_schemas import Step

logger = logging.getLogger(__name__)

ENVELOPE_TAG = "boltArtifact"
ACTION_TAG = "boltAction"
ENVELOPE_CLOSE = f"</{ENVELOPE_TAG}>"
ACTION_CLOSE = f"</{ACTION_TAG}>"

ACTION_FILE = "file"
ACTION_SHELL = "shell"

_ATTR_RE = re.compile(r"""([A-Za-z_:][-A-Za-z0-9_:.]*)\s*=\s*(?:"([^"]*)"|'([^']*)')""")


class ScanPhase(str, Enum):
    """Scanner phase"""
    SEEKING_ENVELOPE = "seeking_envelope"
    SEEKING_TITLE = "seeking_title"
    SCANNING_ACTIONS = "scanning_actions"


@dataclass
class ParserState:
    """
    Everything the scanner knows about one response.

    Attributes:
        buffer: All text received so far
        watermark: Offset before which everything extractable has been extracted
        phase: Where the scanner is within the envelope
        title_emitted: Whether the set-title step has been produced
        next_id: Id for the next emitted step
    """
    buffer: str = ""
    watermark: int = 0
    phase: ScanPhase = ScanPhase.SEEKING_ENVELOPE
    title_emitted: bool = False
    next_id: int = 1

    def take_id(self) -> int:
        step_id = self.next_id
        self.next_id += 1
        return step_id


def extract_steps(state: ParserState) -> List[Step]:
    """Advance `state` over its buffer and return the newly completed steps"""
    steps: List[Step] = []
    buf = state.buffer

    while True:
        if state.phase == ScanPhase.SEEKING_ENVELOPE:
            pos, undecided = find_open_tag(buf, ENVELOPE_TAG, state.watermark)
            if pos < 0:
                state.watermark = resume_point(buf, state.watermark, "<" + ENVELOPE_TAG)
                return steps
            state.watermark = pos
            if undecided:
                return steps
            state.phase = ScanPhase.SEEKING_TITLE

        if state.phase == ScanPhase.SEEKING_TITLE:
            tag_end = find_tag_end(buf, state.watermark)
            if tag_end < 0:
                return steps
            title = parse_attributes(buf[state.watermark:tag_end]).get("title")
            if title is not None and not state.title_emitted:
                steps.append(Step.set_title(state.take_id(), title))
                state.title_emitted = True
            state.watermark = tag_end + 1
            state.phase = ScanPhase.SCANNING_ACTIONS

        if state.phase == ScanPhase.SCANNING_ACTIONS:
            if not _scan_actions(state, steps):
                return steps


def _scan_actions(state: ParserState, steps: List[Step]) -> bool:
    """
    Match complete action blocks from the watermark.

    Returns True when the envelope closed and scanning should continue in
    the seeking-envelope phase, False when more input is needed.
    """
    buf = state.buffer
    while True:
        action_pos, undecided = find_open_tag(buf, ACTION_TAG, state.watermark)
        close_pos = buf.find(ENVELOPE_CLOSE, state.watermark)

        if close_pos >= 0 and (action_pos < 0 or close_pos < action_pos):
            state.watermark = close_pos + len(ENVELOPE_CLOSE)
            state.phase = ScanPhase.SEEKING_ENVELOPE
            return True

        if action_pos < 0:
            state.watermark = resume_point(buf, state.watermark, "<" + ACTION_TAG, ENVELOPE_CLOSE)
            return False

        state.watermark = action_pos
        if undecided:
            return False

        tag_end = find_tag_end(buf, action_pos)
        if tag_end < 0:
            return False
        payload_end = buf.find(ACTION_CLOSE, tag_end + 1)
        if payload_end < 0:
            return False

        step = _build_step(state, parse_attributes(buf[action_pos:tag_end]), buf[tag_end + 1:payload_end])
        if step is not None:
            steps.append(step)
        state.watermark = payload_end + len(ACTION_CLOSE)


def _build_step(state: ParserState, attrs: Dict[str, str], payload: str) -> Optional[Step]:
    action_type = attrs.get("type")
    if action_type == ACTION_FILE:
        path = attrs.get("filePath")
        if not path:
            logger.debug("Ignoring file action without filePath")
            return None
        return Step.create_file(state.take_id(), path, payload.strip())
    if action_type == ACTION_SHELL:
        return Step.run_command(state.take_id(), payload.strip())
    logger.debug(f"Ignoring action of unknown type {action_type!r}")
    return None


# ---------------------------------------------------------------------------
# Scanning helpers
# ---------------------------------------------------------------------------

def find_open_tag(buf: str, name: str, start: int) -> Tuple[int, bool]:
    """
    Find the next `<name` that starts a tag (followed by whitespace or '>').

    Returns:
        (position, undecided). position is -1 when there is none; undecided
        is True when the candidate ends the buffer and the next character
        has not arrived yet.
    """
    marker = "<" + name
    pos = buf.find(marker, start)
    while pos >= 0:
        after = pos + len(marker)
        if after >= len(buf):
            return pos, True
        if buf[after].isspace() or buf[after] == ">":
            return pos, False
        pos = buf.find(marker, pos + 1)
    return -1, False


def find_tag_end(buf: str, start: int) -> int:
    """Index of the '>' closing the tag opened at `start`, ignoring quoted '>'; -1 if not yet arrived"""
    quote: Optional[str] = None
    for i in range(start, len(buf)):
        ch = buf[i]
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in ('"', "'"):
            quote = ch
        elif ch == ">":
            return i
    return -1


def parse_attributes(tag_text: str) -> Dict[str, str]:
    """Attributes of an opening tag; the first occurrence of a name wins"""
    attrs: Dict[str, str] = {}
    for match in _ATTR_RE.finditer(tag_text):
        name = match.group(1)
        if name not in attrs:
            value = match.group(2) if match.group(2) is not None else match.group(3)
            attrs[name] = value
    return attrs


def resume_point(buf: str, start: int, *markers: str) -> int:
    """
    Furthest offset the watermark may move to when no marker was found:
    the tail that could still hold the beginning of a marker is kept.
    """
    keep = max(len(m) for m in markers) - 1
    return max(start, len(buf) - keep)
