# -*- coding: utf-8 -*-
"""
StepStream - incremental step extraction from a model response

Usage:
    stream = StepStream()
    for chunk in response_chunks:
        for step in stream.parse_chunk(chunk):
            ...

`parse_full` handles a response that is already complete, e.g. one loaded
from stored conversation history, and yields the same steps as feeding the
text chunk by chunk.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from ..schemas.file_schemas import FlatFile
from ..schemas.step_schemas import Step, StepKind
from .extractor import ParserState, extract_steps

DEFAULT_PROJECT_TITLE = "Project Files"


class StepStream:
    """
    Stateful parser for one model response at a time.

    Calls must be serialized: feed a chunk, handle the returned steps, then
    feed the next one. Call `reset()` before reusing the instance for a new
    response.
    """

    def __init__(self):
        self.state = ParserState()
        self._steps: List[Step] = []

    def parse_chunk(self, chunk: str) -> List[Step]:
        """
        Append `chunk` to the buffer and return the steps it completed.

        A step is returned at most once over the lifetime of the instance,
        and only after its closing tag has arrived.
        """
        if chunk:
            self.state.buffer += chunk
        new_steps = extract_steps(self.state)
        self._steps.extend(new_steps)
        return new_steps

    def reset(self) -> None:
        """Forget the buffer, emitted steps, watermark and id counter"""
        self.state = ParserState()
        self._steps = []

    def all_steps(self) -> List[Step]:
        """Every step emitted since the last reset"""
        return list(self._steps)

    @property
    def buffer(self) -> str:
        return self.state.buffer

    @property
    def title(self) -> Optional[str]:
        for step in self._steps:
            if step.kind == StepKind.SET_TITLE:
                return step.title
        return None


def iter_steps(chunks: Iterable[str], stream: Optional[StepStream] = None) -> Iterator[Step]:
    """Yield steps as they complete while consuming `chunks`"""
    stream = stream or StepStream()
    for chunk in chunks:
        yield from stream.parse_chunk(chunk)


def parse_full(document: str) -> List[Step]:
    """Extract every step of a complete response"""
    return StepStream().parse_chunk(document)


def parse_artifact_files(document: str) -> Tuple[List[FlatFile], str]:
    """
    Files and title of a complete response.

    Returns:
        (files in document order, title or "Project Files")
    """
    files: List[FlatFile] = []
    title = DEFAULT_PROJECT_TITLE
    for step in parse_full(document):
        if step.kind == StepKind.SET_TITLE and step.title:
            title = step.title
        elif step.kind == StepKind.CREATE_FILE:
            files.append(FlatFile(path=step.path, content=step.content))
    return files, title
