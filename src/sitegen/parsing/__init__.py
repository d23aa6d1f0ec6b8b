from .extractor import ParserState, ScanPhase, extract_steps
from .stream import (
    DEFAULT_PROJECT_TITLE,
    StepStream,
    iter_steps,
    parse_artifact_files,
    parse_full,
)
from .sse import StreamError, StreamEvent, decode_sse_lines, iter_text_deltas

__all__ = [
    "ParserState",
    "ScanPhase",
    "extract_steps",
    "DEFAULT_PROJECT_TITLE",
    "StepStream",
    "iter_steps",
    "parse_artifact_files",
    "parse_full",
    "StreamError",
    "StreamEvent",
    "decode_sse_lines",
    "iter_text_deltas",
]
