# -*- coding: utf-8 -*-
"""
Replay Generator

Streams a stored response back in fixed-size chunks, optionally paced with a
delay. Used for offline runs, demos and tests; pacing never affects results.
"""
from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from .base import BaseGenerator
from .config import ReplayGeneratorConfig


class ReplayGenerator(BaseGenerator):
    config: ReplayGeneratorConfig

    def __init__(self, text: str, config: Optional[ReplayGeneratorConfig | Dict[str, Any]] = None):
        if config is None:
            config = ReplayGeneratorConfig()
        elif isinstance(config, dict):
            config = ReplayGeneratorConfig(**config)
        super().__init__(config)
        self.text = text

    @classmethod
    def from_file(cls, path: Union[str, Path], **config: Any) -> "ReplayGenerator":
        text = Path(path).read_text(encoding="utf-8")
        return cls(text, ReplayGeneratorConfig(**config))

    def generate_single(
        self,
        prompt: Optional[str] = None,
        messages: Optional[List[Dict[str, str]]] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return {"text": self.text, "response": None}

    def stream(
        self,
        prompt: Optional[str] = None,
        messages: Optional[List[Dict[str, str]]] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> Iterator[str]:
        size = self.config.chunk_size
        for i in range(0, len(self.text), size):
            if i and self.config.delay:
                time.sleep(self.config.delay)
            yield self.text[i:i + size]
