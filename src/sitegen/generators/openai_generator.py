# -*- coding: utf-8 -*-
"""
OpenAI-compatible Generator

Streams chat completions from any OpenAI-compatible endpoint.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, Iterator, List, Optional

from openai import OpenAI

from .base import BaseGenerator
from .config import OpenAIGeneratorConfig

logger = logging.getLogger(__name__)


class OpenAIGenerator(BaseGenerator):
    """
    Generator backed by the Chat Completions API.
    """
    config: OpenAIGeneratorConfig

    def __init__(self, config: OpenAIGeneratorConfig | Dict[str, Any], client: Optional[OpenAI] = None):
        if isinstance(config, dict):
            config = OpenAIGeneratorConfig(**config)
        super().__init__(config)

        self.model_name = self.config.model_name
        self._client = client or OpenAI(
            api_key=self.config.api_key,
            base_url=self.config.base_url.rstrip("/"),
        )
        self._cclient = (
            self._client.with_options(timeout=self.config.timeout)
            if hasattr(self._client, "with_options")
            else self._client
        )

    def _build_params(
        self,
        msgs: List[Dict[str, str]],
        extra_params: Optional[Dict[str, Any]],
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "model": self.model_name,
            "messages": msgs,
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
            "top_p": self.config.top_p,
        }
        params.update(self.config.extra_params)
        if extra_params:
            params.update(extra_params)
        return params

    def generate_single(
        self,
        prompt: Optional[str] = None,
        messages: Optional[List[Dict[str, str]]] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Generate one complete response.

        Returns:
            {"text": str, "response": dict}
        """
        params = self._build_params(self._build_messages(prompt, messages), extra_params)
        out: Dict[str, Any] = {"text": None, "response": None}

        max_retries = self.config.max_retries
        for attempt in range(max_retries):
            try:
                resp = self._cclient.chat.completions.create(**params)
                if not getattr(resp, "choices", None):
                    raise ValueError("API returned no choices")
                out["text"] = resp.choices[0].message.content or ""
                out["response"] = resp.model_dump()
                break
            except Exception as e:
                if attempt < max_retries - 1:
                    logger.warning(f"Request failed, retrying ({attempt + 1}/{max_retries}): {e}")
                    time.sleep(self.config.retry_delay)
                else:
                    logger.error(f"Request failed: {e}")
                    raise

        return out

    def stream(
        self,
        prompt: Optional[str] = None,
        messages: Optional[List[Dict[str, str]]] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> Iterator[str]:
        """
        Yield response text as it arrives.

        Streams are not retried: fragments already yielded have been
        consumed, so a failure propagates to the caller.
        """
        params = self._build_params(self._build_messages(prompt, messages), extra_params)
        params["stream"] = True

        response = self._cclient.chat.completions.create(**params)
        for chunk in response:
            if not chunk.choices:
                continue
            choice = chunk.choices[0]
            text = choice.delta.content if choice.delta is not None else None
            if text:
                yield text
            if choice.finish_reason == "length":
                logger.warning("Response truncated by max_tokens; unfinished actions are dropped")

    @classmethod
    def from_config(cls, config) -> "OpenAIGenerator":
        if hasattr(config, "model_dump"):
            return cls(config.model_dump())
        return cls(config)
