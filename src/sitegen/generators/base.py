from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterator

from .config import GeneratorConfig


class BaseGenerator(ABC):
    """
    Base generator for chat models that write project artifacts.
    """

    def __init__(self, config: GeneratorConfig | dict[str, Any]):
        if isinstance(config, dict):
            self.config = GeneratorConfig(**config)
        else:
            self.config = config

    @abstractmethod
    def generate_single(
        self,
        prompt: str | None = None,
        messages: list[dict[str, str]] | None = None,
        extra_params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Return: {"text": str, "response": dict|None}
        """
        raise NotImplementedError

    @abstractmethod
    def stream(
        self,
        prompt: str | None = None,
        messages: list[dict[str, str]] | None = None,
        extra_params: dict[str, Any] | None = None,
    ) -> Iterator[str]:
        """
        Yield text fragments of the response as they arrive.
        """
        raise NotImplementedError

    def _build_messages(
        self,
        prompt: str | None,
        messages: list[dict[str, str]] | None,
    ) -> list[dict[str, str]]:
        """Build the chat message list, prepending the configured system prompt"""
        if (prompt is None) and (not messages):
            raise ValueError("Either prompt or messages is required.")
        if (prompt is not None) and messages:
            raise ValueError("Pass either prompt or messages, not both.")

        if messages is None:
            messages = [{"role": "user", "content": prompt}]  # type: ignore[dict-item]

        system_prompt = self.config.system_prompt
        if system_prompt and not any(m.get("role") == "system" for m in messages):
            messages = [{"role": "system", "content": system_prompt}] + messages

        return messages
