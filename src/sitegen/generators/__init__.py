from .base import BaseGenerator
from .openai_generator import OpenAIGenerator
from .replay_generator import ReplayGenerator
from .config import GeneratorConfig, OpenAIGeneratorConfig, ReplayGeneratorConfig

__all__ = [
    "BaseGenerator",
    "OpenAIGenerator",
    "ReplayGenerator",
    "GeneratorConfig",
    "OpenAIGeneratorConfig",
    "ReplayGeneratorConfig",
]
