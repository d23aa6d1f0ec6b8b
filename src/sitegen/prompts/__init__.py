from .build_prompts import BUILD_SYSTEM_PROMPT, DEFAULT_STACK, get_build_system_prompt

__all__ = [
    "BUILD_SYSTEM_PROMPT",
    "DEFAULT_STACK",
    "get_build_system_prompt",
]
