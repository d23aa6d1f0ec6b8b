from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Optional, Any

class GeneratorConfig(BaseModel):
    """Base configuration for all generators."""
    model_name: str = Field(..., description="Name of the model to use")
    temperature: float = Field(0.0, description="Sampling temperature")
    top_p: float = Field(1.0, description="Top-p sampling parameter")
    max_tokens: int = Field(16000, description="Maximum number of tokens to generate")
    system_prompt: Optional[str] = Field(None, description="Default system prompt")
    extra_params: dict[str, Any] = Field(default_factory=dict, description="Additional parameters")

class OpenAIGeneratorConfig(GeneratorConfig):
    """Configuration for OpenAIGenerator."""
    api_key: str = Field("empty", description="OpenAI API key")
    base_url: str = Field("https://api.openai.com/v1", description="OpenAI base URL")
    timeout: float = Field(120.0, description="Request timeout in seconds")
    max_retries: int = Field(3, ge=1, description="Attempts for non-streaming requests")
    retry_delay: float = Field(5.0, ge=0.0, description="Seconds between attempts")

class ReplayGeneratorConfig(GeneratorConfig):
    """Configuration for ReplayGenerator."""
    model_name: str = Field("replay", description="Name reported for the replayed model")
    chunk_size: int = Field(50, ge=1, description="Characters per replayed chunk")
    delay: float = Field(0.0, ge=0.0, description="Seconds to sleep between chunks")
