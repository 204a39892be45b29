"""LLM client factory."""

from enum import Enum
from typing import Optional

from config.settings import Settings
from .base_client import BaseLLMClient
from .openai_client import OpenAIClient
from .anthropic_client import AnthropicClient


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


def create_llm_client(
    provider: LLMProvider,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    timeout: int = 60
) -> BaseLLMClient:
    """
    Create an LLM client for the specified provider.

    Args:
        provider: LLM provider (openai or anthropic)
        api_key: API key for the provider
        model: Optional model override
        timeout: Request timeout in seconds

    Returns:
        Configured LLM client

    Raises:
        ValueError: If provider is not supported
    """
    if provider == LLMProvider.OPENAI:
        return OpenAIClient(api_key=api_key, model=model, timeout=timeout)
    elif provider == LLMProvider.ANTHROPIC:
        return AnthropicClient(api_key=api_key, model=model, timeout=timeout)
    else:
        raise ValueError(f"Unsupported LLM provider: {provider}")


def create_llm_client_from_settings(settings: Settings) -> BaseLLMClient:
    """Create the LLM client selected by application settings."""
    return create_llm_client(
        provider=LLMProvider(settings.llm_provider),
        api_key=settings.get_llm_api_key(),
        model=settings.llm_model,
        timeout=settings.request_timeout
    )
