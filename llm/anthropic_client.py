"""Anthropic Claude LLM client implementation."""

import logging
from typing import Optional, List

import anthropic

from errors import CollaboratorError
from .base_client import BaseLLMClient, Message, LLMResponse

logger = logging.getLogger(__name__)


class AnthropicClient(BaseLLMClient):
    """Anthropic Claude client implementation."""

    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    PROVIDER = "Anthropic"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: int = 60
    ):
        """
        Initialize Anthropic client.

        Args:
            api_key: Anthropic API key
            model: Model to use (default: claude-sonnet-4-20250514)
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.client = None

        if self.api_key:
            self.client = anthropic.Anthropic(api_key=self.api_key, timeout=timeout, max_retries=0)
            logger.info(f"Anthropic client initialized with model: {self.model}")
        else:
            logger.warning("No Anthropic API key provided")

    def chat(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 2000
    ) -> LLMResponse:
        """Send chat completion request to Anthropic."""
        if not self.client:
            raise CollaboratorError(self.PROVIDER, "client not initialized, check ANTHROPIC_API_KEY")

        # Separate system message from conversation
        system_content = ""
        conversation_messages = []

        for msg in messages:
            if msg.role == "system":
                system_content += msg.content + "\n"
            else:
                conversation_messages.append({
                    "role": msg.role,
                    "content": msg.content
                })

        kwargs = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": conversation_messages,
        }

        if system_content:
            kwargs["system"] = system_content.strip()

        try:
            response = self.client.messages.create(**kwargs)
        except anthropic.APIStatusError as e:
            logger.error(f"Anthropic API error: {e}")
            raise CollaboratorError(self.PROVIDER, e.message, status_code=e.status_code) from e
        except anthropic.APIError as e:
            logger.error(f"Anthropic API error: {e}")
            raise CollaboratorError(self.PROVIDER, str(e)) from e

        content = "".join(
            block.text for block in (response.content or []) if block.type == "text"
        )
        if not content:
            raise CollaboratorError(self.PROVIDER, "response contained no text content")

        usage = None
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.input_tokens,
                "completion_tokens": response.usage.output_tokens,
                "total_tokens": response.usage.input_tokens + response.usage.output_tokens,
            }

        return LLMResponse(
            content=content,
            usage=usage,
            finish_reason=response.stop_reason
        )

    def get_provider_name(self) -> str:
        """Get the provider name."""
        return "anthropic"

    def get_model_name(self) -> str:
        """Get the model name."""
        return self.model
