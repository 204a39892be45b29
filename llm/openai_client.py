"""OpenAI LLM client implementation."""

import logging
from typing import Optional, List

import openai

from errors import CollaboratorError
from .base_client import BaseLLMClient, Message, LLMResponse

logger = logging.getLogger(__name__)


class OpenAIClient(BaseLLMClient):
    """OpenAI GPT client implementation."""

    DEFAULT_MODEL = "gpt-4.1-mini"
    PROVIDER = "OpenAI"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: int = 60
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: OpenAI API key
            model: Model to use (default: gpt-4.1-mini)
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.client = None

        if self.api_key:
            self.client = openai.OpenAI(api_key=self.api_key, timeout=timeout, max_retries=0)
            logger.info(f"OpenAI client initialized with model: {self.model}")
        else:
            logger.warning("No OpenAI API key provided")

    def chat(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 2000
    ) -> LLMResponse:
        """Send chat completion request to OpenAI."""
        if not self.client:
            raise CollaboratorError(self.PROVIDER, "client not initialized, check OPENAI_API_KEY")

        kwargs = {
            "model": self.model,
            "messages": [{"role": msg.role, "content": msg.content} for msg in messages],
            "temperature": temperature,
            "max_completion_tokens": max_tokens,
        }

        try:
            response = self.client.chat.completions.create(**kwargs)
        except openai.APIStatusError as e:
            logger.error(f"OpenAI API error: {e}")
            raise CollaboratorError(self.PROVIDER, e.message, status_code=e.status_code) from e
        except openai.APIError as e:
            logger.error(f"OpenAI API error: {e}")
            raise CollaboratorError(self.PROVIDER, str(e)) from e

        if not response.choices:
            raise CollaboratorError(self.PROVIDER, "response contained no choices")

        choice = response.choices[0]
        content = choice.message.content or ""
        if not content:
            raise CollaboratorError(self.PROVIDER, "response contained no text content")

        usage = None
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }

        return LLMResponse(
            content=content,
            usage=usage,
            finish_reason=choice.finish_reason
        )

    def get_provider_name(self) -> str:
        """Get the provider name."""
        return "openai"

    def get_model_name(self) -> str:
        """Get the model name."""
        return self.model
