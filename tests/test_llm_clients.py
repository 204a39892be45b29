"""Tests for the LLM clients."""

import pytest
from unittest.mock import Mock
import anthropic
import httpx
import openai

from errors import CollaboratorError
from llm.anthropic_client import AnthropicClient
from llm.openai_client import OpenAIClient
from llm.factory import create_llm_client, LLMProvider


def status_error(error_cls, status_code, message):
    request = httpx.Request("POST", "https://api.example.com/v1")
    response = httpx.Response(status_code, request=request)
    return error_cls(message, response=response, body=None)


class TestAnthropicClient:
    """Test Anthropic client."""

    def setup_method(self):
        """Set up test fixtures."""
        self.client = AnthropicClient(api_key="sk-ant")
        self.client.client = Mock()

    def test_complete(self):
        """Test system prompt handling and text extraction."""
        response = Mock()
        response.content = [Mock(type="text", text="Draft")]
        response.usage = Mock(input_tokens=10, output_tokens=5)
        response.stop_reason = "end_turn"
        self.client.client.messages.create.return_value = response

        result = self.client.complete(system="Be brief", user="Write", max_tokens=2000)

        assert result == "Draft"
        kwargs = self.client.client.messages.create.call_args[1]
        assert kwargs["system"] == "Be brief"
        assert kwargs["messages"] == [{"role": "user", "content": "Write"}]
        assert kwargs["max_tokens"] == 2000

    def test_status_error(self):
        """Test API errors map to collaborator failures."""
        self.client.client.messages.create.side_effect = status_error(
            anthropic.APIStatusError, 429, "rate limited"
        )

        with pytest.raises(CollaboratorError) as exc_info:
            self.client.complete(system="", user="Write")

        assert exc_info.value.status_code == 429
        assert str(exc_info.value) == "Anthropic API error (429): rate limited"

    def test_empty_content(self):
        """Test a response without text is malformed."""
        response = Mock()
        response.content = []
        self.client.client.messages.create.return_value = response

        with pytest.raises(CollaboratorError):
            self.client.complete(system="", user="Write")

    def test_missing_key(self):
        """Test calls without a key fail cleanly."""
        with pytest.raises(CollaboratorError):
            AnthropicClient(api_key=None).complete(system="", user="Write")


class TestOpenAIClient:
    """Test OpenAI client."""

    def setup_method(self):
        """Set up test fixtures."""
        self.client = OpenAIClient(api_key="sk-openai")
        self.client.client = Mock()

    def test_complete(self):
        """Test message construction."""
        choice = Mock(finish_reason="stop")
        choice.message.content = "Draft"
        response = Mock(choices=[choice])
        response.usage = Mock(prompt_tokens=10, completion_tokens=5, total_tokens=15)
        self.client.client.chat.completions.create.return_value = response

        assert self.client.complete(system="Be brief", user="Write") == "Draft"
        kwargs = self.client.client.chat.completions.create.call_args[1]
        assert kwargs["messages"][0] == {"role": "system", "content": "Be brief"}
        assert kwargs["max_completion_tokens"] == 2000

    def test_status_error(self):
        """Test API errors map to collaborator failures."""
        self.client.client.chat.completions.create.side_effect = status_error(
            openai.APIStatusError, 500, "server error"
        )

        with pytest.raises(CollaboratorError) as exc_info:
            self.client.complete(system="", user="Write")

        assert exc_info.value.status_code == 500


class TestFactory:
    """Test client factory."""

    def test_providers(self):
        """Test provider selection."""
        assert isinstance(create_llm_client(LLMProvider.ANTHROPIC), AnthropicClient)
        assert isinstance(create_llm_client(LLMProvider.OPENAI, model="gpt-4o"), OpenAIClient)
        assert create_llm_client(LLMProvider.OPENAI, model="gpt-4o").get_model_name() == "gpt-4o"
