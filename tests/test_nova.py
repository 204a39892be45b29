"""Tests for the Nova marketing writer."""

import pytest
from unittest.mock import Mock

from config.settings import Settings
from errors import CollaboratorError
from memory.base_store import EXECUTIONS_TABLE
from memory.execution_logger import ExecutionLogger
from memory.sqlite_store import SQLiteStore
from agents.nova import NovaAgent
from retrieval.notion_provider import VoiceExample, ContextDoc
from schemas.contract import AgentRequest
from schemas.payloads import NovaInput


def make_request(input):
    return AgentRequest.model_validate({"userId": "u1", "input": input})


class TestNovaAgent:
    """Test draft generation grounded in Notion content."""

    @pytest.fixture(autouse=True)
    def setup(self, tmp_path):
        self.settings = Settings(
            store_backend="sqlite",
            db_path=str(tmp_path / "hub.db"),
            anthropic_api_key="sk-ant",
            notion_token="secret",
            notion_database_id="db1",
            author_name="Sam"
        )
        self.store = SQLiteStore(db_path=self.settings.db_path)
        self.llm = Mock()
        self.llm.complete.return_value = "Pricing is positioning."
        self.notion = Mock()
        self.notion.get_voice_examples.return_value = [
            VoiceExample(content=f"Example post {i}", tags=["pricing"], platform="LinkedIn")
            for i in range(7)
        ]
        self.notion.search_documents.return_value = [
            ContextDoc(page_id="g1", title="LinkedIn Content Style Guide", content="Hooks matter.")
        ]
        self.agent = NovaAgent(
            self.settings, ExecutionLogger(self.store), llm_client=self.llm, notion=self.notion
        )

    def test_successful_draft(self):
        """Test output counts and the single LLM call."""
        response = self.agent.handle(make_request({"topic": "pricing", "platform": "LinkedIn"}))

        assert response.success is True
        assert response.output == {
            "draft": "Pricing is positioning.",
            "voiceExamplesUsed": 7,
            "contextDocsUsed": 1,
        }
        self.llm.complete.assert_called_once()
        assert self.llm.complete.call_args[1]["max_tokens"] == 2000

        record = self.store.select(EXECUTIONS_TABLE)[0]
        assert record["status"] == "success"
        assert record["agent_id"] == "nova"

    def test_collaborator_queries(self):
        """Test platform filter and style-guide query selection."""
        self.agent.handle(make_request({"topic": "pricing", "platform": "Substack"}))

        self.notion.get_voice_examples.assert_called_once_with("db1", platform="Substack")
        self.notion.search_documents.assert_called_once_with("Substack Strategy", max_pages=3)

    def test_unknown_platform_searches_by_topic(self):
        """Test fallback query for platforms without a style guide."""
        self.agent.handle(make_request({"topic": "hiring", "platform": "Threads"}))

        self.notion.search_documents.assert_called_once_with("hiring", max_pages=3)

    def test_prompts(self):
        """Test voice examples, guides and platform rules reach the LLM."""
        self.agent.handle(make_request({
            "topic": "pricing", "platform": "LinkedIn", "style": "contrarian"
        }))

        kwargs = self.llm.complete.call_args[1]
        system, user = kwargs["system"], kwargs["user"]
        assert "Sam" in system
        assert "Example 5 (pricing):\nExample post 4" in system
        assert "Example 6" not in system
        assert "## LinkedIn Content Style Guide\nHooks matter." in system
        assert user.startswith("Write a LinkedIn post about: pricing")
        assert "Style notes: contrarian" in user
        assert "LinkedIn formatting:" in user

    def test_prompts_without_context(self):
        """Test prompt sections are omitted when nothing was retrieved."""
        payload = NovaInput(topic="pricing")

        system = self.agent.build_system_prompt(None, [], [])
        user = self.agent.build_user_prompt(payload)

        assert "# Voice Examples" not in system
        assert "# Style Guidelines" not in system
        assert user == "Write a social media post about: pricing"

    def test_no_database_skips_voice_examples(self):
        """Test drafting without a voice example database."""
        self.agent.settings = self.settings.model_copy(update={"notion_database_id": None})

        response = self.agent.handle(make_request({"topic": "pricing"}))

        assert response.success is True
        assert response.output["voiceExamplesUsed"] == 0
        self.notion.get_voice_examples.assert_not_called()

    def test_notion_failure(self):
        """Test a knowledge store failure becomes a failed invocation."""
        self.notion.search_documents.side_effect = CollaboratorError("Notion", "unauthorized", status_code=401)

        response = self.agent.handle(make_request({"topic": "pricing", "platform": "LinkedIn"}))

        assert response.success is False
        assert response.error == "Notion API error (401): unauthorized"
        self.llm.complete.assert_not_called()
        record = self.store.select(EXECUTIONS_TABLE)[0]
        assert record["status"] == "error"
        assert record["error_message"] == "Notion API error (401): unauthorized"

    def test_llm_failure(self):
        """Test a generation failure becomes a failed invocation."""
        self.llm.complete.side_effect = CollaboratorError("Anthropic", "overloaded", status_code=529)

        response = self.agent.handle(make_request({"topic": "pricing"}))

        assert response.success is False
        assert "Anthropic API error (529)" in response.error

    def test_missing_topic(self):
        """Test validation happens before any collaborator call."""
        response = self.agent.handle(make_request({"platform": "LinkedIn"}))

        assert response.success is False
        assert "topic" in response.error
        self.notion.search_documents.assert_not_called()

    def test_required_env_vars(self):
        """Test the credentials the probe checks."""
        assert self.agent.required_env_vars() == ["ANTHROPIC_API_KEY", "NOTION_TOKEN", "NOTION_DATABASE_ID"]
        assert self.agent.probe()["requiredEnvVarsPresent"] is True

        self.agent.settings = self.settings.model_copy(update={"notion_token": None})
        assert self.agent.probe()["requiredEnvVarsPresent"] is False
