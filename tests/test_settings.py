"""Tests for Settings."""

from config.settings import Settings


class TestSettings:
    """Test environment loading."""

    def test_defaults(self):
        """Test an empty environment."""
        settings = Settings.from_env({})

        assert settings.store_backend == "supabase"
        assert settings.llm_provider == "anthropic"
        assert settings.email_cc == []
        assert settings.request_timeout == 30
        assert settings.author_name == "the author"

    def test_from_env(self):
        """Test values are read from the environment."""
        settings = Settings.from_env({
            "STORE_BACKEND": "sqlite",
            "LLM_PROVIDER": "openai",
            "OPENAI_API_KEY": "sk-openai",
            "NOTION_TOKEN": "secret",
            "EMAIL_CC": "a@example.com, b@example.com,",
            "AUTHOR_NAME": "Sam",
            "REQUEST_TIMEOUT": "5",
        })

        assert settings.store_backend == "sqlite"
        assert settings.get_llm_api_key() == "sk-openai"
        assert settings.llm_key_env_var() == "OPENAI_API_KEY"
        assert settings.email_cc == ["a@example.com", "b@example.com"]
        assert settings.author_name == "Sam"
        assert settings.request_timeout == 5

    def test_has(self):
        """Test credential presence checks by variable name."""
        settings = Settings(notion_token="secret", resend_api_key="")

        assert settings.has("NOTION_TOKEN") is True
        assert settings.has("RESEND_API_KEY") is False
        assert settings.has("SUPABASE_URL") is False
        assert settings.has("UNKNOWN_VAR") is False

    def test_email_to_is_a_checked_variable(self):
        """Test the coordinator address is read and reported like a credential."""
        assert Settings.from_env({}).has("EMAIL_TO") is False

        settings = Settings.from_env({"EMAIL_TO": "coordinator@example.com"})
        assert settings.email_to == "coordinator@example.com"
        assert settings.has("EMAIL_TO") is True
