"""Application settings."""

import os
from typing import Optional, List
from pydantic import BaseModel, Field


# Settings field -> environment variable it is read from
ENV_VARS = {
    "supabase_url": "SUPABASE_URL",
    "supabase_key": "SUPABASE_KEY",
    "anthropic_api_key": "ANTHROPIC_API_KEY",
    "openai_api_key": "OPENAI_API_KEY",
    "notion_token": "NOTION_TOKEN",
    "notion_database_id": "NOTION_DATABASE_ID",
    "resend_api_key": "RESEND_API_KEY",
    "email_to": "EMAIL_TO",
}


class Settings(BaseModel):
    """Application configuration settings.

    Built once at process start (see ``from_env``) and passed explicitly to
    every handler and collaborator. Nothing below the entry points reads the
    environment.
    """

    # Durable store
    store_backend: str = "supabase"  # "supabase" or "sqlite"
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    db_path: str = "data/agent_hub.db"

    # LLM Provider settings
    llm_provider: str = "anthropic"  # "anthropic" or "openai"
    llm_model: Optional[str] = None

    # API Keys
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    notion_token: Optional[str] = None
    notion_database_id: Optional[str] = None
    resend_api_key: Optional[str] = None

    # Voice and addressing used in prompts and emails
    author_name: str = "the author"
    organization_name: str = "the ministry"
    coordinator_name: str = "there"

    # Email routing (ada)
    email_from: str = "Ada (AI Assistant) <noreply@agent.example.com>"
    email_to: Optional[str] = None
    email_cc: List[str] = Field(default_factory=list)
    request_sheet_url: Optional[str] = None
    helper_sheet_url: Optional[str] = None

    # Outbound HTTP timeout in seconds
    request_timeout: int = 30

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "Settings":
        """Build settings from environment variables."""
        env = os.environ if environ is None else environ

        data = {field: env.get(var) for field, var in ENV_VARS.items()}
        data["store_backend"] = env.get("STORE_BACKEND", "supabase")
        data["db_path"] = env.get("DB_PATH", "data/agent_hub.db")
        data["llm_provider"] = env.get("LLM_PROVIDER", "anthropic")
        data["llm_model"] = env.get("LLM_MODEL")
        data["email_cc"] = [
            addr.strip() for addr in env.get("EMAIL_CC", "").split(",") if addr.strip()
        ]
        data["request_sheet_url"] = env.get("REQUEST_SHEET_URL")
        data["helper_sheet_url"] = env.get("HELPER_SHEET_URL")
        data["request_timeout"] = int(env.get("REQUEST_TIMEOUT", "30"))
        data["log_level"] = env.get("LOG_LEVEL", "INFO")

        # Only override defaults that are actually set
        optional = {
            "email_from": "EMAIL_FROM",
            "author_name": "AUTHOR_NAME",
            "organization_name": "ORGANIZATION_NAME",
            "coordinator_name": "COORDINATOR_NAME",
        }
        for field, var in optional.items():
            if env.get(var):
                data[field] = env[var]

        return cls(**data)

    def has(self, env_var: str) -> bool:
        """Whether the credential behind an environment variable name is set."""
        for field, var in ENV_VARS.items():
            if var == env_var:
                return bool(getattr(self, field))
        return False

    def get_llm_api_key(self) -> Optional[str]:
        """Get the API key for the configured LLM provider."""
        if self.llm_provider == "openai":
            return self.openai_api_key
        elif self.llm_provider == "anthropic":
            return self.anthropic_api_key
        return None

    def llm_key_env_var(self) -> str:
        """Environment variable holding the active LLM provider's key."""
        if self.llm_provider == "openai":
            return "OPENAI_API_KEY"
        return "ANTHROPIC_API_KEY"
