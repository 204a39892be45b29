"""Agent registry: which agents exist and how to build them."""

import logging
from pathlib import Path
from typing import Optional, Dict, List
import yaml
from pydantic import BaseModel, Field

from config.settings import Settings
from llm.base_client import BaseLLMClient
from llm.factory import create_llm_client_from_settings
from memory.base_store import DurableStore
from memory.execution_logger import ExecutionLogger
from notifications.resend_client import ResendEmailSender
from retrieval.notion_provider import NotionProvider
from .base import BaseAgent
from .nova import NovaAgent
from .ada import AdaAgent

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_PATH = Path(__file__).resolve().parent.parent / "config" / "agents.yaml"

AGENT_CLASSES = {
    NovaAgent.agent_id: NovaAgent,
    AdaAgent.agent_id: AdaAgent,
}


class AgentEntry(BaseModel):
    """One agent as described in the registry file."""
    id: str
    name: str
    description: str = ""
    triggers: List[str] = Field(default_factory=list)
    enabled: bool = True


def load_registry(path: Optional[Path] = None) -> List[AgentEntry]:
    """
    Load agent entries from the registry YAML.

    Args:
        path: Registry file (default: config/agents.yaml)

    Returns:
        Agent entries in file order

    Raises:
        ValueError: If an entry names an agent with no implementation
    """
    registry_path = Path(path) if path else DEFAULT_REGISTRY_PATH
    with open(registry_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    entries = [AgentEntry(**item) for item in data.get("agents") or []]
    for entry in entries:
        if entry.id not in AGENT_CLASSES:
            raise ValueError(f"Registry entry '{entry.id}' has no agent implementation")
    return entries


def build_agents(
    settings: Settings,
    store: Optional[DurableStore],
    llm_client: Optional[BaseLLMClient] = None,
    notion: Optional[NotionProvider] = None,
    email_sender: Optional[ResendEmailSender] = None,
    registry_path: Optional[Path] = None
) -> Dict[str, BaseAgent]:
    """
    Build every enabled agent with its collaborators.

    Collaborators not passed in are constructed from settings.

    Returns:
        Mapping of agent id to agent instance
    """
    execution_logger = ExecutionLogger(store)
    llm_client = llm_client or create_llm_client_from_settings(settings)
    notion = notion or NotionProvider(token=settings.notion_token, timeout=settings.request_timeout)
    email_sender = email_sender or ResendEmailSender(
        api_key=settings.resend_api_key, timeout=settings.request_timeout
    )

    agents: Dict[str, BaseAgent] = {}
    for entry in load_registry(registry_path):
        if not entry.enabled:
            logger.info(f"Agent {entry.id} disabled in registry")
            continue

        if entry.id == NovaAgent.agent_id:
            agent = NovaAgent(settings, execution_logger, llm_client=llm_client, notion=notion)
        else:
            agent = AdaAgent(settings, execution_logger, llm_client=llm_client, email_sender=email_sender)

        agent.name = entry.name
        agent.description = entry.description
        agent.triggers = tuple(entry.triggers)
        agents[entry.id] = agent

    logger.info(f"Loaded agents: {', '.join(agents) or 'none'}")
    return agents
