"""Agents built on the shared handler skeleton."""

from .base import BaseAgent
from .nova import NovaAgent
from .ada import AdaAgent
from .registry import build_agents, load_registry, AgentEntry

__all__ = [
    "BaseAgent",
    "NovaAgent",
    "AdaAgent",
    "build_agents",
    "load_registry",
    "AgentEntry",
]
