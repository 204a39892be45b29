"""Retrieval layer for the Notion knowledge store."""

from .notion_provider import NotionProvider, VoiceExample, ContextDoc

__all__ = ["NotionProvider", "VoiceExample", "ContextDoc"]
