"""Conversation find-or-create and append-only message history."""

import logging
from typing import Optional, List

from .base_store import DurableStore, CONVERSATIONS_TABLE, MESSAGES_TABLE
from .models import Conversation, ConversationStatus, Message, MessageRole

logger = logging.getLogger(__name__)


class ConversationAccessor:
    """
    Persists human-readable conversation history next to the execution log.

    Unlike the execution logger, store failures propagate: conversation
    state is part of the agent's domain result.
    """

    def __init__(self, store: DurableStore):
        """
        Initialize accessor.

        Args:
            store: Durable store holding conversations and messages
        """
        self.store = store

    def get_or_create_conversation(self, user_id: str) -> Conversation:
        """
        Return the user's newest active conversation, creating one if needed.

        Known limitation: two concurrent callers for the same user can both
        miss the lookup and each create an active conversation. No uniqueness
        constraint is enforced here.

        Args:
            user_id: Calling user

        Returns:
            Active Conversation
        """
        existing = self.store.select(
            CONVERSATIONS_TABLE,
            filters={"user_id": user_id, "status": ConversationStatus.ACTIVE.value},
            order_by="created_at",
            descending=True,
            limit=1
        )
        if existing:
            return Conversation(**existing[0])

        row = self.store.insert(CONVERSATIONS_TABLE, {
            "user_id": user_id,
            "status": ConversationStatus.ACTIVE.value,
        })
        logger.info(f"Created conversation {row['id']} for user {user_id}")
        return Conversation(**row)

    def save_message(
        self,
        conversation_id: Optional[str],
        role: MessageRole,
        content: str,
        agent_id: Optional[str] = None
    ) -> Optional[Message]:
        """
        Append one message to a conversation.

        Args:
            conversation_id: Owning conversation; None makes this a no-op
            role: Message author role
            content: Message text
            agent_id: Agent that authored the message, if any

        Returns:
            The created Message, or None when no conversation id was given
        """
        if not conversation_id:
            return None

        row = self.store.insert(MESSAGES_TABLE, {
            "conversation_id": conversation_id,
            "role": MessageRole(role).value,
            "content": content,
            "agent_id": agent_id,
        })
        return Message(**row)

    def list_messages(self, conversation_id: str) -> List[Message]:
        """Messages of a conversation in insertion order."""
        rows = self.store.select(
            MESSAGES_TABLE,
            filters={"conversation_id": conversation_id},
            order_by="created_at"
        )
        return [Message(**row) for row in rows]
