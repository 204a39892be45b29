"""Nova: marketing writer that drafts posts in the author's voice."""

import logging
from typing import List, Optional

from config.settings import Settings
from llm.base_client import BaseLLMClient
from memory.execution_logger import ExecutionLogger
from retrieval.notion_provider import NotionProvider, VoiceExample, ContextDoc
from schemas.contract import AgentRequest
from schemas.payloads import NovaInput, NovaOutput, Platform
from .base import BaseAgent

logger = logging.getLogger(__name__)


class NovaAgent(BaseAgent):
    """
    Drafts LinkedIn/Substack content grounded in published examples.

    Voice examples come from a Notion database, style guides from a
    workspace search; both feed the system prompt for one LLM call.
    """

    agent_id = "nova"
    name = "Nova"
    description = "Marketing writer: drafts LinkedIn and Substack posts in the author's voice"

    MAX_TOKENS = 2000
    MAX_VOICE_EXAMPLES = 5
    MAX_CONTEXT_DOCS = 3

    VOICE_PROFILE = """- **Direct and concise**: Gets to the point quickly, no unnecessary words
- **Practical over theoretical**: Emphasizes actionable advice and real-world application
- **Conversational but professional**: Approachable tone while maintaining credibility
- **Contrarian when warranted**: Challenges conventional wisdom with nuanced takes
- **Structured thinking**: Often uses bullets, numbers, or clear sections
- **No hype or buzzwords**: Avoids marketing speak and empty phrases
- **Personal experience**: Draws from building agencies and working with professional services firms"""

    PLATFORM_RULES = {
        Platform.LINKEDIN: """LinkedIn formatting:
- Start with a strong hook (first 1-2 sentences)
- Keep paragraphs short (1-3 sentences)
- Use line breaks for readability
- Bullets or emojis sparingly
- 150-300 words typically
- End with insight or call to action""",
        Platform.SUBSTACK: """Substack Note formatting:
- Can be shorter and punchier than LinkedIn
- More casual, conversational
- Quick takes, observations, or insights
- 50-150 words""",
    }

    STYLE_GUIDE_QUERIES = {
        Platform.LINKEDIN: "LinkedIn Content Style Guide",
        Platform.SUBSTACK: "Substack Strategy",
    }

    def __init__(
        self,
        settings: Settings,
        execution_logger: ExecutionLogger,
        llm_client: BaseLLMClient,
        notion: NotionProvider
    ):
        super().__init__(settings, execution_logger)
        self.llm_client = llm_client
        self.notion = notion

    def required_env_vars(self) -> List[str]:
        return [
            self.settings.llm_key_env_var(),
            "NOTION_TOKEN",
            "NOTION_DATABASE_ID",
        ] + self._store_env_vars()

    def run(self, payload: NovaInput, request: AgentRequest) -> NovaOutput:
        logger.info(f"Drafting {payload.platform or 'social media'} post about: {payload.topic}")

        voice_examples: List[VoiceExample] = []
        if self.settings.notion_database_id:
            voice_examples = self.notion.get_voice_examples(
                self.settings.notion_database_id,
                platform=payload.platform
            )
        else:
            logger.warning("NOTION_DATABASE_ID not set; drafting without voice examples")
        logger.info(f"Found {len(voice_examples)} voice examples")

        context_docs = self.notion.search_documents(
            self._style_guide_query(payload),
            max_pages=self.MAX_CONTEXT_DOCS
        )
        logger.info(f"Found {len(context_docs)} relevant docs")

        draft = self.llm_client.complete(
            system=self.build_system_prompt(payload.platform, voice_examples, context_docs),
            user=self.build_user_prompt(payload),
            max_tokens=self.MAX_TOKENS
        )

        return NovaOutput(
            draft=draft,
            voice_examples_used=len(voice_examples),
            context_docs_used=len(context_docs)
        )

    def _style_guide_query(self, payload: NovaInput) -> str:
        platform = self._known_platform(payload.platform)
        if platform is not None:
            return self.STYLE_GUIDE_QUERIES[platform]
        return payload.topic

    @staticmethod
    def _known_platform(platform: Optional[str]) -> Optional[Platform]:
        try:
            return Platform(platform)
        except ValueError:
            return None

    def build_system_prompt(
        self,
        platform: Optional[str],
        voice_examples: List[VoiceExample],
        context_docs: List[ContextDoc]
    ) -> str:
        """System prompt: voice profile, example posts, style guides."""
        author = self.settings.author_name
        parts = [
            f"You are Nova, {author}'s marketing writing assistant. Your job is to write "
            f"{platform or 'social media'} content that sounds exactly like {author}.",
            f"# Voice & Style\n\n{author} writes with a direct, practical, anti-fluff style. "
            f"Key characteristics:\n\n{self.VOICE_PROFILE}",
        ]

        if voice_examples:
            examples = [f"# Voice Examples\n\nHere are examples of {author}'s actual posts:"]
            for i, example in enumerate(voice_examples[:self.MAX_VOICE_EXAMPLES], 1):
                examples.append(f"Example {i} ({', '.join(example.tags)}):\n{example.content}")
            parts.append("\n\n".join(examples))

        if context_docs:
            guides = ["# Style Guidelines"]
            for doc in context_docs:
                guides.append(f"## {doc.title}\n{doc.content}")
            parts.append("\n\n".join(guides))

        parts.append(
            f"Write in {author}'s voice. Match their style, tone, and approach. "
            "Be direct, practical, and valuable."
        )
        return "\n\n".join(parts)

    def build_user_prompt(self, payload: NovaInput) -> str:
        """User prompt: topic, optional style notes, platform formatting."""
        prompt = f"Write a {payload.platform or 'social media'} post about: {payload.topic}\n\n"

        if payload.style:
            prompt += f"Style notes: {payload.style}\n\n"

        platform = self._known_platform(payload.platform)
        if platform is not None:
            prompt += self.PLATFORM_RULES[platform]

        return prompt.strip()
