"""Notion knowledge store provider."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Any, Dict, List
import requests
from pydantic import BaseModel, Field

from errors import CollaboratorError

logger = logging.getLogger(__name__)


class VoiceExample(BaseModel):
    """A published post stored in the voice-examples database."""
    content: str
    tags: List[str] = Field(default_factory=list)
    platform: str = ""


class ContextDoc(BaseModel):
    """Plain-text content of a workspace page."""
    page_id: str
    title: str
    content: str


def extract_block_text(block: dict) -> str:
    """Concatenate the rich-text runs of one Notion block."""
    block_type = block.get("type")
    body = block.get(block_type) if block_type else None
    if not isinstance(body, dict):
        return ""
    return "".join(run.get("plain_text", "") for run in body.get("rich_text") or [])


def page_title(page: dict) -> str:
    """Title of a page from its ``title`` property, or "Untitled"."""
    for prop in (page.get("properties") or {}).values():
        if isinstance(prop, dict) and prop.get("type") == "title":
            runs = prop.get("title") or []
            if runs:
                return runs[0].get("plain_text") or "Untitled"
    title = ((page.get("properties") or {}).get("title") or {}).get("title") or []
    if title:
        return title[0].get("plain_text") or "Untitled"
    return "Untitled"


class NotionProvider:
    """
    Knowledge store backed by the Notion REST API.

    Query and search failures raise CollaboratorError. An empty result list
    is a valid outcome. When fetching page contents, a page whose blocks
    cannot be read is skipped with a warning.
    """

    BASE_URL = "https://api.notion.com/v1"
    NOTION_VERSION = "2022-06-28"

    def __init__(
        self,
        token: Optional[str],
        timeout: int = 10,
        max_workers: int = 3
    ):
        """
        Initialize Notion provider.

        Args:
            token: Notion integration token
            timeout: Request timeout in seconds (default: 10)
            max_workers: Parallel page fetches
        """
        self.token = token
        self.timeout = timeout
        self.max_workers = max_workers

    def _get_headers(self) -> dict:
        """Build request headers."""
        return {
            "Authorization": f"Bearer {self.token}",
            "Notion-Version": self.NOTION_VERSION,
            "Content-Type": "application/json",
        }

    def _request(self, method: str, path: str, body: Optional[dict] = None) -> dict:
        if not self.token:
            raise CollaboratorError("Notion", "no token configured, check NOTION_TOKEN")

        try:
            response = requests.request(
                method,
                f"{self.BASE_URL}{path}",
                json=body,
                headers=self._get_headers(),
                timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            raise CollaboratorError("Notion", f"request timeout after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise CollaboratorError("Notion", str(e)) from e

        if response.status_code != 200:
            raise CollaboratorError("Notion", response.text, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise CollaboratorError("Notion", f"malformed response body: {response.text}") from e

    def query_database(
        self,
        database_id: str,
        filter: Optional[dict] = None,
        page_size: int = 10
    ) -> List[dict]:
        """
        Query a database.

        Args:
            database_id: Notion database id
            filter: Optional Notion filter object
            page_size: Maximum pages to return

        Returns:
            Raw page objects in the order Notion returns them
        """
        body: Dict[str, Any] = {"page_size": page_size}
        if filter:
            body["filter"] = filter

        data = self._request("POST", f"/databases/{database_id}/query", body)
        return data.get("results") or []

    def search(self, query: str, page_size: int = 5) -> List[dict]:
        """Search workspace pages by text."""
        data = self._request("POST", "/search", {
            "query": query,
            "filter": {"property": "object", "value": "page"},
            "page_size": page_size,
        })
        return data.get("results") or []

    def get_page_text(self, page_id: str) -> str:
        """Plain text of a page's top-level blocks, one line per block."""
        data = self._request("GET", f"/blocks/{page_id}/children")
        texts = [extract_block_text(block) for block in data.get("results") or []]
        return "\n".join(text for text in texts if text)

    def get_voice_examples(
        self,
        database_id: str,
        platform: Optional[str] = None,
        limit: int = 10
    ) -> List[VoiceExample]:
        """
        Fetch example posts, optionally restricted to one platform.

        Pages with no ``Content`` text are dropped.
        """
        filter = None
        if platform:
            filter = {"property": "Platform", "select": {"equals": platform}}

        examples = []
        for page in self.query_database(database_id, filter=filter, page_size=limit):
            props = page.get("properties") or {}
            content_runs = (props.get("Content") or {}).get("rich_text") or []
            content = content_runs[0].get("plain_text", "") if content_runs else ""
            if not content:
                continue

            tags = [t.get("name", "") for t in (props.get("Tag") or {}).get("multi_select") or []]
            select = (props.get("Platform") or {}).get("select") or {}
            examples.append(VoiceExample(
                content=content,
                tags=tags,
                platform=select.get("name", "")
            ))

        return examples

    def search_documents(
        self,
        query: str,
        page_size: int = 5,
        max_pages: int = 3
    ) -> List[ContextDoc]:
        """
        Search pages and fetch the text of the top hits concurrently.

        Results keep search order; pages whose content fetch fails are
        skipped.
        """
        pages = self.search(query, page_size=page_size)[:max_pages]
        if not pages:
            return []

        def fetch(page: dict) -> Optional[ContextDoc]:
            try:
                content = self.get_page_text(page["id"])
            except CollaboratorError as e:
                logger.warning(f"Skipping page {page.get('id')}: {e}")
                return None
            return ContextDoc(page_id=page["id"], title=page_title(page), content=content)

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            docs = list(pool.map(fetch, pages))

        return [doc for doc in docs if doc is not None]
