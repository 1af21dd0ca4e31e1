#!/usr/bin/env python3
"""
Listen Notes Client

Thin async wrapper around the Listen Notes search endpoint.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from core.config import Config
from core.errors import ParseError, UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchCandidate:
    """One search result as returned by Listen Notes"""
    title_original: str = ''
    podcast_title_original: str = ''
    description_original: str = ''
    image: str = ''
    thumbnail: str = ''
    audio: str = ''
    listennotes_url: str = ''
    id: str = ''

    @classmethod
    def from_result(cls, result: Dict[str, Any]) -> "SearchCandidate":
        """Build a candidate from a raw search result object"""
        podcast = result.get('podcast') or {}
        return cls(
            title_original=result.get('title_original') or '',
            podcast_title_original=podcast.get('title_original') or '',
            description_original=result.get('description_original') or '',
            image=result.get('image') or '',
            thumbnail=result.get('thumbnail') or '',
            audio=result.get('audio') or '',
            listennotes_url=result.get('listennotes_url') or '',
            id=result.get('id') or '',
        )


class ListenNotesClient:
    """Client for the Listen Notes podcast search API"""

    def __init__(self, api_key: str, timeout: float = Config.DEFAULT_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize Listen Notes client

        Args:
            api_key: Listen Notes API key (empty disables lookups)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def search(self, query: str, result_type: str = 'episode') -> List[SearchCandidate]:
        """
        Search Listen Notes

        Args:
            query: Free-text query
            result_type: Listen Notes result type filter ('episode', 'podcast')

        Returns:
            Candidates in provider relevance order

        Raises:
            ParseError: If the response body is not JSON
            UpstreamError: If the request itself fails
        """
        params = {'q': query, 'type': result_type, 'sort_by_date': 0}
        headers = {'X-ListenAPI-Key': self.api_key}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(Config.LISTEN_NOTES_SEARCH_URL, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"❌ [listen-notes] Request failed: {e}")
            raise UpstreamError(f"Listen Notes request failed: {e}") from e

        try:
            data = json.loads(response.text)
        except json.JSONDecodeError as e:
            logger.error(f"❌ [listen-notes] Parse error, raw: {response.text[:200]}")
            raise ParseError("Parse error") from e

        results = data.get('results') if isinstance(data, dict) else None
        return [SearchCandidate.from_result(r) for r in results or [] if isinstance(r, dict)]
