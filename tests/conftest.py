"""
Shared pytest fixtures for Pod Curious backend tests

This file contains fixtures and fakes that are available to all test files.
"""

import json
from types import SimpleNamespace
from typing import Dict, List, Optional, Union
from unittest.mock import AsyncMock, Mock

import pytest

from core.claude_client import ClaudeClient
from core.listen_notes_client import SearchCandidate


class FakeFetcher:
    """Stands in for PageFetcher: maps URLs to bodies or exceptions"""

    def __init__(self, pages: Dict[str, Union[str, Exception]]):
        self.pages = pages
        self.calls: List[str] = []

    async def fetch(self, url: str, max_redirects: int = 5) -> str:
        self.calls.append(url)
        page = self.pages.get(url)
        if page is None:
            raise AssertionError(f"Unexpected fetch: {url}")
        if isinstance(page, Exception):
            raise page
        return page


class FakeListenNotes:
    """Stands in for ListenNotesClient with canned per-query responses"""

    def __init__(self, responses: Optional[Dict[str, Union[List[SearchCandidate], Exception]]] = None,
                 default: Optional[List[SearchCandidate]] = None, configured: bool = True):
        self.responses = responses or {}
        self.default = default or []
        self.configured = configured
        self.queries: List[str] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def search(self, query: str, result_type: str = 'episode') -> List[SearchCandidate]:
        self.queries.append(query)
        response = self.responses.get(query, self.default)
        if isinstance(response, Exception):
            raise response
        return response


def make_sdk_client(*replies: str) -> Mock:
    """Build a fake AsyncAnthropic whose messages.create returns the given texts in turn"""
    sdk = Mock()
    sdk.messages.create = AsyncMock(side_effect=[
        SimpleNamespace(content=[SimpleNamespace(type="text", text=reply)]) for reply in replies
    ])
    return sdk


def make_claude(*replies: str) -> ClaudeClient:
    """ClaudeClient backed by a fake SDK client"""
    return ClaudeClient(api_key="test-key", client=make_sdk_client(*replies))


@pytest.fixture
def sample_episode_html() -> str:
    """Episode page with Open Graph tags in both attribute orders"""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Episode 200 &mdash; The Daily | Apple Podcasts</title>
        <meta property="og:title" content="Episode 200: Tom &amp; Jerry&#39;s Show">
        <meta content="The Daily" property="og:site_name">
        <meta property="og:description" content="A deep dive into cartoons &hellip;">
        <meta property="og:image" content="https://example.com/art.jpg">
        <meta name="description" content="Plain description">
    </head>
    <body><h1>Episode 200</h1></body>
    </html>
    """


@pytest.fixture
def sample_search_results() -> List[dict]:
    """Raw Listen Notes search results"""
    return [
        {
            'id': 'ep1',
            'title_original': 'Episode 200',
            'description_original': 'The two hundredth episode.',
            'image': 'https://cdn.listennotes.com/ep1.jpg',
            'thumbnail': 'https://cdn.listennotes.com/ep1-thumb.jpg',
            'audio': 'https://www.listennotes.com/e/p/ep1/',
            'listennotes_url': 'https://www.listennotes.com/e/ep1/',
            'podcast': {'title_original': 'The Daily'},
        },
        {
            'id': 'ep2',
            'title_original': 'Unrelated',
            'description_original': 'Something else.',
            'image': '',
            'thumbnail': 'https://cdn.listennotes.com/ep2-thumb.jpg',
            'audio': 'https://www.listennotes.com/e/p/ep2/',
            'listennotes_url': 'https://www.listennotes.com/e/ep2/',
            'podcast': {'title_original': 'Other'},
        },
    ]


@pytest.fixture
def sample_candidates(sample_search_results) -> List[SearchCandidate]:
    return [SearchCandidate.from_result(r) for r in sample_search_results]


@pytest.fixture
def sample_playlist() -> dict:
    """Playlist JSON as the model is asked to emit it"""
    return {
        "playlistTitle": "Upbeat Tech Hour",
        "playlistDescription": "Fast-moving tech news to start the day.",
        "targetMinutes": 60,
        "episodes": [
            {
                "podcast": "Hard Fork",
                "episode": "The AI Week in Review",
                "guest": None,
                "duration": 35,
                "year": "2024",
                "description": "A brisk tour of the week in AI.",
                "searchQuery": "hard fork ai week",
            },
            {
                "podcast": "Decoder",
                "episode": "Why Chips Matter",
                "guest": "Jane Doe",
                "duration": 27,
                "year": "2023",
                "description": "Semiconductors explained.",
                "searchQuery": "decoder chips",
            },
        ],
        "totalMinutes": 62,
        "note": "Starts broad, ends deep.",
    }


@pytest.fixture
def sample_playlist_json(sample_playlist) -> str:
    return json.dumps(sample_playlist)


@pytest.fixture
def fake_fetcher():
    """Factory: fake_fetcher({url: body_or_exception})"""
    return FakeFetcher


@pytest.fixture
def fake_listen_notes():
    """Factory: fake_listen_notes(responses=..., default=..., configured=...)"""
    return FakeListenNotes


@pytest.fixture
def claude_with_replies():
    """Factory: claude_with_replies('reply 1', 'reply 2', ...)"""
    return make_claude
