"""
FastAPI dependency providers

Each request gets its own component instances built from the application's
Settings, so nothing mutable is shared between requests.
"""

from fastapi import Depends, Request

from app.services.episode_analyzer import EpisodeAnalyzer
from app.services.episode_resolver import EpisodeResolver
from app.services.playlist_builder import PlaylistBuilder
from core.claude_client import ClaudeClient
from core.config import Settings
from core.listen_notes_client import ListenNotesClient
from core.page_fetcher import PageFetcher


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_claude_client(settings: Settings = Depends(get_settings)) -> ClaudeClient:
    return ClaudeClient(api_key=settings.anthropic_api_key)


def get_listen_notes_client(settings: Settings = Depends(get_settings)) -> ListenNotesClient:
    return ListenNotesClient(api_key=settings.listen_notes_key)


def get_page_fetcher() -> PageFetcher:
    return PageFetcher()


def get_episode_resolver(
    fetcher: PageFetcher = Depends(get_page_fetcher),
    listen_notes: ListenNotesClient = Depends(get_listen_notes_client),
) -> EpisodeResolver:
    return EpisodeResolver(fetcher, listen_notes)


def get_episode_analyzer(claude: ClaudeClient = Depends(get_claude_client)) -> EpisodeAnalyzer:
    return EpisodeAnalyzer(claude)


def get_playlist_builder(
    claude: ClaudeClient = Depends(get_claude_client),
    listen_notes: ListenNotesClient = Depends(get_listen_notes_client),
) -> PlaylistBuilder:
    return PlaylistBuilder(claude, listen_notes)
