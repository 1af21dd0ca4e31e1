#!/usr/bin/env python3
"""
Centralized configuration for the Pod Curious backend

Constants live on Config. Values that come from the environment are read once
into an immutable Settings instance, which is handed to each component.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict


class Config:
    """Centralized configuration constants"""

    # HTTP timeouts (seconds)
    FETCH_TIMEOUT = 10
    DEFAULT_TIMEOUT = 30

    # Page fetcher
    MAX_REDIRECTS = 5
    REDIRECT_STATUS_CODES = (301, 302, 303, 307, 308)

    # Claude API settings
    CLAUDE_MODEL = "claude-sonnet-4-20250514"
    CLAUDE_MAX_TOKENS = 2000
    PLAYLIST_MAX_TOKENS = 3000

    # Listen Notes
    LISTEN_NOTES_SEARCH_URL = "https://listen-api.listennotes.com/api/v2/search"
    LISTEN_NOTES_QUERY_MAX_CHARS = 150

    # Spotify fallbacks
    SPOTIFY_EMBED_URL = "https://open.spotify.com/embed/episode/{episode_id}"
    SPOTIFY_OEMBED_URL = "https://open.spotify.com/oembed?url={url}"

    # Output limits
    DESCRIPTION_MAX_CHARS = 500
    RAW_LOG_CHARS = 300

    DEFAULT_PORT = 3000
    DEFAULT_DURATION_MINUTES = 60

    @staticmethod
    def get_default_headers() -> Dict[str, str]:
        """Get default HTTP headers for page fetches"""
        return {
            'User-Agent': os.getenv(
                'USER_AGENT',
                'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 '
                '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
            ),
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
        }

    @staticmethod
    def find_project_root() -> Path:
        """
        Find the project root directory (the one holding app/ and core/)

        Returns:
            Path to project root directory
        """
        return Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class Settings:
    """Environment-derived settings, read once at startup"""

    anthropic_api_key: str = ''
    listen_notes_key: str = ''
    port: int = Config.DEFAULT_PORT
    static_dir: Path = Config.find_project_root() / 'public'
    log_level: str = 'INFO'

    @property
    def anthropic_configured(self) -> bool:
        return bool(self.anthropic_api_key)

    @property
    def listen_notes_configured(self) -> bool:
        return bool(self.listen_notes_key)

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables

        Returns:
            Settings populated from PORT, ANTHROPIC_API_KEY, LISTEN_NOTES_KEY,
            STATIC_DIR and LOG_LEVEL
        """
        static_dir = os.getenv('STATIC_DIR')
        return cls(
            anthropic_api_key=os.getenv('ANTHROPIC_API_KEY', ''),
            listen_notes_key=os.getenv('LISTEN_NOTES_KEY', ''),
            port=int(os.getenv('PORT', str(Config.DEFAULT_PORT))),
            static_dir=Path(static_dir) if static_dir else Config.find_project_root() / 'public',
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        )
