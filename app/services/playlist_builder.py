"""
Playlist generation service

Claude drafts the playlist; Listen Notes plus the match scorer then attach real
listening links to each entry, one episode at a time.
"""

import logging
import re
from typing import Any

from pydantic import ValidationError

from app.models.playlist import Playlist, PlaylistEpisode
from core.claude_client import ClaudeClient
from core.config import Config
from core.errors import ParseError
from core.json_utils import parse_json_strict
from core.listen_notes_client import ListenNotesClient
from core.match_scorer import select_best_match
from core.prompts import SYSTEM_PROMPT, PlaylistPrompt

logger = logging.getLogger(__name__)

QUERY_PUNCTUATION_PATTERN = re.compile(r'[#&"]')


def sanitize_query_part(text: Any) -> str:
    """
    Replace search-hostile punctuation with spaces

    Examples:
        >>> sanitize_query_part('Hardcore History #68 "Blueprint"')
        'Hardcore History  68  Blueprint'
    """
    return QUERY_PUNCTUATION_PATTERN.sub(' ', str(text) if text else '').strip()


class PlaylistBuilder:
    """Builds and enriches duration-targeted playlists"""

    def __init__(self, claude: ClaudeClient, listen_notes: ListenNotesClient):
        self.claude = claude
        self.listen_notes = listen_notes

    async def build(self, prompt: str, duration_minutes: int) -> Playlist:
        """
        Generate a playlist and enrich it with Listen Notes links

        Args:
            prompt: Refined free-text playlist request
            duration_minutes: Target total duration

        Returns:
            Playlist as emitted by the model, plus link fields where a match was found

        Raises:
            ParseError: If the model reply is not a JSON playlist object
        """
        text = await self.claude.complete(
            [{"role": "user", "content": PlaylistPrompt.build(prompt, duration_minutes)}],
            system=SYSTEM_PROMPT,
            max_tokens=PlaylistPrompt.MAX_TOKENS,
        )

        data = parse_json_strict(text)
        if not isinstance(data, dict):
            raise ParseError("Model response was not a JSON object")
        try:
            playlist = Playlist.model_validate(data)
        except ValidationError as e:
            raise ParseError(f"Model response did not match the playlist shape: {e}") from e

        if self.listen_notes.is_configured:
            logger.info("[listen-notes] Enriching episodes...")
            for episode in playlist.episodes:
                await self._enrich_episode(episode)

        logger.info(f"[playlist] Generated {len(playlist.episodes)} episodes, ~{playlist.total_minutes} min")
        return playlist

    async def _enrich_episode(self, episode: PlaylistEpisode) -> None:
        """Attach Listen Notes link fields in place; failures leave the episode as-is"""
        podcast_name = sanitize_query_part(episode.podcast)
        episode_title = sanitize_query_part(episode.episode)
        query = f"{podcast_name} {episode_title}"[:Config.LISTEN_NOTES_QUERY_MAX_CHARS]

        logger.info(f"[listen-notes] Searching: {podcast_name} - {episode_title}")

        try:
            results = await self.listen_notes.search(query, result_type='episode')
        except Exception as e:
            logger.error(f"❌ [listen-notes] Error for \"{episode.episode}\": {e}")
            return

        if not results:
            logger.info(f"❌ [listen-notes] No results for: \"{episode_title}\"")
            return

        match = select_best_match(podcast_name, episode_title, results)
        if match is None:
            logger.info(f"❌ [listen-notes] No good match for: \"{episode_title}\"")
            return

        best = match.candidate
        episode.listen_notes_url = best.listennotes_url or None
        episode.listen_notes_audio = best.audio or None
        episode.listen_notes_image = best.image or best.thumbnail or None
        episode.listen_notes_id = best.id or None
        logger.info(
            f"✅ [listen-notes] Found (score {match.score}): \"{best.title_original}\" "
            f"from \"{best.podcast_title_original}\" → {best.listennotes_url}"
        )
