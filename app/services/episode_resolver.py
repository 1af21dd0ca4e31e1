"""
Episode resolution service

Turns a shared link into an EpisodeReference. Spotify episode links go through
an ordered list of strategies (Listen Notes lookup, embed page, oEmbed); every
other link is scraped directly.
"""

import json
import logging
import re
from typing import List, Optional, Sequence
from urllib.parse import quote

from app.models.episode import EpisodeReference
from core.config import Config
from core.errors import ExtractionError, ParseError
from core.listen_notes_client import ListenNotesClient
from core.metadata_extractor import MetadataBundle, extract_metadata
from core.page_fetcher import PageFetcher

logger = logging.getLogger(__name__)

SPOTIFY_EPISODE_PATTERN = re.compile(r'spotify\.com/episode/([a-zA-Z0-9]+)')

# Titles Spotify serves when the real episode metadata is not in the page
PLACEHOLDER_TITLES = frozenset({'Spotify', 'Spotify – Web Player'})

SPOTIFY_EXTRACTION_FAILED = (
    "Could not extract episode info from Spotify link. "
    "Try an Apple Podcasts or YouTube link instead."
)
EPISODE_NOT_IDENTIFIED = (
    "Couldn't identify the episode from that link. "
    "Try sharing an Apple Podcasts or YouTube link instead."
)


def reference_from_metadata(meta: MetadataBundle) -> EpisodeReference:
    """Map scraped page metadata onto an EpisodeReference"""
    return EpisodeReference(
        podcast=meta.og_site_name,
        episode=meta.og_title or meta.title,
        description=meta.og_description or meta.description,
        image=meta.og_image,
    )


class ListenNotesLookupStrategy:
    """Search Listen Notes for the Spotify episode id and trust the top hit"""

    name = "listen-notes"

    def __init__(self, listen_notes: ListenNotesClient):
        self.listen_notes = listen_notes

    async def resolve(self, url: str, episode_id: str) -> EpisodeReference:
        results = await self.listen_notes.search(episode_id, result_type='episode')
        if not results:
            raise ExtractionError("Not found via search")

        best = results[0]
        logger.info(f"✅ [analyze] Listen Notes found: \"{best.title_original}\" from \"{best.podcast_title_original}\"")
        return EpisodeReference(
            podcast=best.podcast_title_original,
            episode=best.title_original,
            description=best.description_original,
            image=best.image or best.thumbnail,
        )


class SpotifyEmbedStrategy:
    """Scrape the embeddable player page, which carries richer Open Graph tags"""

    name = "spotify-embed"

    def __init__(self, fetcher: PageFetcher):
        self.fetcher = fetcher

    async def resolve(self, url: str, episode_id: str) -> EpisodeReference:
        embed_url = Config.SPOTIFY_EMBED_URL.format(episode_id=episode_id)
        html = await self.fetcher.fetch(embed_url)
        return reference_from_metadata(extract_metadata(html))


class SpotifyOEmbedStrategy:
    """Read title and thumbnail from Spotify's oEmbed endpoint"""

    name = "spotify-oembed"

    def __init__(self, fetcher: PageFetcher):
        self.fetcher = fetcher

    async def resolve(self, url: str, episode_id: str) -> EpisodeReference:
        oembed_url = Config.SPOTIFY_OEMBED_URL.format(url=quote(url, safe=''))
        body = await self.fetcher.fetch(oembed_url)
        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise ParseError("oEmbed response was not JSON") from e
        if not isinstance(data, dict):
            raise ParseError("oEmbed response was not a JSON object")

        return EpisodeReference(
            podcast=data.get('provider_name') or 'Spotify',
            episode=data.get('title') or '',
            image=data.get('thumbnail_url') or '',
        )


class EpisodeResolver:
    """Resolves shared episode links into EpisodeReferences"""

    def __init__(self, fetcher: PageFetcher, listen_notes: ListenNotesClient,
                 spotify_strategies: Optional[Sequence] = None):
        """
        Initialize resolver

        Args:
            fetcher: Page fetcher for direct and fallback scrapes
            listen_notes: Listen Notes client (lookup is skipped when unconfigured)
            spotify_strategies: Override for the Spotify strategy chain
        """
        self.fetcher = fetcher
        self.listen_notes = listen_notes
        self.spotify_strategies: List = list(spotify_strategies) if spotify_strategies is not None else [
            ListenNotesLookupStrategy(listen_notes),
            SpotifyEmbedStrategy(fetcher),
            SpotifyOEmbedStrategy(fetcher),
        ]

    async def resolve(self, url: str) -> EpisodeReference:
        """
        Resolve a link to an EpisodeReference

        Args:
            url: Shared episode link

        Returns:
            EpisodeReference with the full (untruncated) description

        Raises:
            ExtractionError: If no episode could be identified
        """
        spotify_match = SPOTIFY_EPISODE_PATTERN.search(url)

        if spotify_match and self.listen_notes.is_configured:
            episode_id = spotify_match.group(1)
            logger.info(f"🎧 [analyze] Spotify episode detected: {episode_id}, looking up via Listen Notes...")
            reference = await self._resolve_with_strategies(url, episode_id)
        else:
            html = await self.fetcher.fetch(url)
            reference = reference_from_metadata(extract_metadata(html))

        logger.info(f"[analyze] Found: \"{reference.episode}\" from \"{reference.podcast}\"")

        if not reference.episode or reference.episode in PLACEHOLDER_TITLES:
            raise ExtractionError(EPISODE_NOT_IDENTIFIED)

        return reference

    async def _resolve_with_strategies(self, url: str, episode_id: str) -> EpisodeReference:
        for strategy in self.spotify_strategies:
            try:
                return await strategy.resolve(url, episode_id)
            except Exception as e:
                logger.info(f"⚠️ [analyze] {strategy.name} failed ({e}), trying next source...")

        raise ExtractionError(SPOTIFY_EXTRACTION_FAILED)
