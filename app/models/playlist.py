"""
Pydantic models for playlist generation

Playlist and PlaylistEpisode mirror the JSON object the model is asked to emit.
Fields the model fills are left untyped and unknown keys are kept, so the
response echoes what the model produced plus whatever enrichment attached.
"""

from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from core.config import Config


class PlaylistRequest(BaseModel):
    """Request model for POST /api/playlist"""
    model_config = ConfigDict(populate_by_name=True)

    prompt: Optional[str] = None
    duration_minutes: int = Field(default=Config.DEFAULT_DURATION_MINUTES, alias="durationMinutes")


class PlaylistEpisode(BaseModel):
    """One entry in a generated playlist"""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    podcast: Any = None
    episode: Any = None
    guest: Any = None
    duration: Any = Field(default=None, description="Episode length in minutes")
    year: Any = None
    description: Any = None
    search_query: Any = Field(default=None, alias="searchQuery")

    # Attached by enrichment
    listen_notes_url: Optional[str] = Field(default=None, alias="listenNotesUrl")
    listen_notes_audio: Optional[str] = Field(default=None, alias="listenNotesAudio")
    listen_notes_image: Optional[str] = Field(default=None, alias="listenNotesImage")
    listen_notes_id: Optional[str] = Field(default=None, alias="listenNotesId")


class Playlist(BaseModel):
    """A generated, duration-targeted playlist"""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    playlist_title: Any = Field(default=None, alias="playlistTitle")
    playlist_description: Any = Field(default=None, alias="playlistDescription")
    target_minutes: Any = Field(default=None, alias="targetMinutes")
    episodes: List[PlaylistEpisode] = Field(default_factory=list)
    total_minutes: Any = Field(default=None, alias="totalMinutes")
    note: Any = None

    def to_response(self) -> dict:
        """Serialize with camelCase keys, omitting fields nobody set"""
        return self.model_dump(by_alias=True, exclude_unset=True)
