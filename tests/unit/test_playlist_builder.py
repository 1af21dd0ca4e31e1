"""
Tests for app/services/playlist_builder.py

Tests strict playlist parsing and per-episode Listen Notes enrichment.
"""

import json

import pytest

from app.services.playlist_builder import PlaylistBuilder, sanitize_query_part
from core.errors import ParseError, UpstreamError
from core.listen_notes_client import SearchCandidate

HARD_FORK_QUERY = "Hard Fork The AI Week in Review"
DECODER_QUERY = "Decoder Why Chips Matter"


def hit(title: str, podcast: str, id: str, image: str = "", thumbnail: str = "") -> SearchCandidate:
    return SearchCandidate(
        title_original=title,
        podcast_title_original=podcast,
        image=image,
        thumbnail=thumbnail,
        audio=f"https://www.listennotes.com/e/p/{id}/",
        listennotes_url=f"https://www.listennotes.com/e/{id}/",
        id=id,
    )


class TestSanitizeQueryPart:
    """Tests for sanitize_query_part() function"""

    @pytest.mark.unit
    def test_replaces_punctuation(self):
        """Should replace #, & and double quotes with spaces"""
        assert sanitize_query_part('Hardcore History #68 "Blueprint"') == 'Hardcore History  68  Blueprint'
        assert sanitize_query_part("Tom & Jerry") == "Tom   Jerry"

    @pytest.mark.unit
    def test_handles_none(self):
        """Should treat a missing value as empty"""
        assert sanitize_query_part(None) == ""


class TestBuild:
    """Tests for PlaylistBuilder.build()"""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_returns_model_playlist_without_lookups(self, claude_with_replies, fake_listen_notes,
                                                          sample_playlist, sample_playlist_json):
        """Should echo the model's playlist and skip lookups without a key"""
        listen_notes = fake_listen_notes(configured=False)
        builder = PlaylistBuilder(claude_with_replies(sample_playlist_json), listen_notes)

        playlist = await builder.build("upbeat tech", 60)

        assert playlist.to_response() == sample_playlist
        assert listen_notes.queries == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_total_minutes_is_not_recomputed(self, claude_with_replies, fake_listen_notes, sample_playlist):
        """Should keep the model-reported total even when it disagrees with the sum"""
        sample_playlist["totalMinutes"] = 90
        builder = PlaylistBuilder(claude_with_replies(json.dumps(sample_playlist)),
                                  fake_listen_notes(configured=False))

        playlist = await builder.build("upbeat tech", 60)
        assert playlist.to_response()["totalMinutes"] == 90

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_accepts_fenced_reply(self, claude_with_replies, fake_listen_notes, sample_playlist_json):
        """Should strip Markdown fences before parsing"""
        builder = PlaylistBuilder(claude_with_replies(f"```json\n{sample_playlist_json}\n```"),
                                  fake_listen_notes(configured=False))
        playlist = await builder.build("upbeat tech", 60)
        assert playlist.playlist_title == "Upbeat Tech Hour"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_rejects_prose_wrapped_reply(self, claude_with_replies, fake_listen_notes, sample_playlist_json):
        """Should not recover JSON from prose"""
        builder = PlaylistBuilder(claude_with_replies(f"Here is your playlist: {sample_playlist_json}"),
                                  fake_listen_notes(configured=False))
        with pytest.raises(ParseError):
            await builder.build("upbeat tech", 60)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_prompt_mentions_duration(self, claude_with_replies, fake_listen_notes, sample_playlist_json):
        """Should put the target minutes and hours into the prompt"""
        claude = claude_with_replies(sample_playlist_json)
        await PlaylistBuilder(claude, fake_listen_notes(configured=False)).build("history", 90)

        kwargs = claude._client.messages.create.call_args.kwargs
        prompt = kwargs["messages"][0]["content"]
        assert "90 minutes (approximately 1.5 hours)" in prompt
        assert '"history"' in prompt
        assert kwargs["max_tokens"] == 3000


class TestEnrichment:
    """Tests for Listen Notes enrichment"""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_attaches_link_fields(self, claude_with_replies, fake_listen_notes, sample_playlist_json):
        """Should add listenNotes* fields to matched episodes only"""
        listen_notes = fake_listen_notes(responses={
            HARD_FORK_QUERY: [
                hit("Something Else Entirely", "Other Show", "x1"),
                hit("The AI Week in Review", "Hard Fork", "hf1", thumbnail="https://cdn.example.com/hf.jpg"),
            ],
            DECODER_QUERY: [hit("Unrelated", "Other", "x2")],
        })
        builder = PlaylistBuilder(claude_with_replies(sample_playlist_json), listen_notes)

        response = (await builder.build("upbeat tech", 60)).to_response()
        hard_fork, decoder = response["episodes"]

        assert hard_fork["listenNotesUrl"] == "https://www.listennotes.com/e/hf1/"
        assert hard_fork["listenNotesAudio"] == "https://www.listennotes.com/e/p/hf1/"
        assert hard_fork["listenNotesImage"] == "https://cdn.example.com/hf.jpg"
        assert hard_fork["listenNotesId"] == "hf1"
        assert "listenNotesUrl" not in decoder
        assert "listenNotesId" not in decoder

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_searches_sequentially_in_order(self, claude_with_replies, fake_listen_notes,
                                                  sample_playlist_json):
        """Should issue one query per episode, in playlist order"""
        listen_notes = fake_listen_notes()
        await PlaylistBuilder(claude_with_replies(sample_playlist_json), listen_notes).build("tech", 60)
        assert listen_notes.queries == [HARD_FORK_QUERY, DECODER_QUERY]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failed_lookup_is_isolated(self, claude_with_replies, fake_listen_notes, sample_playlist_json):
        """Should keep enriching after one episode's lookup fails"""
        listen_notes = fake_listen_notes(responses={
            HARD_FORK_QUERY: UpstreamError("Listen Notes request failed"),
            DECODER_QUERY: [hit("Why Chips Matter", "Decoder", "dc1", image="https://cdn.example.com/dc.jpg")],
        })
        builder = PlaylistBuilder(claude_with_replies(sample_playlist_json), listen_notes)

        response = (await builder.build("tech", 60)).to_response()
        hard_fork, decoder = response["episodes"]

        assert "listenNotesUrl" not in hard_fork
        assert decoder["listenNotesId"] == "dc1"
        assert decoder["listenNotesImage"] == "https://cdn.example.com/dc.jpg"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_query_is_sanitized_and_capped(self, claude_with_replies, fake_listen_notes, sample_playlist):
        """Should strip punctuation and cap the query at 150 characters"""
        sample_playlist["episodes"] = [{
            "podcast": "Hardcore History",
            "episode": '#68 "Blueprint for Armageddon" & ' + "more " * 40,
            "duration": 60,
        }]
        listen_notes = fake_listen_notes()
        await PlaylistBuilder(claude_with_replies(json.dumps(sample_playlist)), listen_notes).build("war", 60)

        (query,) = listen_notes.queries
        assert len(query) == 150
        assert query.startswith("Hardcore History 68  Blueprint for Armageddon")
        assert not any(ch in query for ch in '#&"')

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unknown_model_fields_are_kept(self, claude_with_replies, fake_listen_notes, sample_playlist):
        """Should pass through fields the model adds beyond the schema"""
        sample_playlist["mood"] = "energetic"
        sample_playlist["episodes"][0]["rating"] = 5
        builder = PlaylistBuilder(claude_with_replies(json.dumps(sample_playlist)),
                                  fake_listen_notes(configured=False))

        response = (await builder.build("tech", 60)).to_response()
        assert response["mood"] == "energetic"
        assert response["episodes"][0]["rating"] == 5

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize("field,value", [
        ("guest", ["Ada Lovelace", "Alan Turing"]),
        ("duration", "45 min"),
        ("year", 2024.5),
    ])
    async def test_loosely_typed_fields_are_echoed(self, claude_with_replies, fake_listen_notes,
                                                   sample_playlist, field, value):
        """Should pass through episode fields whose JSON types differ from the requested shape"""
        sample_playlist["episodes"][0][field] = value
        builder = PlaylistBuilder(claude_with_replies(json.dumps(sample_playlist)), fake_listen_notes())

        response = (await builder.build("tech", 60)).to_response()
        assert response == sample_playlist

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_non_string_names_still_search(self, claude_with_replies, fake_listen_notes, sample_playlist):
        """Should build a query from non-string podcast and episode values"""
        sample_playlist["episodes"] = [{"podcast": 99, "episode": "Percent Invisible", "duration": 30}]
        listen_notes = fake_listen_notes()

        await PlaylistBuilder(claude_with_replies(json.dumps(sample_playlist)), listen_notes).build("design", 30)
        assert listen_notes.queries == ["99 Percent Invisible"]
