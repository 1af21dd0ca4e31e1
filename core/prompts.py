#!/usr/bin/env python3
"""
Prompts for the Pod Curious assistant

All model prompts live here so the wording can be reviewed in one place.
"""

from core.config import Config


SYSTEM_PROMPT = """You are Pod Curious, a warm and knowledgeable podcast companion. You help people discover podcasts by analyzing episodes they share and building personalized playlists.

Your personality: curious, enthusiastic but not over-the-top, well-read, like a friend who always has the best podcast recommendations. You speak naturally, not in bullet points.

IMPORTANT: The total duration of playlists matters a lot. Users specify how long they want to listen, and you must build playlists that hit that target. Track running time carefully."""


class EpisodeAnalysisPrompt:
    """
    Asks for a structured analysis of a single episode

    Output: JSON with summary, guest, topics, tone and suggestedPrompt
    """

    NAME = "Episode Analysis"
    MAX_TOKENS = Config.CLAUDE_MAX_TOKENS

    @staticmethod
    def build(podcast: str, episode: str, description: str) -> str:
        """
        Build the analysis prompt

        Args:
            podcast: Podcast name
            episode: Episode title
            description: Full (untruncated) episode description

        Returns:
            Prompt string
        """
        return f"""Analyze this podcast episode. Respond with ONLY a JSON object, no other text, no explanation, no markdown fences.

Podcast: "{podcast}"
Episode: "{episode}"
Description: "{description}"

Your response must be exactly this JSON structure and nothing else:
{{"summary":"A 2-3 sentence description of what this episode covers, its guest, and themes.","guest":"Guest name or null","topics":["topic1","topic2","topic3"],"tone":"e.g. academic, casual, investigative","suggestedPrompt":"A natural language playlist prompt based on this episode, ending by asking how long the playlist should be."}}"""


class PlaylistPrompt:
    """
    Asks for a duration-targeted playlist as a single JSON object

    Duration bookkeeping is left to the model; nothing downstream corrects it.
    """

    NAME = "Playlist Generation"
    MAX_TOKENS = Config.PLAYLIST_MAX_TOKENS

    @staticmethod
    def build(prompt: str, duration_minutes: int) -> str:
        """
        Build the playlist prompt

        Args:
            prompt: The user's refined playlist request
            duration_minutes: Target total listening time

        Returns:
            Prompt string
        """
        hours = round(duration_minutes / 60 * 10) / 10

        return f"""Based on the user's refined request, generate a podcast playlist.

User's playlist request: "{prompt}"
Target total duration: {duration_minutes} minutes (approximately {hours:g} hours)

CRITICAL: The episodes must add up to approximately {duration_minutes} minutes total. Track the running time as you build the list. You can go slightly over but never significantly under.

Respond with JSON only, no markdown:
{{
  "playlistTitle": "A catchy, descriptive title for this playlist",
  "playlistDescription": "One sentence describing the listening journey",
  "targetMinutes": {duration_minutes},
  "episodes": [
    {{
      "podcast": "Real podcast name",
      "episode": "Real episode title",
      "guest": "Guest name or null",
      "duration": 45,
      "year": "2024",
      "description": "One sentence on what this episode covers and why it fits the playlist",
      "searchQuery": "concise search query to find this on Listen Notes"
    }}
  ],
  "totalMinutes": 0,
  "note": "A brief note about the playlist arc, how the episodes flow together"
}}

Rules:
- REAL podcasts and real or representative episode titles only
- "duration" is in minutes and must be realistic for each episode
- The sum of all durations must be close to {duration_minutes} minutes
- Order episodes in a logical listening sequence
- Each episode from a different podcast when possible
- Include a mix of well-known and lesser-known shows
- "totalMinutes" must equal the actual sum of episode durations"""
