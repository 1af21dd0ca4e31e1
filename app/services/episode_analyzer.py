"""
Episode analysis service

Asks Claude for a structured take on a resolved episode.
"""

import logging
from typing import Any, Dict

from app.models.episode import EpisodeReference
from core.claude_client import ClaudeClient
from core.errors import ParseError
from core.json_utils import parse_json_with_recovery
from core.prompts import SYSTEM_PROMPT, EpisodeAnalysisPrompt

logger = logging.getLogger(__name__)


class EpisodeAnalyzer:
    """Generates the summary/guest/topics/tone/suggestedPrompt analysis"""

    def __init__(self, claude: ClaudeClient):
        self.claude = claude

    async def analyze(self, reference: EpisodeReference) -> Dict[str, Any]:
        """
        Analyze an episode

        Args:
            reference: Resolved episode (description untruncated)

        Returns:
            Analysis object as produced by the model

        Raises:
            ParseError: If no JSON object can be recovered from the reply
        """
        prompt = EpisodeAnalysisPrompt.build(reference.podcast, reference.episode, reference.description)
        text = await self.claude.complete(
            [{"role": "user", "content": prompt}],
            system=SYSTEM_PROMPT,
            max_tokens=EpisodeAnalysisPrompt.MAX_TOKENS,
        )

        analysis = parse_json_with_recovery(text, "Could not parse analysis. Please try again.")
        if not isinstance(analysis, dict):
            raise ParseError("Could not parse analysis. Please try again.")
        return analysis
