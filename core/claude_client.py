#!/usr/bin/env python3
"""
Claude Client
Handles all interactions with the Anthropic Messages API
"""

import logging
from typing import Any, Dict, List, Optional

import anthropic

from core.config import Config
from core.errors import UpstreamError

logger = logging.getLogger(__name__)


class ClaudeClient:
    """Client for the hosted Claude completion endpoint"""

    def __init__(self, api_key: str, model: str = Config.CLAUDE_MODEL,
                 client: Optional[anthropic.AsyncAnthropic] = None):
        """
        Initialize Claude client

        Args:
            api_key: Anthropic API key
            model: Model identifier sent with every request
            client: Optional pre-built SDK client (used by tests)
        """
        self.api_key = api_key
        self.model = model
        self._client = client

    def _get_client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            if not self.api_key:
                raise UpstreamError("ANTHROPIC_API_KEY environment variable not set")
            self._client = anthropic.AsyncAnthropic(api_key=self.api_key)
        return self._client

    async def complete(self, messages: List[Dict[str, Any]], system: Optional[str] = None,
                       max_tokens: int = Config.CLAUDE_MAX_TOKENS) -> str:
        """
        Send a message list to Claude and return the reply text

        Args:
            messages: Ordered chat messages ({'role', 'content'})
            system: Optional system prompt
            max_tokens: Token budget for the reply

        Returns:
            Text of all content blocks, concatenated in order

        Raises:
            UpstreamError: If the provider returns an error or an unparseable body
        """
        request_params = {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": messages,
        }
        if system:
            request_params["system"] = system

        client = self._get_client()
        logger.info(f"🤖 [claude] Sending {len(messages)} message(s), max_tokens={max_tokens}")

        try:
            response = await client.messages.create(**request_params)
        except anthropic.APIStatusError as e:
            body = e.body if isinstance(e.body, dict) else None
            error = body.get('error') if body else None
            if isinstance(error, dict) and error.get('message'):
                logger.error(f"❌ [claude] Error: {error['message']}")
                raise UpstreamError(error['message']) from e
            logger.error(f"❌ [claude] Raw: {e.response.text[:Config.RAW_LOG_CHARS]}")
            raise UpstreamError("Failed to parse Claude response") from e
        except anthropic.APIResponseValidationError as e:
            logger.error(f"❌ [claude] Raw: {e.response.text[:Config.RAW_LOG_CHARS]}")
            raise UpstreamError("Failed to parse Claude response") from e
        except anthropic.APIError as e:
            logger.error(f"❌ [claude] Request failed: {e}")
            raise UpstreamError(f"Claude request failed: {e}") from e

        text = "".join(getattr(block, "text", "") or "" for block in response.content or [])
        logger.info(f"✅ [claude] Received {len(text)} chars")
        return text
