"""
Chat relay route
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends

from app.dependencies import get_claude_client
from app.models.chat import ChatRequest, ChatResponse
from core.claude_client import ClaudeClient
from core.errors import InputError, UpstreamError
from core.prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: Optional[ChatRequest] = None,
    claude: ClaudeClient = Depends(get_claude_client),
):
    """
    Forward the conversation to Claude and return its reply

    Args:
        request: Body with the ordered message list

    Returns:
        The assistant reply text
    """
    request = request or ChatRequest()
    if not request.messages:
        raise InputError("No messages")

    last = request.messages[-1].content
    if not isinstance(last, str):
        last = f"<{len(last)} content blocks>"
    logger.info(f"[chat] {len(request.messages)} messages, last: \"{last[:80]}...\"")

    try:
        reply = await claude.complete(
            [message.model_dump() for message in request.messages],
            system=SYSTEM_PROMPT,
        )
    except Exception as e:
        logger.error(f"❌ [chat] Error: {e}")
        raise UpstreamError(f"Chat failed: {e}") from e

    return ChatResponse(reply=reply)
