"""
Pydantic models for the chat relay
"""

from typing import Any, Dict, List, Union
from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """A single chat turn; content is plain text or a list of content blocks"""
    role: str
    content: Union[str, List[Dict[str, Any]]]


class ChatRequest(BaseModel):
    """Request model for POST /api/chat"""
    messages: List[ChatMessage] = Field(default_factory=list)


class ChatResponse(BaseModel):
    """Response model for POST /api/chat"""
    reply: str
