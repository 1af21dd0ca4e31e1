"""
Pydantic models for episode analysis requests/responses
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict


class EpisodeReference(BaseModel):
    """Normalized identity of a podcast episode resolved from a shared link"""
    model_config = ConfigDict(frozen=True)

    podcast: str = ""
    episode: str = ""
    description: str = ""
    image: str = ""


class AnalyzeRequest(BaseModel):
    """Request model for POST /api/analyze"""
    url: Optional[str] = None


class AnalyzeResponse(BaseModel):
    """Response model for POST /api/analyze"""
    podcast: str
    episode: str
    description: str
    image: str
    analysis: Dict[str, Any]
