"""
Static file route

Serves the single-page frontend from the configured content root.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, PlainTextResponse

from app.dependencies import get_settings
from core.config import Settings

router = APIRouter()


@router.get("/{path:path}", include_in_schema=False)
async def serve_static(path: str, settings: Settings = Depends(get_settings)):
    """Serve a file from the static root; '/' maps to index.html"""
    root = settings.static_dir.resolve()
    target = (root / (path or "index.html")).resolve()

    if root not in target.parents or not target.is_file():
        return PlainTextResponse("Not found", status_code=404)

    return FileResponse(target)
