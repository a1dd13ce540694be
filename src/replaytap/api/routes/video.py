"""Video byte delivery. Range requests are handled by FileResponse."""

import asyncio
from typing import Any

from fastapi import APIRouter
from fastapi.responses import FileResponse, JSONResponse

import replaytap.api.app as app_module

router = APIRouter(prefix="/api/recordings")


@router.get("/{recording_id}/video")
async def get_video(recording_id: str) -> Any:
    """Stream the recording's video file, or 404 when there is none."""
    if not app_module.app_state:
        return JSONResponse({"ok": False, "error": "replaytap not initialized"}, status_code=503)

    path = await asyncio.to_thread(app_module.app_state.store.get_video_path, recording_id)
    if path is None:
        return JSONResponse({"ok": False, "error": "Video not found"}, status_code=404)
    return FileResponse(path, media_type="video/webm")
