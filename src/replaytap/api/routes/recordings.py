"""Recording snapshot endpoint."""

import asyncio
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse

import replaytap.api.app as app_module

router = APIRouter(prefix="/api/recordings")


@router.get("/{recording_id}")
async def get_recording(recording_id: str) -> Any:
    """Get the full recording snapshot.

    Args:
        recording_id: Store id

    Returns:
        {ok: true, metadata, consoleLogs, networkRequests, webSocketLogs} or 404
    """
    if not app_module.app_state:
        return JSONResponse({"ok": False, "error": "replaytap not initialized"}, status_code=503)

    store = app_module.app_state.store
    data = await asyncio.to_thread(store.get_recording, recording_id)
    if data is None:
        return JSONResponse({"ok": False, "error": "Recording not found"}, status_code=404)
    return {"ok": True, **data}
