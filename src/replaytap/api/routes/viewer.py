"""Server-rendered viewer page."""

import asyncio
import logging

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

import replaytap.api.app as app_module
from replaytap.errors import error_page
from replaytap.models import RecordingSession
from replaytap.viewer import Viewer, render_page

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/view/{recording_id}", response_class=HTMLResponse)
async def view_recording(
    recording_id: str,
    t: float = 0,
    console: str = "all",
    network: str = "all",
    detail: int | None = None,
    console_detail: int | None = None,
) -> HTMLResponse:
    """Render the viewer page at a clock position.

    Args:
        recording_id: Store id
        t: Clock position in ms
        console: Console facet
        network: Network facet
        detail: Network entry with an open detail pane
        console_detail: Console entry with an open detail pane

    Returns:
        Viewer page, or the error view with status 404
    """
    if not app_module.app_state:
        return HTMLResponse(error_page("Server not initialized"), status_code=503)

    state = app_module.app_state

    def build() -> str | None:
        snapshot = state.store.get_recording(recording_id)
        if snapshot is None:
            return None

        viewer = Viewer.from_session(RecordingSession.from_snapshot(snapshot), state.config, recording_id)
        viewer.console.select_facet(console)
        viewer.network.select_facet(network)
        viewer.seek(t)
        if detail is not None:
            viewer.network.toggle_detail(detail)
        if console_detail is not None:
            viewer.console.toggle_detail(console_detail)
        return render_page(viewer)

    page = await asyncio.to_thread(build)
    if page is None:
        logger.info(f"Viewer requested for unknown recording {recording_id!r}")
        return HTMLResponse(error_page(), status_code=404)
    return HTMLResponse(page)
