"""Server-sent event stream for toasts, migration progress and discovery changes."""

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from ohshop_admin.application.services import SSEManager
from ohshop_admin.infrastructure.dependencies import get_sse_manager

router = APIRouter(tags=["Events"])


@router.get("/events")
async def event_stream(
    sse: SSEManager = Depends(get_sse_manager),
) -> StreamingResponse:
    """Clients connect via EventSource and receive ``toast``, ``migration``
    and ``discovery`` events."""
    return StreamingResponse(
        sse.subscribe(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
