"""SSE Manager: in-process event broadcaster for dashboard notifications."""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from typing import Any

logger = logging.getLogger(__name__)


def format_sse(event_type: str, data: dict[str, Any]) -> str:
    """Render one Server-Sent Event frame."""
    return f"event: {event_type}\ndata: {json.dumps(data, default=str)}\n\n"


class SSEManager:
    """Manages SSE client connections and broadcasts toast, discovery and
    migration events.

    Each connected client gets its own asyncio.Queue. Broadcasting pushes
    the event to all queues. Clients consume events via an async generator.
    """

    def __init__(self, max_queue_size: int = 100) -> None:
        self._queues: list[asyncio.Queue[str | None]] = []
        self._max_queue_size = max_queue_size

    async def subscribe(self) -> AsyncGenerator[str, None]:
        """Subscribe to SSE events. Yields formatted SSE strings.

        The generator automatically unsubscribes when the client disconnects.
        """
        queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=self._max_queue_size)
        self._queues.append(queue)
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
        finally:
            if queue in self._queues:
                self._queues.remove(queue)

    async def broadcast(self, event_type: str, data: dict[str, Any]) -> None:
        """Broadcast an SSE event to all connected clients."""
        sse_message = format_sse(event_type, data)
        dead_queues: list[asyncio.Queue[str | None]] = []

        for queue in self._queues:
            try:
                queue.put_nowait(sse_message)
            except asyncio.QueueFull:
                dead_queues.append(queue)
                logger.warning("SSE client queue full, disconnecting")

        for q in dead_queues:
            self._queues.remove(q)
            # Drop one pending frame so the sentinel fits.
            q.get_nowait()
            q.put_nowait(None)

    async def toast(self, title: str, description: str, variant: str = "default") -> None:
        await self.broadcast(
            "toast", {"title": title, "description": description, "variant": variant}
        )

    async def shutdown(self) -> None:
        """Disconnect all connected clients."""
        for queue in self._queues:
            if queue.full():
                queue.get_nowait()
            queue.put_nowait(None)
        self._queues.clear()

    @property
    def client_count(self) -> int:
        return len(self._queues)
