"""
Realtime fan-out of newly ingested hardware logs.

Clients connect over WebSocket and receive {"event": ..., "payload": ...}
messages. Delivery is best-effort: nothing is queued for clients that are
offline and nothing is retried. A client that cannot take a message within
SEND_TIMEOUT is dropped so it cannot hold up the publisher.
"""

import asyncio
import logging
from typing import Any, Dict

from fastapi import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)

HW_LOG_EVENT = "hw_log"

# Seconds a single client may take to accept one message before it is dropped
SEND_TIMEOUT = 2.0


class HardwareLogBroadcaster:
    def __init__(self, send_timeout: float = SEND_TIMEOUT):
        self.clients: set[WebSocket] = set()
        self.send_timeout = send_timeout
        # One publish at a time keeps per-client order equal to publish order
        self._publish_lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        logger.info("WebSocket client connected. %d total", len(self.clients))

    def disconnect(self, websocket: WebSocket) -> None:
        self.clients.discard(websocket)
        logger.info("WebSocket client disconnected. %d remaining", len(self.clients))

    async def serve(self, websocket: WebSocket) -> None:
        """Hold a client connection open until it goes away."""
        await self.connect(websocket)
        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
                # Clients may ping to check the channel; anything else is ignored
                if (message.get("text") or "").strip().lower() == "ping":
                    await websocket.send_json({"event": "pong"})
        except WebSocketDisconnect:
            pass
        finally:
            self.disconnect(websocket)

    async def broadcast(self, event: str, payload: Dict[str, Any]) -> int:
        """Send one event to every connected client. Returns how many got it."""
        message = {"event": event, "payload": payload}
        async with self._publish_lock:
            if not self.clients:
                return 0

            targets = list(self.clients)
            results = await asyncio.gather(
                *(asyncio.wait_for(ws.send_json(message), self.send_timeout) for ws in targets),
                return_exceptions=True,
            )

            dead = set()
            for ws, result in zip(targets, results):
                if isinstance(result, BaseException):
                    logger.warning("Dropping WebSocket client after send failure: %r", result)
                    dead.add(ws)

            self.clients -= dead
            return len(self.clients)

    async def publish_hardware_log(self, payload: Dict[str, Any]) -> None:
        """Fire-and-forget publish; failures are logged, never raised."""
        try:
            await self.broadcast(HW_LOG_EVENT, payload)
        except Exception:
            logger.exception("hw_log broadcast failed")
