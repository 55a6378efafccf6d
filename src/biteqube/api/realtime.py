"""Websocket relay from the in-process change feed to a browser."""

import asyncio
import contextlib

from fastapi import WebSocket, WebSocketDisconnect, status

from biteqube.domain.errors import AuthError
from biteqube.domain.realtime import ChangeEvent


async def relay_changes(websocket: WebSocket, token: str, table: str) -> None:
    """Push row changes on ``table`` for the token's user until disconnect."""
    container = websocket.app.state.container
    try:
        user = container.auth_service.current_user(token)
    except AuthError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    await websocket.accept()
    queue: asyncio.Queue[ChangeEvent] = asyncio.Queue()
    unsubscribe = container.change_feed.subscribe(table, user.id, queue.put_nowait)
    receiver = asyncio.create_task(_wait_for_disconnect(websocket))
    try:
        while not receiver.done():
            getter = asyncio.create_task(queue.get())
            done, _ = await asyncio.wait(
                {getter, receiver}, return_when=asyncio.FIRST_COMPLETED
            )
            if getter not in done:
                getter.cancel()
                break
            event = getter.result()
            await websocket.send_json(
                {
                    "table": event.table,
                    "eventType": event.event_type,
                    "new": event.new,
                    "old": event.old,
                }
            )
    finally:
        unsubscribe()
        receiver.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await receiver


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    with contextlib.suppress(WebSocketDisconnect):
        while True:
            await websocket.receive_text()
