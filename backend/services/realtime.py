"""Socket.io server streaming execution progress to the browser."""

import socketio

sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins="*",
)


def client_room(client_id: str) -> str:
    return f"client_{client_id}"


@sio.event
async def connect(sid, environ):
    print(f"[Socket] Connected: {sid}")


@sio.event
async def disconnect(sid):
    print(f"[Socket] Disconnected: {sid}")


@sio.event
async def join_execution(sid, data):
    client_id = (data or {}).get("clientId")
    if not client_id:
        return
    await sio.enter_room(sid, client_room(client_id))
    await sio.emit("execution_joined", {"clientId": client_id}, to=sid)


async def publish_progress(client_id: str, payload: dict) -> None:
    await sio.emit("execution_progress", payload, room=client_room(client_id))


async def publish_completed(client_id: str, payload: dict) -> None:
    await sio.emit("execution_completed", payload, room=client_room(client_id))
