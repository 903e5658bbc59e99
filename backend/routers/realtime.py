from fastapi import APIRouter, WebSocket, status

router = APIRouter()


@router.websocket("/ws")
async def hardware_log_stream(websocket: WebSocket):
    """Live hw_log events for dashboards. History comes from GET /api/hardware/logs."""
    settings = websocket.app.state.settings
    origin = websocket.headers.get("origin")
    if origin and "*" not in settings.cors_origins and origin not in settings.cors_origins:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.app.state.broadcaster.serve(websocket)
