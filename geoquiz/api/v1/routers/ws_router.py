import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Query
from pydantic import TypeAdapter, ValidationError

from ...deps import ServiceDep
from ....services.quiz_screen import QuizScreenService, ScreenNotFoundError
from ....ws.schemas import (
    ClientAction,
    EventPayload,
    ServerError,
    ServerSaved,
    ServerScreen,
    ServerToast,
)

log = logging.getLogger(__name__)

ws_router = APIRouter()
_events = TypeAdapter(EventPayload)


async def _send_error(websocket: WebSocket, message: str) -> None:
    await websocket.send_text(ServerError(message=message).model_dump_json())


async def _handle(websocket: WebSocket, svc: QuizScreenService, session_id: str, raw: str) -> None:
    try:
        evt = _events.validate_python(json.loads(raw))
    except ValueError as e:
        # json.JSONDecodeError and pydantic's ValidationError are both ValueErrors
        msg = "Invalid event" if isinstance(e, ValidationError) else "Malformed JSON"
        log.debug("Rejected event from screen %s: %s", session_id, e)
        await _send_error(websocket, msg)
        return

    if isinstance(evt, ClientAction):
        log.debug("Action %s on screen %s", evt.action, session_id)
        result = svc.dispatch(session_id, evt.action)
        await websocket.send_text(ServerScreen(**result["screen"]).model_dump_json())
        if "toast" in result:
            await websocket.send_text(ServerToast(**result["toast"]).model_dump_json())
    else:
        index = await svc.save_instance_state(session_id)
        await websocket.send_text(ServerSaved(index=index).model_dump_json())


@ws_router.websocket("/ws")
async def ws_endpoint(
    websocket: WebSocket,
    svc: ServiceDep,
    sessionId: str | None = Query(default=None, min_length=1, max_length=128),
) -> None:
    await websocket.accept()
    screen = await svc.create(sessionId, attach=True)
    session_id = screen["sessionId"]
    log.info("WebSocket attached to screen %s", session_id)
    await websocket.send_text(ServerScreen(**screen).model_dump_json())

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))
            raw = message.get("text")
            if raw is None:
                await _send_error(websocket, "Expected a text frame")
                continue
            await _handle(websocket, svc, session_id, raw)

    except WebSocketDisconnect:
        log.info("WebSocket detached from screen %s", session_id)

    except ScreenNotFoundError:
        log.info("Screen %s destroyed while attached, closing", session_id)
        await _send_error(websocket, "Screen session not found")
        await websocket.close()

    finally:
        # the screen outlives the socket while other sockets still drive it
        if svc.detach(session_id):
            try:
                await svc.save_instance_state(session_id)
            except ScreenNotFoundError:
                # destroyed over REST while the socket was open
                pass
            except Exception:
                log.exception("Saving screen %s on disconnect failed", session_id)
            finally:
                svc.discard(session_id)
